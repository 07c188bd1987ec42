#!/usr/bin/env python
"""
Gym tracker CLI runner.

Usage:
    python run.py program              # show the 4-day program
    python run.py draft d1             # seeded log form for a day
    python run.py log d1 --entry shoulder_press=42,3,10
    python run.py history              # list logged sessions
    python run.py progress shoulder_press --plot
    python run.py export               # write a JSON export
    python run.py import FILE          # replace sessions from an export
    python run.py clear                # delete all sessions
"""

import sys
from pathlib import Path

# add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from gym_tracker.main import main

if __name__ == "__main__":
    main()
