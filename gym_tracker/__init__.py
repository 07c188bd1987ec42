"""
Gym program tracker package.

This package provides tools for logging sessions of a fixed 4-day
workout program, keeping the session history in a local JSON store,
and projecting per-exercise progress into summaries and charts.
"""

__version__ = "0.1.0"
