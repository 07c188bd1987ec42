"""
Workout progress analyzer.

Provides functions for projecting the session store into per-exercise
weight series and summary statistics, and for seeding the default
weights of a newly selected program day.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .models import Entry, Store
from .program import get_day


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressPoint:
    """Weight logged for an exercise on one date (None when not recorded)."""

    date: str
    weight: Optional[float]
    day_key: str


@dataclass(frozen=True)
class ProgressSummary:
    """Latest, previous and best weights for an exercise."""

    last: Optional[ProgressPoint] = None
    previous: Optional[ProgressPoint] = None
    delta: Optional[float] = None
    best: Optional[float] = None


def exercise_series(store: Store, exercise_id: str) -> List[ProgressPoint]:
    """
    Build the chart series for an exercise.

    Only sessions that hold an entry for the exercise contribute a
    point. Points are ordered by ISO date, so string comparison gives
    chronological order.
    """
    points = [
        ProgressPoint(
            date=session.date,
            weight=session.entries[exercise_id].weight,
            day_key=session.day_key,
        )
        for session in store.sessions
        if exercise_id in session.entries
    ]
    return sorted(points, key=lambda p: p.date)


def progress_summary(points: List[ProgressPoint]) -> ProgressSummary:
    """
    Summarize a series.

    Points without a numeric weight are skipped. Delta is rounded to two
    decimals and only present when there are at least two numeric points.
    """
    valid = [p for p in points if p.weight is not None]

    if not valid:
        return ProgressSummary()

    last = valid[-1]
    previous = valid[-2] if len(valid) > 1 else None
    delta = round(last.weight - previous.weight, 2) if previous else None
    best = max(p.weight for p in valid)

    return ProgressSummary(last=last, previous=previous, delta=delta, best=best)


def exercise_progress(store: Store, exercise_id: str) -> ProgressSummary:
    """Summary statistics for an exercise straight from the store."""
    return progress_summary(exercise_series(store, exercise_id))


def seed_default_entries(store: Store, day_key: str) -> Dict[str, Entry]:
    """
    Compute the starting entries when a program day is selected.

    For each exercise of the day the weight is the most recently saved
    non-empty weight in the store (walking the store back to front),
    falling back to the catalog starting value. Sets and reps always
    start empty.

    Raises:
        UnknownDayError: If the day key is not a program day.
    """
    day = get_day(day_key)
    seeded: Dict[str, Entry] = {}

    for exercise in day.exercises:
        weight = exercise.starting_value
        for session in reversed(store.sessions):
            entry = session.entries.get(exercise.id)
            if entry is not None and entry.has_weight:
                weight = entry.weight
                break
        seeded[exercise.id] = Entry(weight=weight)

    return seeded


def format_delta(delta: Optional[float]) -> str:
    """Format a weight change with an explicit sign for gains."""
    if delta is None:
        return ""
    if isinstance(delta, float) and delta.is_integer():
        delta = int(delta)
    return f"+{delta}" if delta > 0 else f"{delta}"


def format_weight(weight: Optional[float]) -> str:
    """Format a stored weight, "-" when not recorded."""
    if weight is None:
        return "-"
    if isinstance(weight, float) and weight.is_integer():
        return str(int(weight))
    return str(weight)
