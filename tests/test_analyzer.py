"""
Tests for the progress analyzer.

Tests series construction, summary statistics and default seeding.
"""

import pytest

from gym_tracker.analyzer import (
    ProgressPoint,
    ProgressSummary,
    exercise_progress,
    exercise_series,
    format_delta,
    format_weight,
    progress_summary,
    seed_default_entries,
)
from gym_tracker.models import Entry, Session, Store
from gym_tracker.program import UnknownDayError


def session(session_date, weight, day_key="d1", exercise_id="shoulder_press"):
    """Stored session holding one entry."""
    return Session(
        id=f"{session_date}-{day_key}",
        date=session_date,
        day_key=day_key,
        day_name="",
        entries={exercise_id: Entry(weight=weight)},
    )


class TestExerciseSeries:
    """Tests for chart series construction."""

    def test_sorted_by_date(self):
        """Test points come back in ascending date order."""
        store = Store(
            sessions=[
                session("2024-01-15", 44),
                session("2024-01-01", 40),
                session("2024-01-08", 42),
            ]
        )

        points = exercise_series(store, "shoulder_press")

        assert [p.date for p in points] == ["2024-01-01", "2024-01-08", "2024-01-15"]
        assert [p.weight for p in points] == [40, 42, 44]
        assert all(a.date <= b.date for a, b in zip(points, points[1:]))

    def test_only_sessions_with_entry(self):
        """Test sessions without the exercise are skipped."""
        store = Store(
            sessions=[
                session("2024-01-01", 40),
                session("2024-01-02", 16, day_key="d2", exercise_id="goblet_squat"),
            ]
        )

        points = exercise_series(store, "shoulder_press")

        assert points == [ProgressPoint("2024-01-01", 40, "d1")]

    def test_empty_weight_is_gap(self):
        """Test an empty weight becomes None, not zero."""
        store = Store(sessions=[session("2024-01-01", None)])

        points = exercise_series(store, "shoulder_press")

        assert len(points) == 1
        assert points[0].weight is None

    def test_unknown_exercise(self):
        """Test an exercise nobody logged yields an empty series."""
        store = Store(sessions=[session("2024-01-01", 40)])

        assert exercise_series(store, "hammer_curl") == []


class TestProgressSummary:
    """Tests for last/previous/delta/best statistics."""

    def test_two_points(self):
        """Test delta and best for two logged weights."""
        points = [
            ProgressPoint("2024-01-01", 40, "d1"),
            ProgressPoint("2024-01-08", 42, "d1"),
        ]

        summary = progress_summary(points)

        assert summary.last == points[1]
        assert summary.previous == points[0]
        assert summary.delta == 2.00
        assert summary.best == 42

    def test_delta_rounded(self):
        """Test delta is rounded to two decimals."""
        points = [
            ProgressPoint("2024-01-01", 22.5, "d1"),
            ProgressPoint("2024-01-08", 25.15, "d1"),
        ]

        assert progress_summary(points).delta == 2.65

    def test_negative_delta(self):
        """Test a drop in weight gives a negative delta."""
        points = [
            ProgressPoint("2024-01-01", 45, "d1"),
            ProgressPoint("2024-01-08", 42.5, "d1"),
        ]

        summary = progress_summary(points)

        assert summary.delta == -2.5
        assert summary.best == 45

    def test_gaps_skipped(self):
        """Test empty weights are ignored for last and previous."""
        points = [
            ProgressPoint("2024-01-01", 40, "d1"),
            ProgressPoint("2024-01-08", 42, "d1"),
            ProgressPoint("2024-01-15", None, "d1"),
        ]

        summary = progress_summary(points)

        assert summary.last.date == "2024-01-08"
        assert summary.previous.date == "2024-01-01"
        assert summary.delta == 2

    def test_single_point(self):
        """Test one numeric point has no previous and no delta."""
        points = [
            ProgressPoint("2024-01-01", None, "d1"),
            ProgressPoint("2024-01-08", 40, "d1"),
        ]

        summary = progress_summary(points)

        assert summary.last.weight == 40
        assert summary.previous is None
        assert summary.delta is None
        assert summary.best == 40

    def test_no_numeric_points(self):
        """Test all fields are absent without numeric weights."""
        assert progress_summary([]) == ProgressSummary()
        assert progress_summary([ProgressPoint("2024-01-01", None, "d1")]) == (
            ProgressSummary()
        )

    def test_exercise_progress(self):
        """Test summary straight from the store."""
        store = Store(
            sessions=[session("2024-01-08", 42), session("2024-01-01", 40)]
        )

        summary = exercise_progress(store, "shoulder_press")

        assert summary.delta == 2
        assert summary.last.date == "2024-01-08"
        assert exercise_progress(store, "face_pull") == ProgressSummary()


class TestSeedDefaultEntries:
    """Tests for day-switch default weights."""

    def test_empty_store_uses_starting_value(self):
        """Test catalog starting values seed an empty store."""
        seeded = seed_default_entries(Store(), "d1")

        assert seeded["shoulder_press"].weight == 35
        assert seeded["shoulder_press"].sets is None
        assert seeded["shoulder_press"].reps is None
        assert list(seeded) == [
            "shoulder_press",
            "lat_raise_machine",
            "incline_db_press",
            "rear_delt_fly_cable",
            "triceps_pushdown",
            "ab_crunch_machine",
        ]

    def test_no_starting_value_is_empty(self):
        """Test exercises without history or start value stay empty."""
        seeded = seed_default_entries(Store(), "d4")

        assert all(entry == Entry() for entry in seeded.values())

    def test_most_recently_saved_wins(self):
        """Test the last saved session with a weight is used."""
        store = Store(
            sessions=[
                session("2024-01-01", 40),
                session("2024-01-08", 42),
                session("2024-01-15", None),
            ]
        )

        seeded = seed_default_entries(store, "d1")

        assert seeded["shoulder_press"] == Entry(weight=42)

    def test_history_from_other_day(self):
        """Test weights logged on another day seed shared exercises."""
        store = Store(
            sessions=[session("2024-01-03", 30, day_key="d3", exercise_id="ab_crunch_machine")]
        )

        seeded = seed_default_entries(store, "d2")

        assert seeded["ab_crunch_machine"].weight == 30
        assert seeded["goblet_squat"] == Entry()

    def test_sets_and_reps_never_seeded(self):
        """Test only the weight carries over."""
        stored = Session(
            id="s",
            date="2024-01-01",
            day_key="d1",
            day_name="",
            entries={"shoulder_press": Entry(weight=40, sets=3, reps=10)},
        )

        seeded = seed_default_entries(Store(sessions=[stored]), "d1")

        assert seeded["shoulder_press"] == Entry(weight=40)

    def test_unknown_day(self):
        """Test unknown days raise UnknownDayError."""
        with pytest.raises(UnknownDayError):
            seed_default_entries(Store(), "d8")


class TestFormatting:
    """Tests for display helpers."""

    def test_format_delta(self):
        """Test signed delta formatting."""
        assert format_delta(2.0) == "+2"
        assert format_delta(-1.5) == "-1.5"
        assert format_delta(0) == "0"
        assert format_delta(None) == ""

    def test_format_weight(self):
        """Test weight formatting."""
        assert format_weight(40.0) == "40"
        assert format_weight(22.5) == "22.5"
        assert format_weight(None) == "-"
