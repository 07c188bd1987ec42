"""
Static workout program catalog.

Defines the four program days, their cardio blocks and the ordered
exercise list for each day. Nothing here is ever mutated.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


class UnknownDayError(KeyError):
    """Raised when a day key does not reference a program day."""


class UnknownExerciseError(KeyError):
    """Raised when an exercise id is not part of the program."""


@dataclass(frozen=True)
class Exercise:
    """A single catalog exercise."""

    id: str
    name: str
    unit: str = "kg"
    starting_value: Optional[float] = None


@dataclass(frozen=True)
class WorkoutDay:
    """One day of the program with its cardio block and exercises."""

    key: str
    title: str
    cardio_type: str
    cardio_default_minutes: float
    exercises: Tuple[Exercise, ...]

    @property
    def label(self) -> str:
        """Short label such as "D1"."""
        return self.key.upper()

    @property
    def exercise_ids(self) -> List[str]:
        return [e.id for e in self.exercises]


# ordered (key, short name) pairs for the weekly rotation
WEEK_SPLIT: Tuple[Tuple[str, str], ...] = (
    ("d1", "Day 1: Shoulders Heavy + Push + Abs"),
    ("d2", "Day 2: Light Lower + Stairs + Abs"),
    ("d3", "Day 3: Shoulders Volume + Pull + Abs"),
    ("d4", "Day 4: Upper Accessories + Conditioning"),
)

DEFAULT_DAY_KEY = "d1"
DEFAULT_EXERCISE_ID = "shoulder_press"

PROGRAM: Dict[str, WorkoutDay] = {
    "d1": WorkoutDay(
        key="d1",
        title="Day 1 - Shoulders (Heavy) + Push + Abs",
        cardio_type="Incline walk",
        cardio_default_minutes=15,
        exercises=(
            Exercise("shoulder_press", "Shoulder Press", starting_value=35),
            Exercise("lat_raise_machine", "Lateral Raise Machine", starting_value=20),
            Exercise("incline_db_press", "Incline DB Press", starting_value=22.5),
            Exercise("rear_delt_fly_cable", "Rear Delt Fly (cable)", starting_value=15),
            Exercise("triceps_pushdown", "Triceps Pushdown", starting_value=40),
            Exercise("ab_crunch_machine", "Ab Crunch Machine", starting_value=40),
        ),
    ),
    "d2": WorkoutDay(
        key="d2",
        title="Day 2 - Light Lower + Stairs + Abs",
        cardio_type="Stair machine",
        cardio_default_minutes=20,
        exercises=(
            Exercise("goblet_squat", "Goblet Squat"),
            Exercise("romanian_deadlift", "Romanian Deadlift"),
            Exercise("walking_lunges", "Walking Lunges"),
            Exercise("standing_calf_raise", "Standing Calf Raise"),
            Exercise("ab_crunch_machine", "Ab Crunch Machine"),
        ),
    ),
    "d3": WorkoutDay(
        key="d3",
        title="Day 3 - Shoulders (Volume) + Pull + Abs",
        cardio_type="Incline walk",
        cardio_default_minutes=15,
        exercises=(
            Exercise("upright_cable_row", "Upright Cable Row (wide grip)"),
            Exercise("lat_pulldown", "Lat Pulldown"),
            Exercise("face_pull", "Face Pull"),
            Exercise("cable_lateral_raise", "Cable Lateral Raise"),
            Exercise("triceps_pushdown", "Triceps Pushdown"),
            Exercise("ab_crunch_machine", "Ab Crunch Machine"),
        ),
    ),
    "d4": WorkoutDay(
        key="d4",
        title="Day 4 - Upper Accessories + Conditioning",
        cardio_type="Stairs or incline walk",
        cardio_default_minutes=15,
        exercises=(
            Exercise("arnold_press", "Arnold Press"),
            Exercise("rear_delt_fly", "Rear Delt Fly"),
            Exercise("biceps_curl", "Biceps Curl"),
            Exercise("hammer_curl", "Hammer Curl"),
        ),
    ),
}


def get_day(day_key: str) -> WorkoutDay:
    """
    Look up a program day.

    Raises:
        UnknownDayError: If the key is not one of the program days.
    """
    try:
        return PROGRAM[day_key]
    except KeyError:
        raise UnknownDayError(day_key) from None


def is_known_day(day_key: str) -> bool:
    return day_key in PROGRAM


def all_exercises() -> List[Exercise]:
    """
    Unique exercises across the whole program, in program order.

    An exercise that appears on several days is listed once, with the
    catalog entry of the first day it appears on.
    """
    seen: Dict[str, Exercise] = {}
    for day_key, _ in WEEK_SPLIT:
        for exercise in PROGRAM[day_key].exercises:
            if exercise.id not in seen:
                seen[exercise.id] = exercise
    return list(seen.values())


def get_exercise(exercise_id: str) -> Exercise:
    """
    Look up an exercise by id anywhere in the program.

    Raises:
        UnknownExerciseError: If no program day lists the exercise.
    """
    for exercise in all_exercises():
        if exercise.id == exercise_id:
            return exercise
    raise UnknownExerciseError(exercise_id)


def exercise_name(exercise_id: str) -> str:
    """Display name for an exercise id, falling back to the id itself."""
    try:
        return get_exercise(exercise_id).name
    except UnknownExerciseError:
        return exercise_id
