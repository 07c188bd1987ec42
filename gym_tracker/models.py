"""Data models for logged workout sessions."""

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterator, List, Optional


ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidSessionError(ValueError):
    """Raised when a session has an invalid date or unknown day key."""


def parse_number(value: Any) -> Optional[float]:
    """
    Normalize a raw numeric field.

    Blank, missing or unparseable input maps to None ("not recorded"),
    never to zero. Integral values come back as int so that 40 stays 40
    rather than 40.0 in stored JSON.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None

    return int(number) if number.is_integer() else number


def is_valid_date(value: Any) -> bool:
    """
    Check that value is a YYYY-MM-DD calendar date string.

    Other ISO forms (week dates such as "2024-W01-1", basic "20240101")
    are rejected so each calendar day has exactly one spelling.
    """
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        return False
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return False
    return parsed.isoformat() == value


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"session field '{key}' must be a string")
    return value


@dataclass
class Entry:
    """Weight, sets and reps recorded for one exercise in a session."""

    weight: Optional[float] = None
    sets: Optional[float] = None
    reps: Optional[float] = None

    @property
    def has_weight(self) -> bool:
        return self.weight is not None

    @classmethod
    def from_input(
        cls, weight: Any = None, sets: Any = None, reps: Any = None
    ) -> "Entry":
        """Build an entry from raw form values."""
        return cls(
            weight=parse_number(weight),
            sets=parse_number(sets),
            reps=parse_number(reps),
        )

    @classmethod
    def from_string(cls, entry_str: str) -> Optional["Entry"]:
        """
        Parse entry from comma-separated string.

        Expected format: "weight,sets,reps" where sets and reps are
        optional. Unparseable parts are recorded as empty.
        """
        if not entry_str or not entry_str.strip():
            return None

        parts = [p.strip() for p in entry_str.split(",")]
        if len(parts) > 3:
            return None

        parts += [""] * (3 - len(parts))
        return cls.from_input(*parts)

    @classmethod
    def from_dict(cls, data: Any) -> "Entry":
        if not isinstance(data, dict):
            raise ValueError("entry must be an object")
        return cls.from_input(data.get("weight"), data.get("sets"), data.get("reps"))

    def to_dict(self) -> dict:
        return {"weight": self.weight, "sets": self.sets, "reps": self.reps}


@dataclass
class Cardio:
    """Cardio block of a session."""

    type: str = ""
    minutes: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Cardio":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("cardio must be an object")
        cardio_type = data.get("type")
        return cls(
            type=cardio_type if isinstance(cardio_type, str) else "",
            minutes=parse_number(data.get("minutes")),
        )

    def to_dict(self) -> dict:
        return {"type": self.type, "minutes": self.minutes}


@dataclass
class Session:
    """One logged workout for a specific date and program day."""

    id: str
    date: str
    day_key: str
    day_name: str
    cardio: Cardio = field(default_factory=Cardio)
    notes: str = ""
    entries: Dict[str, Entry] = field(default_factory=dict)
    created_at: str = ""

    def entry_for(self, exercise_id: str) -> Optional[Entry]:
        """Entry recorded for an exercise, or None if not part of the session."""
        return self.entries.get(exercise_id)

    @classmethod
    def from_dict(cls, data: Any, strict: bool = True) -> "Session":
        """
        Create Session from its stored JSON form.

        Empty numeric values may be stored as "" or null; both load as None.
        With strict=False a malformed part of the record is dropped
        instead of rejecting the session: entries that are not objects
        are treated as absent, a non-object cardio block as empty and a
        missing day key as "". Only the date is always required.

        Raises:
            ValueError: If the record is not an object or lacks a date,
                        or (strict only) has a malformed part.
        """
        if not isinstance(data, dict):
            raise ValueError("session must be an object")

        session_date = _require_str(data, "date")
        if strict:
            day_key = _require_str(data, "dayKey")
        else:
            raw_day_key = data.get("dayKey")
            day_key = raw_day_key if isinstance(raw_day_key, str) else ""

        raw_entries = data.get("entries") or {}
        if not isinstance(raw_entries, dict):
            if strict:
                raise ValueError("session field 'entries' must be an object")
            raw_entries = {}
        if not strict:
            raw_entries = {k: v for k, v in raw_entries.items() if isinstance(v, dict)}

        raw_cardio = data.get("cardio")
        if not strict and not isinstance(raw_cardio, dict):
            raw_cardio = None

        notes = data.get("notes")
        session_id = data.get("id")
        created_at = data.get("createdAt")
        day_name = data.get("dayName")

        return cls(
            id=str(session_id) if session_id is not None else f"{session_date}-{day_key}",
            date=session_date,
            day_key=day_key,
            day_name=day_name if isinstance(day_name, str) else "",
            cardio=Cardio.from_dict(raw_cardio),
            notes=notes if isinstance(notes, str) else "",
            entries={
                str(exercise_id): Entry.from_dict(entry)
                for exercise_id, entry in raw_entries.items()
            },
            created_at=created_at if isinstance(created_at, str) else "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "dayKey": self.day_key,
            "dayName": self.day_name,
            "cardio": self.cardio.to_dict(),
            "notes": self.notes,
            "entries": {
                exercise_id: entry.to_dict()
                for exercise_id, entry in self.entries.items()
            },
            "createdAt": self.created_at,
        }


@dataclass
class Store:
    """
    Full ordered collection of sessions; the unit of persistence.

    Update functions never mutate a Store, they return a new one.
    """

    sessions: List[Session] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    @classmethod
    def from_dict(cls, data: Any, strict: bool = True) -> "Store":
        """
        Create Store from the persisted {"sessions": [...]} shape.

        With strict=False sessions are read leniently and a record that
        still cannot be read (not an object, no date) is skipped.

        Raises:
            ValueError: If the payload does not have that shape, or
                        (strict only) holds a malformed session.
        """
        if not isinstance(data, dict) or not isinstance(data.get("sessions"), list):
            raise ValueError("expected { sessions: [...] }")

        if strict:
            return cls(sessions=[Session.from_dict(item) for item in data["sessions"]])

        sessions = []
        for item in data["sessions"]:
            try:
                sessions.append(Session.from_dict(item, strict=False))
            except ValueError:
                continue
        return cls(sessions=sessions)

    def to_dict(self) -> dict:
        return {"sessions": [s.to_dict() for s in self.sessions]}
