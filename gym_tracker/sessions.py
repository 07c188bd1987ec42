"""
Session store updates.

Pure functions that take a Store and return a new Store: composing a
session from form input, upserting it by date, deleting and clearing.
Persisting the result is the caller's job.
"""

import logging
import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .models import (
    Cardio,
    Entry,
    InvalidSessionError,
    Session,
    Store,
    is_valid_date,
    parse_number,
)
from .program import get_day, is_known_day
from .analyzer import seed_default_entries


logger = logging.getLogger(__name__)

ENTRY_FIELDS = ("weight", "sets", "reps")


def _validate(session_date: str, day_key: str) -> None:
    if not is_valid_date(session_date):
        raise InvalidSessionError(f"Invalid session date: {session_date!r}")
    if not is_known_day(day_key):
        raise InvalidSessionError(f"Unknown workout day: {day_key!r}")


def _utc_timestamp() -> str:
    """Current UTC time as an ISO timestamp with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce_entry(value: Any) -> Entry:
    if value is None:
        return Entry()
    if isinstance(value, Entry):
        return Entry.from_input(value.weight, value.sets, value.reps)
    return Entry.from_dict(value)


def compose_session(
    session_date: str,
    day_key: str,
    entries: Mapping[str, Any],
    cardio_minutes: Any = None,
    notes: str = "",
    created_at: Optional[str] = None,
) -> Session:
    """
    Build a fresh Session from raw log form values.

    Only the day's exercises are kept; an exercise missing from
    ``entries`` is recorded with every field empty. Numeric input is
    normalized with parse_number.

    Parameters:
        session_date: ISO calendar date (YYYY-MM-DD).
        day_key: Program day the session belongs to.
        entries: Exercise id to Entry, or to a dict of raw field values.
        cardio_minutes: Raw cardio minutes value.
        notes: Free-form notes, stored trimmed.
        created_at: Override for the creation timestamp.

    Raises:
        InvalidSessionError: If the date or day key is invalid.
    """
    _validate(session_date, day_key)
    day = get_day(day_key)

    clean_entries = {
        exercise.id: _coerce_entry(entries.get(exercise.id))
        for exercise in day.exercises
    }

    return Session(
        id=f"{session_date}-{day_key}-{secrets.token_hex(6)}",
        date=session_date,
        day_key=day_key,
        day_name=day.title,
        cardio=Cardio(type=day.cardio_type, minutes=parse_number(cardio_minutes)),
        notes=(notes or "").strip(),
        entries=clean_entries,
        created_at=created_at or _utc_timestamp(),
    )


def upsert_session(store: Store, session: Session) -> Store:
    """
    Merge a session into the store, returning a new Store.

    A session logged for the same date and day replaces that one in
    place; failing that, any session on the same date is replaced in
    place; otherwise the session is appended. This keeps at most one
    session per date.

    Raises:
        InvalidSessionError: If the session's date or day key is invalid.
    """
    _validate(session.date, session.day_key)

    sessions = list(store.sessions)

    for i, existing in enumerate(sessions):
        if existing.date == session.date and existing.day_key == session.day_key:
            sessions[i] = session
            logger.debug(f"Replaced session for {session.date} ({session.day_key})")
            return Store(sessions=sessions)

    for i, existing in enumerate(sessions):
        if existing.date == session.date:
            sessions[i] = session
            logger.debug(
                f"Replaced {existing.day_key} session on {session.date} "
                f"with {session.day_key}"
            )
            return Store(sessions=sessions)

    sessions.append(session)
    return Store(sessions=sessions)


def delete_session(store: Store, session_id: str) -> Store:
    """Remove the session with the given id. Unknown ids are a no-op."""
    return Store(sessions=[s for s in store.sessions if s.id != session_id])


def clear_sessions(store: Store) -> Store:
    """Return an empty store."""
    if store.sessions:
        logger.info(f"Clearing {len(store.sessions)} sessions")
    return Store()


def sessions_by_date(store: Store) -> Dict[str, Session]:
    """Map each logged date to its session."""
    return {s.date: s for s in store.sessions}


def history(store: Store) -> List[Session]:
    """Sessions sorted newest date first."""
    return sorted(store.sessions, key=lambda s: s.date, reverse=True)


@dataclass
class LogDraft:
    """Pre-filled values of the log form for one date and day."""

    date: str
    day_key: str
    cardio_minutes: Optional[float] = None
    notes: str = ""
    entries: Dict[str, Entry] = field(default_factory=dict)

    def update_entry(self, exercise_id: str, field_name: str, value: Any) -> None:
        """Set one field of an exercise entry from raw input."""
        if field_name not in ENTRY_FIELDS:
            raise ValueError(f"Unknown entry field: {field_name!r}")
        entry = self.entries.get(exercise_id, Entry())
        self.entries[exercise_id] = replace(entry, **{field_name: parse_number(value)})

    def to_session(self, created_at: Optional[str] = None) -> Session:
        """Compose the session this draft would save."""
        return compose_session(
            self.date,
            self.day_key,
            self.entries,
            cardio_minutes=self.cardio_minutes,
            notes=self.notes,
            created_at=created_at,
        )


def new_draft(store: Store, day_key: str, session_date: str) -> LogDraft:
    """
    Start a log form for a newly selected day.

    Weights are seeded from history (see seed_default_entries) and the
    cardio minutes come from the day's default.

    Raises:
        InvalidSessionError: If the day key is unknown.
    """
    if not is_known_day(day_key):
        raise InvalidSessionError(f"Unknown workout day: {day_key!r}")

    day = get_day(day_key)
    return LogDraft(
        date=session_date,
        day_key=day_key,
        cardio_minutes=day.cardio_default_minutes,
        entries=seed_default_entries(store, day_key),
    )


def draft_for_date(store: Store, session_date: str) -> Optional[LogDraft]:
    """
    Load the log form with the session stored for a date, exactly as saved.

    Returns:
        The filled draft, or None when nothing is logged on that date.
    """
    session = sessions_by_date(store).get(session_date)
    if session is None:
        return None

    if not is_known_day(session.day_key):
        logger.warning(f"Session {session.id} references unknown day {session.day_key}")
        return LogDraft(
            date=session.date,
            day_key=session.day_key,
            cardio_minutes=session.cardio.minutes,
            notes=session.notes,
            entries=dict(session.entries),
        )

    day = get_day(session.day_key)
    minutes = session.cardio.minutes
    if minutes is None:
        minutes = day.cardio_default_minutes

    return LogDraft(
        date=session.date,
        day_key=session.day_key,
        cardio_minutes=minutes,
        notes=session.notes,
        entries={
            exercise.id: replace(session.entries.get(exercise.id, Entry()))
            for exercise in day.exercises
        },
    )
