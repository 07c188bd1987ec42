"""
Main entry point for the gym tracker.

Provides a CLI for logging sessions of the workout program, browsing
history, showing per-exercise progress and moving the store in and out
of JSON exports.
"""

import sys
import logging
import argparse
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from .config import AppConfig
from .models import Entry, InvalidSessionError, Session, Store
from .program import (
    PROGRAM,
    WEEK_SPLIT,
    UnknownDayError,
    UnknownExerciseError,
    all_exercises,
    exercise_name,
    get_day,
    get_exercise,
    is_known_day,
    DEFAULT_DAY_KEY,
    DEFAULT_EXERCISE_ID,
)
from .sessions import (
    LogDraft,
    clear_sessions,
    delete_session,
    draft_for_date,
    history,
    new_draft,
    upsert_session,
)
from .analyzer import exercise_series, progress_summary, format_delta, format_weight
from .storage import (
    BlobStore,
    StoreImportError,
    export_store,
    import_store,
    load_store,
    save_store,
)
from .visualizations import plot_exercise_progress


logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def open_store(config: AppConfig) -> Tuple[BlobStore, Store]:
    """Open the blob store and load the session store from it."""
    blobs = BlobStore(config.paths.data_dir)
    return blobs, load_store(blobs, config.store_key)


def parse_entry_arg(value: str) -> Tuple[str, Entry]:
    """
    Parse an --entry argument of the form "exercise_id=weight,sets,reps".

    Sets and reps are optional.
    """
    exercise_id, sep, rest = value.partition("=")
    entry = Entry.from_string(rest) if sep else None
    if not exercise_id.strip() or entry is None:
        raise argparse.ArgumentTypeError(
            f"invalid entry '{value}', expected EXERCISE=WEIGHT[,SETS[,REPS]]"
        )
    return exercise_id.strip(), entry


def format_entry(entry: Entry, unit: str = "kg") -> str:
    """Render an entry as "Weight: 40 kg | 3 x 10"."""
    text = f"Weight: {format_weight(entry.weight)} {unit}"
    if entry.sets is not None and entry.reps is not None:
        text += f" | {format_weight(entry.sets)} x {format_weight(entry.reps)}"
    return text


def print_session(session: Session) -> None:
    """Print one stored session."""
    minutes = format_weight(session.cardio.minutes)
    print(f"\n{session.date}  {session.day_name or session.day_key}")
    print(f"   id: {session.id}")
    print(f"   Cardio: {minutes} min ({session.cardio.type})")
    if session.notes:
        print(f"   Notes: {session.notes}")
    for exercise_id, entry in session.entries.items():
        print(f"     {exercise_name(exercise_id)}: {format_entry(entry)}")


def print_draft(draft: LogDraft) -> None:
    """Print a pre-filled log form."""
    if not is_known_day(draft.day_key):
        # imported session for a day outside the program
        print(f"\n{draft.date}  {draft.day_key or 'unknown day'}")
        print(f"   Cardio: {format_weight(draft.cardio_minutes)} min")
        for exercise_id, entry in draft.entries.items():
            print(f"     {exercise_id:<22} {exercise_name(exercise_id)}: {format_entry(entry)}")
        return

    day = get_day(draft.day_key)
    print(f"\n{draft.date}  {day.title}")
    print(
        f"   Cardio: {day.cardio_type}, "
        f"{format_weight(draft.cardio_minutes)} min"
    )
    for exercise in day.exercises:
        entry = draft.entries.get(exercise.id, Entry())
        print(f"     {exercise.id:<22} {exercise.name}: {format_entry(entry, exercise.unit)}")


def cmd_program(args: argparse.Namespace, config: AppConfig) -> None:
    """Show the weekly split and each day's exercises."""
    print("\n" + "=" * 60)
    print("WORKOUT PROGRAM")
    print("=" * 60)

    for day_key, name in WEEK_SPLIT:
        day = PROGRAM[day_key]
        print(f"\n[{day.label}] {name}")
        print(f"   Cardio: {day.cardio_type}, {day.cardio_default_minutes} min")
        for exercise in day.exercises:
            start = (
                f" (start {format_weight(exercise.starting_value)} {exercise.unit})"
                if exercise.starting_value is not None
                else ""
            )
            print(f"     {exercise.id:<22} {exercise.name}{start}")

    print("\n" + "=" * 60)


def cmd_draft(args: argparse.Namespace, config: AppConfig) -> None:
    """Show the seeded log form for a day."""
    _, store = open_store(config)
    print_draft(new_draft(store, args.day, args.date))


def cmd_log(args: argparse.Namespace, config: AppConfig) -> None:
    """Compose a session and save it into the store."""
    blobs, store = open_store(config)

    draft = new_draft(store, args.day, args.date)
    if args.no_defaults:
        draft.entries = {}

    day_ids = set(get_day(args.day).exercise_ids)
    for exercise_id, entry in args.entries or []:
        if exercise_id not in day_ids:
            logger.warning(f"{exercise_id} is not part of {args.day}, ignoring")
            continue
        draft.entries[exercise_id] = entry

    if args.cardio is not None:
        draft.cardio_minutes = args.cardio
    draft.notes = args.notes or ""

    session = draft.to_session()
    store = upsert_session(store, session)
    save_store(blobs, config.store_key, store)

    logger.info(f"Saved {session.day_key} session for {session.date}")
    print_session(session)


def cmd_show(args: argparse.Namespace, config: AppConfig) -> None:
    """Show the session logged on a date."""
    _, store = open_store(config)
    draft = draft_for_date(store, args.date)
    if draft is None:
        print(f"No session logged on {args.date}")
        return
    print_draft(draft)
    if draft.notes:
        print(f"   Notes: {draft.notes}")


def cmd_history(args: argparse.Namespace, config: AppConfig) -> None:
    """List sessions newest first."""
    _, store = open_store(config)
    sessions = history(store)
    if not sessions:
        print("No sessions logged yet.")
        return
    for session in sessions:
        print_session(session)


def cmd_delete(args: argparse.Namespace, config: AppConfig) -> None:
    """Delete a session by id."""
    blobs, store = open_store(config)
    updated = delete_session(store, args.session_id)
    if len(updated) == len(store):
        logger.warning(f"No session with id {args.session_id}")
        return
    save_store(blobs, config.store_key, updated)
    logger.info(f"Deleted session {args.session_id}")


def cmd_progress(args: argparse.Namespace, config: AppConfig) -> None:
    """Show progress for an exercise, optionally as a chart."""
    _, store = open_store(config)

    try:
        unit = get_exercise(args.exercise).unit
    except UnknownExerciseError:
        logger.warning(f"{args.exercise} is not in the program")
        unit = "kg"
    name = exercise_name(args.exercise)

    points = exercise_series(store, args.exercise)
    if not points:
        print("No data yet. Log a session to see your chart.")
        return

    summary = progress_summary(points)
    print(f"\n{name}")
    if summary.last:
        print(f"   Last: {format_weight(summary.last.weight)} {unit} ({summary.last.date})")
    if summary.previous:
        print(
            f"   Previous: {format_weight(summary.previous.weight)} {unit} "
            f"({summary.previous.date})"
        )
    if summary.delta is not None:
        print(f"   Change: {format_delta(summary.delta)} {unit}")
    if summary.best is not None:
        print(f"   Best: {format_weight(summary.best)} {unit}")

    for point in points:
        print(f"     {point.date}  {point.day_key}  {format_weight(point.weight)}")

    if args.plot:
        output_dir = config.paths.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        plot_exercise_progress(
            points,
            name,
            unit,
            output_dir / f"progress_{args.exercise}.png",
            show=not args.no_show,
        )


def cmd_exercises(args: argparse.Namespace, config: AppConfig) -> None:
    """List every exercise id in the program."""
    for exercise in all_exercises():
        print(f"{exercise.id:<22} {exercise.name}")


def cmd_export(args: argparse.Namespace, config: AppConfig) -> None:
    """Export the store to a JSON file."""
    _, store = open_store(config)
    output_dir = Path(args.output) if args.output else config.paths.output_dir
    path = export_store(store, output_dir)
    print(path)


def cmd_import(args: argparse.Namespace, config: AppConfig) -> None:
    """Replace the store with the contents of an export file."""
    blobs = BlobStore(config.paths.data_dir)
    store = import_store(args.file)
    save_store(blobs, config.store_key, store)
    print("Import complete.")


def cmd_clear(args: argparse.Namespace, config: AppConfig) -> None:
    """Delete every session after confirmation."""
    if not args.yes:
        answer = input("Delete all logged sessions? This cannot be undone. [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return

    blobs, store = open_store(config)
    save_store(blobs, config.store_key, clear_sessions(store))
    logger.info("All sessions deleted")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(description="Gym program tracker")
    subparsers = parser.add_subparsers(dest="command", help="Commands")
    today = date.today().isoformat()

    # program command
    subparsers.add_parser("program", help="Show the workout program")

    # exercises command
    subparsers.add_parser("exercises", help="List exercise ids")

    # draft command
    draft_parser = subparsers.add_parser("draft", help="Show the seeded log form")
    draft_parser.add_argument(
        "day", nargs="?", default=DEFAULT_DAY_KEY, choices=list(PROGRAM), help="Program day"
    )
    draft_parser.add_argument("--date", default=today, help="Session date")

    # log command
    log_parser = subparsers.add_parser("log", help="Log a session")
    log_parser.add_argument(
        "day", nargs="?", default=DEFAULT_DAY_KEY, choices=list(PROGRAM), help="Program day"
    )
    log_parser.add_argument("--date", default=today, help="Session date (YYYY-MM-DD)")
    log_parser.add_argument("--cardio", help="Cardio minutes")
    log_parser.add_argument("--notes", default="", help="Session notes")
    log_parser.add_argument(
        "--entry",
        dest="entries",
        action="append",
        type=parse_entry_arg,
        metavar="EXERCISE=WEIGHT[,SETS[,REPS]]",
        help="Recorded values for one exercise (repeatable)",
    )
    log_parser.add_argument(
        "--no-defaults",
        action="store_true",
        help="Do not fill unlisted exercises with seeded weights",
    )

    # show command
    show_parser = subparsers.add_parser("show", help="Show the session for a date")
    show_parser.add_argument("date", help="Session date (YYYY-MM-DD)")

    # history command
    subparsers.add_parser("history", help="List logged sessions")

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a session")
    delete_parser.add_argument("session_id", help="Session id")

    # progress command
    progress_parser = subparsers.add_parser("progress", help="Exercise progress")
    progress_parser.add_argument(
        "exercise", nargs="?", default=DEFAULT_EXERCISE_ID, help="Exercise id"
    )
    progress_parser.add_argument("--plot", action="store_true", help="Draw a chart")
    progress_parser.add_argument(
        "--no-show", action="store_true", help="Save plots without displaying"
    )

    # export command
    export_parser = subparsers.add_parser("export", help="Export sessions to JSON")
    export_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Custom output directory (default: output dir)",
    )

    # import command
    import_parser = subparsers.add_parser("import", help="Import sessions from JSON")
    import_parser.add_argument("file", help="Export file to import")

    # clear command
    clear_parser = subparsers.add_parser("clear", help="Delete all sessions")
    clear_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = AppConfig.load()

    commands = {
        "program": cmd_program,
        "exercises": cmd_exercises,
        "draft": cmd_draft,
        "log": cmd_log,
        "show": cmd_show,
        "history": cmd_history,
        "delete": cmd_delete,
        "progress": cmd_progress,
        "export": cmd_export,
        "import": cmd_import,
        "clear": cmd_clear,
    }

    try:
        commands[args.command](args, config)
    except (InvalidSessionError, StoreImportError) as e:
        logger.error(str(e))
        sys.exit(1)
    except UnknownDayError as e:
        logger.error(f"Unknown workout day: {e.args[0]}")
        sys.exit(1)


if __name__ == "__main__":
    main()
