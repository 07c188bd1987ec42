"""
Local persistence for the session store.

The store lives as a single JSON blob in a small key-value store backed
by one file per key. Also provides JSON export and import of the whole
store.
"""

import json
import logging
from datetime import date
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional, Union

from .models import Store


logger = logging.getLogger(__name__)

EXPORT_PREFIX = "gym-tracker-export"


class StoreImportError(ValueError):
    """Raised when an imported file is not a valid store export."""


class BlobStore:
    """Key-value store of text blobs, one file per key in a directory."""

    def __init__(self, directory: Path):
        """Initialize blob store rooted at directory."""
        self._dir = directory

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        """Read a blob, or None if the key was never written."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write a blob atomically via a temporary file and rename."""
        self._dir.mkdir(parents=True, exist_ok=True)
        temp_path = None
        try:
            with NamedTemporaryFile(
                "w", dir=self._dir, delete=False, encoding="utf-8", suffix=".tmp"
            ) as tmp:
                temp_path = Path(tmp.name)
                tmp.write(value)
            temp_path.replace(self._path(key))
        except Exception:
            # leave no stray temp file behind
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def parse_store(text: str, strict: bool = True) -> Store:
    """
    Parse a {"sessions": [...]} JSON document.

    Parameters:
        text: JSON text.
        strict: Reject the whole document on any malformed session.
                Otherwise unreadable sessions are skipped one at a time.

    Raises:
        StoreImportError: If the text is not JSON or has the wrong shape.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StoreImportError(f"Import failed: {e}") from e

    try:
        store = Store.from_dict(data, strict=strict)
    except ValueError as e:
        raise StoreImportError(f"Import failed: {e}") from e

    skipped = len(data["sessions"]) - len(store)
    if skipped:
        logger.warning(f"Skipped {skipped} unreadable sessions")
    return store


def load_store(blobs: BlobStore, key: str) -> Store:
    """
    Load the store from its blob.

    A missing, unreadable or malformed blob is ignored and an empty
    store is returned. Inside a well-formed blob only the individual
    sessions that cannot be read are dropped.
    """
    try:
        raw = blobs.get(key)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read stored data under '{key}': {e}")
        return Store()

    if not raw:
        return Store()

    try:
        store = parse_store(raw, strict=False)
    except StoreImportError as e:
        logger.warning(f"Ignoring stored data under '{key}': {e}")
        return Store()

    logger.info(f"Loaded {len(store)} sessions")
    return store


def save_store(blobs: BlobStore, key: str, store: Store) -> None:
    """Write the whole store back to its blob."""
    blobs.set(key, json.dumps(store.to_dict()))
    logger.debug(f"Saved {len(store)} sessions under '{key}'")


def export_filename(today: Optional[date] = None) -> str:
    """Export file name stamped with the given (default: current) date."""
    today = today or date.today()
    return f"{EXPORT_PREFIX}-{today.isoformat()}.json"


def export_store(
    store: Store, output_dir: Path, today: Optional[date] = None
) -> Path:
    """
    Export the store as a pretty-printed JSON file.

    Parameters:
        store: Store to export.
        output_dir: Directory to write into.
        today: Date used in the file name.

    Returns:
        Path of the written file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / export_filename(today)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(store.to_dict(), f, indent=2)
    logger.info(f"Exported {len(store)} sessions to {filepath}")
    return filepath


def import_store(filepath: Union[str, Path]) -> Store:
    """
    Read a store export. The result replaces the current store wholesale.

    Raises:
        StoreImportError: If the file cannot be read or is not a valid
                          export.
    """
    path = Path(filepath)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StoreImportError(f"Import failed: {e}") from e

    store = parse_store(text)
    logger.info(f"Imported {len(store)} sessions from {path}")
    return store
