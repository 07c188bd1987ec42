"""
Tests for store persistence, export and import.
"""

import json
from datetime import date
from pathlib import Path

import pytest

from gym_tracker.models import Entry, Store
from gym_tracker.sessions import compose_session, upsert_session
from gym_tracker.storage import (
    BlobStore,
    StoreImportError,
    export_filename,
    export_store,
    import_store,
    load_store,
    parse_store,
    save_store,
)


KEY = "gymTrackerDataV1"


@pytest.fixture
def store():
    """Store with two sessions."""
    result = Store()
    result = upsert_session(
        result,
        compose_session(
            "2024-01-01",
            "d1",
            {"shoulder_press": {"weight": 40, "sets": 3, "reps": 10}},
            cardio_minutes=15,
            notes="first",
            created_at="2024-01-01T18:00:00.000Z",
        ),
    )
    result = upsert_session(
        result,
        compose_session(
            "2024-01-02",
            "d2",
            {"goblet_squat": {"weight": 16.5}},
            cardio_minutes="",
            created_at="2024-01-02T18:00:00.000Z",
        ),
    )
    return result


class TestBlobStore:
    """Tests for the file-backed key-value store."""

    def test_missing_key(self, tmp_path):
        """Test reading an unknown key returns None."""
        assert BlobStore(tmp_path).get("nothing") is None

    def test_set_and_get(self, tmp_path):
        """Test written blobs read back unchanged."""
        blobs = BlobStore(tmp_path / "data")
        blobs.set(KEY, '{"sessions": []}')

        assert blobs.get(KEY) == '{"sessions": []}'
        assert list((tmp_path / "data").glob("*.tmp")) == []

    def test_delete(self, tmp_path):
        """Test deleted keys read as missing."""
        blobs = BlobStore(tmp_path)
        blobs.set(KEY, "x")
        blobs.delete(KEY)
        blobs.delete(KEY)

        assert blobs.get(KEY) is None


class TestLoadAndSave:
    """Tests for loading and saving the store blob."""

    def test_round_trip(self, tmp_path, store):
        """Test a saved store loads back equal."""
        blobs = BlobStore(tmp_path)
        save_store(blobs, KEY, store)

        assert load_store(blobs, KEY) == store

    def test_missing_blob(self, tmp_path):
        """Test a missing blob loads as an empty store."""
        assert load_store(BlobStore(tmp_path), KEY) == Store()

    def test_unparseable_blob(self, tmp_path):
        """Test invalid JSON falls back to an empty store."""
        blobs = BlobStore(tmp_path)
        blobs.set(KEY, "{not json")

        assert load_store(blobs, KEY) == Store()

    def test_shape_mismatch(self, tmp_path):
        """Test a blob without a sessions list falls back to empty."""
        blobs = BlobStore(tmp_path)
        blobs.set(KEY, json.dumps({"sessions": "nope"}))

        assert load_store(blobs, KEY) == Store()

    def test_bad_record_keeps_rest_of_history(self, tmp_path, store):
        """Test one malformed session does not discard the others."""
        data = store.to_dict()
        broken = dict(data["sessions"][1])
        broken["entries"] = {"goblet_squat": None}
        broken["cardio"] = "Stair machine"
        data["sessions"] = [data["sessions"][0], broken, {"dayKey": "d3"}]
        blobs = BlobStore(tmp_path)
        blobs.set(KEY, json.dumps(data))

        loaded = load_store(blobs, KEY)

        assert [s.date for s in loaded] == ["2024-01-01", "2024-01-02"]
        assert loaded.sessions[0] == store.sessions[0]
        assert loaded.sessions[1].entries == {}
        assert loaded.sessions[1].cardio.minutes is None

    def test_undecodable_blob(self, tmp_path):
        """Test a blob that is not valid UTF-8 falls back to empty."""
        (tmp_path / f"{KEY}.json").write_bytes(b'{"sessions": [\xff]}')

        assert load_store(BlobStore(tmp_path), KEY) == Store()

    def test_unreadable_blob(self, tmp_path):
        """Test a blob path that cannot be read falls back to empty."""
        (tmp_path / f"{KEY}.json").mkdir()

        assert load_store(BlobStore(tmp_path), KEY) == Store()

    def test_failed_write_leaves_no_temp_file(self, tmp_path, monkeypatch):
        """Test a failed write removes its temporary file."""
        blobs = BlobStore(tmp_path)
        blobs.set(KEY, "old")

        def fail(self, target):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "replace", fail)

        with pytest.raises(OSError):
            blobs.set(KEY, "new")

        monkeypatch.undo()
        assert list(tmp_path.glob("*.tmp")) == []
        assert blobs.get(KEY) == "old"

    def test_legacy_empty_strings(self, tmp_path):
        """Test blobs using "" for empty values load as None."""
        blobs = BlobStore(tmp_path)
        blobs.set(
            KEY,
            json.dumps(
                {
                    "sessions": [
                        {
                            "id": "a",
                            "date": "2024-01-01",
                            "dayKey": "d1",
                            "dayName": "Day 1",
                            "cardio": {"type": "Incline walk", "minutes": ""},
                            "notes": "",
                            "entries": {
                                "shoulder_press": {"weight": 40, "sets": "", "reps": ""}
                            },
                            "createdAt": "2024-01-01T18:00:00.000Z",
                        }
                    ]
                }
            ),
        )

        loaded = load_store(blobs, KEY)

        assert loaded.sessions[0].entries["shoulder_press"] == Entry(weight=40)
        assert loaded.sessions[0].cardio.minutes is None


class TestExport:
    """Tests for JSON export."""

    def test_filename(self):
        """Test export files are named with the date."""
        assert export_filename(date(2024, 3, 5)) == "gym-tracker-export-2024-03-05.json"

    def test_pretty_printed(self, tmp_path, store):
        """Test export writes indented JSON in the stored shape."""
        path = export_store(store, tmp_path / "out", today=date(2024, 1, 3))

        assert path.name == "gym-tracker-export-2024-01-03.json"
        text = path.read_text()
        assert text.startswith('{\n  "sessions": [')
        assert json.loads(text) == store.to_dict()


class TestImport:
    """Tests for JSON import."""

    def test_export_then_import(self, tmp_path, store):
        """Test an exported store imports back equal."""
        path = export_store(store, tmp_path)

        assert import_store(path) == store

    def test_invalid_json(self, tmp_path):
        """Test unparseable files raise StoreImportError."""
        path = tmp_path / "bad.json"
        path.write_text("not json")

        with pytest.raises(StoreImportError):
            import_store(path)

    def test_wrong_shape(self, tmp_path):
        """Test files without a sessions list raise StoreImportError."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"date": "2024-01-01"}]))

        with pytest.raises(StoreImportError, match="expected"):
            import_store(path)

    def test_bad_session_record(self):
        """Test malformed session records are rejected."""
        with pytest.raises(StoreImportError):
            parse_store(json.dumps({"sessions": [{"dayKey": "d1"}]}))

    def test_missing_file(self, tmp_path):
        """Test unreadable files raise StoreImportError."""
        with pytest.raises(StoreImportError):
            import_store(tmp_path / "missing.json")
