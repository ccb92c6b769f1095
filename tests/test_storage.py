from __future__ import annotations

import json
from pathlib import Path

import pytest

from pytuner.exceptions import TunerStorageError
from pytuner.storage import FileBlobStorage, MemoryBlobStorage


def test_file_storage_missing_blob_reads_none(tmp_path: Path) -> None:
    assert FileBlobStorage(tmp_path).read("preferences") is None


def test_file_storage_write_then_read(tmp_path: Path) -> None:
    storage = FileBlobStorage(tmp_path / "state")
    storage.write("preferences", {"governor": "ondemand", "nested": {"a": 1}})

    assert storage.read("preferences") == {"governor": "ondemand", "nested": {"a": 1}}
    assert json.loads((tmp_path / "state" / "preferences.json").read_text())["governor"] == "ondemand"
    assert not list((tmp_path / "state").glob("*.tmp"))


def test_file_storage_invalid_json_raises(tmp_path: Path) -> None:
    (tmp_path / "preferences.json").write_text("not valid json {{{")

    with pytest.raises(TunerStorageError):
        FileBlobStorage(tmp_path).read("preferences")


def test_file_storage_undecodable_bytes_raise(tmp_path: Path) -> None:
    (tmp_path / "preferences.json").write_bytes(b'{"theme": "\xff\xfe"}')

    with pytest.raises(TunerStorageError):
        FileBlobStorage(tmp_path).read("preferences")


def test_file_storage_non_object_raises(tmp_path: Path) -> None:
    (tmp_path / "preferences.json").write_text("[1, 2, 3]")

    with pytest.raises(TunerStorageError):
        FileBlobStorage(tmp_path).read("preferences")


def test_file_storage_unserializable_value_raises(tmp_path: Path) -> None:
    with pytest.raises(TunerStorageError):
        FileBlobStorage(tmp_path).write("preferences", {"bad": object()})
    assert not list(tmp_path.glob("*.tmp"))


def test_memory_storage_copies_in_and_out() -> None:
    blob = {"voltages": "1 2"}
    storage = MemoryBlobStorage()
    storage.write("preferences", blob)
    blob["voltages"] = "changed"

    read = storage.read("preferences")
    assert read == {"voltages": "1 2"}
    assert read is not storage.read("preferences")
