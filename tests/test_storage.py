"""Tests for the export directory."""

from datetime import datetime

import pytest

from ecg_export.core.config import ExportConfig
from ecg_export.export.storage import ExportStorage


@pytest.fixture
def storage(tmp_path):
    return ExportStorage(ExportConfig(temp_root=tmp_path, documents_dir=tmp_path / "Documents"))


def test_directory_is_created_on_first_use(storage, tmp_path):
    target = tmp_path / "ECGExports"
    assert not target.exists()
    assert storage.directory == target
    assert target.is_dir()


def test_write_and_read(storage):
    path = storage.write("one.csv", "ECG Recording\n")
    assert path.parent == storage.directory
    assert storage.read(path) == "ECG Recording\n"
    assert path.read_bytes() == b"ECG Recording\n"


def test_file_names_are_timestamped_and_unique(storage, sinus_reading):
    now = datetime(2026, 10, 19, 13, 9, 0, 123456)
    first = storage.new_file_name(sinus_reading, now)
    second = storage.new_file_name(sinus_reading, now)

    assert first.startswith("ecg_20250411_093015_20261019_130900_123456_")
    assert first.endswith(".csv")
    assert first != second


def test_clear_removes_everything(storage):
    storage.write("a.csv", "a")
    storage.write("b.csv", "b")

    storage.clear()
    assert not storage._path.exists()

    # Recreated on next use
    assert list(storage.directory.iterdir()) == []


def test_clear_without_directory(storage):
    storage.clear()


def test_share_replaces_existing_copy(storage, tmp_path):
    path = storage.write("shared.csv", "new")
    documents = tmp_path / "Documents"
    documents.mkdir()
    (documents / "shared.csv").write_text("old")

    destination = storage.share(path)

    assert destination == documents / "shared.csv"
    assert destination.read_text() == "new"
    assert path.exists()


def test_default_locations():
    storage = ExportStorage()
    assert storage.documents_dir.name == "Documents"
    assert storage._path.name == "ECGExports"
