from __future__ import annotations

import pytest

from src.student_portal.student_portal.core.exceptions import StorageError
from src.student_portal.student_portal.storage.factory import build_storage
from src.student_portal.student_portal.storage.json_file_storage import JSONFileStorage
from src.student_portal.student_portal.storage.memory_storage import InMemoryStorage


def test_json_file_storage_roundtrip(tmp_path):
    storage = JSONFileStorage(tmp_path / "blobs")

    assert storage.get_item("auth-storage") is None
    storage.set_item("auth-storage", {"user": None, "registry": []})
    storage.set_item("auth-storage", {"user": None, "registry": [{"id": "1"}]})

    assert storage.get_item("auth-storage") == {"user": None, "registry": [{"id": "1"}]}
    assert sorted(p.name for p in (tmp_path / "blobs").iterdir()) == ["auth-storage.json"]

    storage.remove_item("auth-storage")
    assert storage.get_item("auth-storage") is None


def test_json_file_storage_corrupted_blob(tmp_path):
    (tmp_path / "dashboard-storage.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        JSONFileStorage(tmp_path).get_item("dashboard-storage")


def test_json_file_storage_rejects_path_like_keys(tmp_path):
    with pytest.raises(StorageError):
        JSONFileStorage(tmp_path).set_item("../escape", {})


def test_memory_storage_copies_values():
    storage = InMemoryStorage()
    value = {"notifications": []}
    storage.set_item("dashboard-storage", value)

    value["notifications"].append("mutated")

    assert storage.get_item("dashboard-storage") == {"notifications": []}


def test_build_storage(tmp_path):
    assert isinstance(build_storage(backend="json", storage_dir=str(tmp_path)), JSONFileStorage)
    assert isinstance(build_storage(backend="memory", storage_dir=""), InMemoryStorage)
    with pytest.raises(StorageError):
        build_storage(backend="redis", storage_dir="")
