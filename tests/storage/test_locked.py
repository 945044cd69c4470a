"""Tests for the locked whole-file read/write helpers."""

import fcntl

import pytest

from signage import storage
from signage.errors import InternalError


def test_write_then_read(tmp_path):
    path = tmp_path / "doc.json"
    storage.write_json(path, {"owner": "alice", "slides": []})
    assert storage.read_json(path) == {"owner": "alice", "slides": []}


def test_write_overwrites_fully(tmp_path):
    path = tmp_path / "doc.txt"
    storage.write_locked(path, "a much longer first version")
    storage.write_locked(path, "short")
    assert storage.read_locked(path) == "short"


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        storage.read_locked(tmp_path / "missing.json")


def test_lock_timeout(tmp_path):
    path = tmp_path / "busy.json"
    storage.write_json(path, {})
    with open(path) as holder:
        fcntl.flock(holder.fileno(), fcntl.LOCK_EX)
        try:
            with pytest.raises(InternalError, match="Timed out"):
                storage.read_locked(path, timeout=0.05)
            with pytest.raises(InternalError, match="Timed out"):
                storage.write_locked(path, "{}", timeout=0.05)
        finally:
            fcntl.flock(holder.fileno(), fcntl.LOCK_UN)
    # Lock released: plain reads work again and the content is untouched.
    assert storage.read_json(path, timeout=0.05) == {}
