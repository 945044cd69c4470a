"""Tests for storage configuration and init_storage()."""

import pytest

from signage import storage
from signage.app import create_app
from signage.errors import InternalError


def test_init_storage_creates_dirs(tmp_path):
    cfg = storage.init_storage(tmp_path / "data")
    assert cfg.queues_path().is_dir()
    assert cfg.slides_path().is_dir()
    assert storage.config() is cfg


def test_init_storage_coerces_string_override(tmp_path):
    cfg = storage.init_storage(tmp_path / "data", queue_name_max_len="8")
    assert cfg.queue_name_max_len == 8


def test_init_storage_rejects_bad_override(tmp_path):
    with pytest.raises(InternalError, match="Invalid storage configuration"):
        storage.init_storage(tmp_path / "data", queue_name_max_len="lots")


def test_create_app_reads_queue_name_max_len(tmp_path, monkeypatch):
    monkeypatch.setenv("QUEUE_NAME_MAX_LEN", "4")
    create_app(tmp_path / "data")
    assert storage.config().queue_name_max_len == 4


def test_create_app_bad_queue_name_max_len(tmp_path, monkeypatch):
    monkeypatch.setenv("QUEUE_NAME_MAX_LEN", "four")
    with pytest.raises(InternalError, match="queue_name_max_len"):
        create_app(tmp_path / "data")
