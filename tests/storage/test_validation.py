"""Tests for queue / user name validation."""

import pytest

from signage import storage
from signage.errors import ArgumentError


# ── Queue names ──────────────────────────────────────────


def test_empty_name_rejected():
    with pytest.raises(ArgumentError, match="empty"):
        storage.validate_queue_name("", storage.config())


def test_too_long_name_rejected():
    max_len = storage.config().queue_name_max_len
    with pytest.raises(ArgumentError, match="too long"):
        storage.validate_queue_name("a" * (max_len + 1), storage.config())


@pytest.mark.parametrize("name", ["a b", "../etc", "sign.json", "ä", "name\n", "a/b"])
def test_invalid_characters_rejected(name):
    with pytest.raises(ArgumentError, match="invalid characters"):
        storage.validate_queue_name(name, storage.config())


@pytest.mark.parametrize("length", [1, 2, 16, 31, 32])
def test_allowed_characters_accepted(length):
    alphabet = "AZaz09_-"
    name = (alphabet * length)[:length]
    storage.validate_queue_name(name, storage.config())


def test_max_len_comes_from_config():
    cfg = storage.StorageConfig(root=storage.config().root, queue_name_max_len=4)
    storage.validate_queue_name("abcd", cfg)
    with pytest.raises(ArgumentError):
        storage.validate_queue_name("abcde", cfg)


# ── User names ───────────────────────────────────────────


def test_username_rules():
    storage.validate_username("alice_01", storage.config())
    with pytest.raises(ArgumentError):
        storage.validate_username("alice smith", storage.config())
    with pytest.raises(ArgumentError):
        storage.validate_username("", storage.config())
