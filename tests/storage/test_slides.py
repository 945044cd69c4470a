"""Tests for slide records."""

import pytest

from signage import storage
from signage.errors import ArgumentError, InternalError
from signage.storage import Slide


def _new_slide(**kwargs):
    fields = {"owner": "alice", "queue_name": "sign1", "name": "welcome"}
    fields.update(kwargs)
    return Slide.new(**fields)


# ── Create / load ────────────────────────────────────────


def test_new_slide_defaults():
    slide = _new_slide()
    assert len(slide.get_id()) == 32
    assert slide.get_index() == 0
    assert slide.public()["duration"] == 5000
    assert slide.public()["enabled"] is True


def test_write_and_load():
    slide = _new_slide(index=3, markup="[h1]Hi[/h1]")
    slide.write()

    loaded = Slide().load(slide.get_id())
    assert loaded.get_id() == slide.get_id()
    assert loaded.get_owner() == "alice"
    assert loaded.get_queue_name() == "sign1"
    assert loaded.get_index() == 3
    assert loaded.public()["markup"] == "[h1]Hi[/h1]"


def test_stored_file_omits_id():
    slide = _new_slide()
    slide.write()
    data = storage.read_json(slide.get_path())
    assert "id" not in data
    assert data["owner"] == "alice"


def test_load_missing_slide():
    with pytest.raises(ArgumentError, match="doesn't exist"):
        Slide().load("0" * 32)


def test_load_malformed_id():
    with pytest.raises(ArgumentError, match="Invalid slide id"):
        Slide().load("../queues/sign1")


def test_load_corrupt_json():
    (storage.slides_dir() / f"{'a' * 32}.json").write_text("{not json")
    with pytest.raises(InternalError):
        Slide().load("a" * 32)


def test_load_invalid_record():
    storage.write_json(storage.slides_dir() / f"{'b' * 32}.json", {"index": -1})
    with pytest.raises(InternalError, match="corrupt"):
        Slide().load("b" * 32)


# ── Mutators ─────────────────────────────────────────────


def test_set_index_rejects_negative():
    slide = _new_slide()
    with pytest.raises(ArgumentError):
        slide.set_index(-1)


def test_set_owner_validates():
    slide = _new_slide()
    with pytest.raises(ArgumentError):
        slide.set_owner("not a user")


def test_set_duration_rejects_zero():
    slide = _new_slide()
    with pytest.raises(ArgumentError):
        slide.set_duration(0)


def test_unloaded_slide_has_no_id():
    with pytest.raises(InternalError, match="not loaded"):
        Slide().get_id()


# ── Remove / index ───────────────────────────────────────


def test_remove():
    slide = _new_slide()
    slide.write()
    assert Slide.exists(slide.get_id())
    slide.remove()
    assert not slide.get_path().exists()
    assert not Slide.exists(slide.get_id())


def test_remove_twice():
    slide = _new_slide()
    slide.write()
    slide.remove()
    with pytest.raises(ArgumentError):
        slide.remove()


def test_list_slides():
    a = _new_slide()
    b = _new_slide()
    a.write()
    b.write()
    assert Slide.list() == sorted([a.get_id(), b.get_id()])
