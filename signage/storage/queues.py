"""Slide queues.

A queue is one JSON file, <queues-dir>/<name>.json:

    {"owner": "<username>", "slides": ["<slide-id>", ...]}

The slide records themselves live in their own files (see slides.py). A queue
operation that reindexes or removes slides therefore touches many files, each
under its own lock; there is no lock spanning the queue and its slides, so
other requests can observe intermediate states.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from signage.errors import ArgumentError, InternalError

from . import core
from .core import StorageConfig
from .locked import read_json, write_json
from .slides import Slide
from .validation import validate_queue_name, validate_username

logger = logging.getLogger(__name__)


class QueueRecord(BaseModel):
    """On-disk shape of a queue."""

    owner: str
    slides: list[str] = Field(default_factory=list)


class SlideList:
    """Ordered slides keyed by slide id."""

    def __init__(self) -> None:
        self._items: dict[str, Slide] = {}

    def add(self, slide: Slide) -> None:
        """Append slide, or move it to the end if its id is already present."""
        self._items.pop(slide.get_id(), None)
        self._items[slide.get_id()] = slide

    def discard(self, slide_id: str) -> Slide | None:
        return self._items.pop(slide_id, None)

    def get(self, slide_id: str) -> Slide | None:
        return self._items.get(slide_id)

    def sort_by_index(self) -> None:
        # sorted() is stable; ties keep their current relative order.
        ordered = sorted(self._items.values(), key=lambda s: s.get_index())
        self._items = {s.get_id(): s for s in ordered}

    def ids(self) -> list[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[Slide]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, slide_id: object) -> bool:
        return slide_id in self._items


class Queue:
    def __init__(self, name: str, config: StorageConfig | None = None) -> None:
        self._config = config or core.config()
        self._name = ""
        self._owner: str | None = None
        self._slides = SlideList()
        self._loaded = False
        self.set_name(name)

    @classmethod
    def create(
        cls, name: str, owner: str, config: StorageConfig | None = None
    ) -> Queue:
        """Create and persist an empty queue. Fails if name is taken."""
        queue = cls(name, config)
        if cls.exists(name, queue._config):
            raise ArgumentError(f"Queue '{name}' already exists.")
        queue.set_owner(owner)
        queue.write()
        queue._loaded = True
        logger.info("created queue %s (owner=%s)", name, owner)
        return queue

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self, fix_errors: bool = False) -> None:
        """Load the queue and its slides from disk.

        With fix_errors=True, slide references that can't be loaded are
        dropped and the cleaned queue is written back immediately. Otherwise
        the first slide error propagates and this Queue must be discarded.

        Raises ArgumentError if the queue doesn't exist.
        """
        self._loaded = False
        path = self.get_path()
        try:
            data = read_json(path, self._config.lock_timeout)
        except FileNotFoundError:
            raise ArgumentError(f"Queue '{self._name}' doesn't exist.") from None
        except ValueError as e:
            raise InternalError(f"Queue '{self._name}' is not valid JSON: {e}") from e

        try:
            record = QueueRecord.model_validate(data)
        except ValidationError as e:
            raise InternalError(f"Queue '{self._name}' is corrupt: {e}") from e
        self.set_owner(record.owner)

        errors_fixed = False
        self._slides.clear()
        for slide_id in record.slides:
            slide = Slide(self._config)
            try:
                slide.load(slide_id)
            except (ArgumentError, InternalError) as e:
                if not fix_errors:
                    raise
                logger.warning(
                    "dropping slide %s from queue %s: %s", slide_id, self._name, e
                )
                errors_fixed = True
                continue
            self._slides.add(slide)

        if errors_fixed:
            self.write()

        self._loaded = True

    def write(self) -> None:
        """Overwrite the queue file. Raises ArgumentError without an owner."""
        if not self._owner:
            raise ArgumentError("Queue doesn't have an owner.")
        record = QueueRecord(owner=self._owner, slides=self._slides.ids())
        write_json(self.get_path(), record.model_dump(), self._config.lock_timeout)

    def remove(self) -> None:
        """Remove the queue file and every slide in the queue.

        Slides go first: if removing one fails the queue file is still there,
        so the removal can be retried.

        Raises InternalError if the queue isn't loaded or the queue file
        can't be deleted, ArgumentError if the file is already gone.
        """
        if not self._loaded:
            raise InternalError("Queue not loaded.")
        path = self.get_path()
        if not path.is_file():
            raise ArgumentError(f"Queue '{self._name}' doesn't exist.")

        for slide in self._slides:
            slide.remove()

        try:
            path.unlink()
        except OSError as e:
            raise InternalError(f"Failed to remove queue '{self._name}': {e}") from e
        logger.info("removed queue %s with %d slides", self._name, len(self._slides))

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def normalize(self) -> None:
        """Sort slides by index and renumber them 0..n-1, writing each slide."""
        self._slides.sort_by_index()
        for i, slide in enumerate(self._slides):
            slide.set_index(i)
            slide.write()
        logger.debug("normalized queue %s (%d slides)", self._name, len(self._slides))

    def juggle(self, keep_id: str) -> None:
        """Renumber slides so that keep_id takes the position of its index.

        Every other slide keeps its relative order. If no other slide had the
        same index as keep_id, keep_id goes last. Ends with a normalize(), so
        indices are always 0..n-1 afterwards.

        Raises ArgumentError if keep_id isn't in the queue.
        """
        keep = self._slides.discard(keep_id)
        if keep is None:
            raise ArgumentError(f"Slide {keep_id} doesn't exist in queue.")
        self.normalize()

        # Open a slot at keep's index by shifting everything at or after it.
        keep_i = keep.get_index()
        clash = False
        for slide in self._slides:
            s_i = slide.get_index()
            clash |= s_i == keep_i
            if s_i >= keep_i:
                slide.set_index(s_i + 1)
                slide.write()

        if not clash:
            keep.set_index(len(self._slides))
            keep.write()

        self._slides.add(keep)
        self.normalize()

    # ------------------------------------------------------------------
    # Slides
    # ------------------------------------------------------------------

    def add(self, slide: Slide) -> None:
        self._slides.add(slide)

    def remove_slide(self, slide: Slide) -> None:
        self._slides.discard(slide.get_id())

    def slides(self) -> list[Slide]:
        return list(self._slides)

    def get_slide(self, slide_id: str) -> Slide | None:
        return self._slides.get(slide_id)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def set_name(self, name: str) -> None:
        validate_queue_name(name, self._config)
        self._name = name

    def get_name(self) -> str:
        return self._name

    def set_owner(self, owner: str) -> None:
        validate_username(owner, self._config)
        self._owner = owner

    def get_owner(self) -> str | None:
        return self._owner

    def is_loaded(self) -> bool:
        return self._loaded

    def get_path(self) -> Path:
        return self._config.queues_path() / f"{self._name}.json"

    def public(self) -> dict:
        return {"name": self._name, "owner": self._owner, "slides": self._slides.ids()}

    # ------------------------------------------------------------------
    # Directory index
    # ------------------------------------------------------------------

    @staticmethod
    def list(config: StorageConfig | None = None) -> list[str]:
        """Names of all stored queues, sorted."""
        cfg = config or core.config()
        return core.list_json_names(cfg.queues_path())

    @staticmethod
    def exists(name: str, config: StorageConfig | None = None) -> bool:
        return name in Queue.list(config)
