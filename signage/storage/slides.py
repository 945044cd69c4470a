"""Slide records.

Each slide lives in its own file, <slides-dir>/<id>.json, and remembers the
queue it belongs to and its playback index within that queue. Queues only
store the slide ids; ordering is always taken from the slides' own index.
"""

from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from signage.errors import ArgumentError, InternalError

from . import core
from .core import StorageConfig
from .locked import read_json, write_json
from .validation import validate_name, validate_queue_name, validate_username

logger = logging.getLogger(__name__)

SLIDE_ID_REGEX = re.compile(r"[0-9a-f]{32}")


class SlideRecord(BaseModel):
    """Stored slide fields. The id doubles as the filename and is not persisted."""

    id: str
    name: str
    owner: str
    queue_name: str
    index: int = Field(default=0, ge=0)
    duration: int = Field(default=5000, gt=0)  # milliseconds
    markup: str = ""
    enabled: bool = True

    def stored(self) -> dict:
        return self.model_dump(exclude={"id"})

    def public(self) -> dict:
        return self.model_dump()


def validate_slide_id(slide_id: str) -> None:
    if SLIDE_ID_REGEX.fullmatch(slide_id) is None:
        raise ArgumentError(f"Invalid slide id '{slide_id}'.")


class Slide:
    def __init__(self, config: StorageConfig | None = None) -> None:
        self._config = config or core.config()
        self._record: SlideRecord | None = None

    @classmethod
    def new(
        cls,
        *,
        owner: str,
        queue_name: str,
        name: str,
        index: int = 0,
        duration: int = 5000,
        markup: str = "",
        enabled: bool = True,
        config: StorageConfig | None = None,
    ) -> Slide:
        """Build an unsaved slide with a fresh id."""
        slide = cls(config)
        slide._record = SlideRecord(
            id=uuid.uuid4().hex, name="", owner="", queue_name=""
        )
        slide.set_name(name)
        slide.set_owner(owner)
        slide.set_queue_name(queue_name)
        slide.set_index(index)
        slide.set_duration(duration)
        slide.set_markup(markup)
        slide.set_enabled(enabled)
        return slide

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self, slide_id: str) -> Slide:
        """Load slide slide_id from disk.

        Raises ArgumentError for a malformed id or a missing file and
        InternalError if the stored record can't be parsed.
        """
        validate_slide_id(slide_id)
        path = self._path_for(slide_id)
        try:
            data = read_json(path, self._config.lock_timeout)
        except FileNotFoundError:
            raise ArgumentError(f"Slide '{slide_id}' doesn't exist.") from None
        except ValueError as e:
            raise InternalError(f"Slide '{slide_id}' is not valid JSON: {e}") from e
        try:
            self._record = SlideRecord.model_validate({**data, "id": slide_id})
        except (TypeError, ValidationError) as e:
            raise InternalError(f"Slide '{slide_id}' is corrupt: {e}") from e
        return self

    def write(self) -> None:
        rec = self._require()
        if not rec.owner:
            raise ArgumentError("Slide doesn't have an owner.")
        if not rec.queue_name:
            raise ArgumentError("Slide doesn't belong to a queue.")
        write_json(self.get_path(), rec.stored(), self._config.lock_timeout)

    def remove(self) -> None:
        path = self.get_path()
        try:
            path.unlink()
        except FileNotFoundError:
            raise ArgumentError(f"Slide '{self.get_id()}' doesn't exist.") from None
        except OSError as e:
            raise InternalError(f"Failed to remove slide '{self.get_id()}': {e}") from e
        logger.debug("removed slide %s", self.get_id())

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _require(self) -> SlideRecord:
        if self._record is None:
            raise InternalError("Slide not loaded.")
        return self._record

    def _path_for(self, slide_id: str) -> Path:
        return self._config.slides_path() / f"{slide_id}.json"

    def get_path(self) -> Path:
        return self._path_for(self.get_id())

    def get_id(self) -> str:
        return self._require().id

    def get_owner(self) -> str:
        return self._require().owner

    def get_index(self) -> int:
        return self._require().index

    def get_queue_name(self) -> str:
        return self._require().queue_name

    def get_name(self) -> str:
        return self._require().name

    def set_index(self, index: int) -> None:
        if index < 0:
            raise ArgumentError("Slide index can't be negative.")
        self._require().index = index

    def set_owner(self, owner: str) -> None:
        validate_username(owner, self._config)
        self._require().owner = owner

    def set_queue_name(self, queue_name: str) -> None:
        validate_queue_name(queue_name, self._config)
        self._require().queue_name = queue_name

    def set_name(self, name: str) -> None:
        validate_name(name, max_len=self._config.slide_name_max_len, kind="slide")
        self._require().name = name

    def set_duration(self, duration: int) -> None:
        if duration <= 0:
            raise ArgumentError("Slide duration must be positive.")
        self._require().duration = duration

    def set_markup(self, markup: str) -> None:
        self._require().markup = markup

    def set_enabled(self, enabled: bool) -> None:
        self._require().enabled = enabled

    def public(self) -> dict:
        return self._require().public()

    # ------------------------------------------------------------------
    # Directory index
    # ------------------------------------------------------------------

    @staticmethod
    def list(config: StorageConfig | None = None) -> list[str]:
        cfg = config or core.config()
        return core.list_json_names(cfg.slides_path())

    @staticmethod
    def exists(slide_id: str, config: StorageConfig | None = None) -> bool:
        return slide_id in Slide.list(config)

    def __repr__(self) -> str:
        if self._record is None:
            return "Slide(<unloaded>)"
        return f"Slide(id={self._record.id!r}, index={self._record.index})"
