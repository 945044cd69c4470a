"""Storage configuration and directory helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from signage.errors import InternalError

_config: StorageConfig | None = None


class StorageConfig(BaseModel):
    """Where data lives on disk and the limits applied to names.

    root:               Data directory; every other path is relative to it.
    queues_dir:         Directory (under root) holding <queue>.json files.
    slides_dir:         Directory (under root) holding <slide-id>.json files.
    queue_name_max_len: Longest accepted queue name.
    username_max_len:   Longest accepted user (owner) name.
    slide_name_max_len: Longest accepted slide name.
    lock_timeout:       Seconds to wait for a file lock. None blocks until
                        the lock is acquired.
    """

    root: Path
    queues_dir: str = "queues"
    slides_dir: str = "slides"
    queue_name_max_len: int = 32
    username_max_len: int = 64
    slide_name_max_len: int = 32
    lock_timeout: float | None = None

    def queues_path(self) -> Path:
        return self.root / self.queues_dir

    def slides_path(self) -> Path:
        return self.root / self.slides_dir


def init_storage(data_dir: Path, **overrides: Any) -> StorageConfig:
    """Install the default config and create the data directories.

    Raises InternalError if an override can't be coerced to its field type.
    """
    global _config

    try:
        cfg = StorageConfig(root=data_dir, **overrides)
    except ValidationError as e:
        raise InternalError(f"Invalid storage configuration: {e}") from e
    cfg.root.mkdir(parents=True, exist_ok=True)
    cfg.queues_path().mkdir(exist_ok=True)
    cfg.slides_path().mkdir(exist_ok=True)
    _config = cfg
    return cfg


def config() -> StorageConfig:
    assert _config is not None, "Call init_storage() before using storage"
    return _config


def queues_dir() -> Path:
    return config().queues_path()


def slides_dir() -> Path:
    return config().slides_path()


def list_json_names(directory: Path) -> list[str]:
    """Names of the visible *.json files in directory, suffix stripped.

    A directory that doesn't exist yet holds no names.
    """
    if not directory.is_dir():
        return []
    names = []
    for entry in directory.iterdir():
        fname = entry.name
        if fname.startswith(".") or not fname.endswith(".json"):
            continue
        names.append(fname[: -len(".json")])
    return sorted(names)
