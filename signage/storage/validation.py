"""Name validation shared by queues, users and slides.

Names end up in file paths, so they are restricted to [A-Za-z0-9_-] and a
bounded length before anything derives a path from them.
"""

from __future__ import annotations

import re

from signage.errors import ArgumentError, InternalError

from .core import StorageConfig

NAME_REGEX = re.compile(r"[A-Za-z0-9_-]+")


def validate_name(name: str, *, max_len: int, kind: str) -> None:
    if len(name) == 0:
        raise ArgumentError(f"Invalid empty {kind} name.")
    if len(name) > max_len:
        raise ArgumentError(f"{kind.capitalize()} name too long.")
    try:
        match = NAME_REGEX.fullmatch(name)
    except (TypeError, re.error) as e:
        raise InternalError(f"Failed to match {kind} name: {e}") from e
    if match is None:
        raise ArgumentError(f"{kind.capitalize()} name contains invalid characters.")


def validate_queue_name(name: str, config: StorageConfig) -> None:
    validate_name(name, max_len=config.queue_name_max_len, kind="queue")


def validate_username(name: str, config: StorageConfig) -> None:
    validate_name(name, max_len=config.username_max_len, kind="user")
