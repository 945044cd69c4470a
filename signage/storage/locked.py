"""Whole-file reads and writes under an exclusive advisory lock.

Every persisted record (queues and slides) goes through these helpers so a
reader never sees a half-written file from a concurrent request touching the
same path. Locks are per file: nothing here spans several files, so a
multi-file operation (reindexing a queue's slides, removing a queue) can be
observed half-way through by another request.

Locks come from fcntl.flock(LOCK_EX). With timeout=None acquisition blocks
until the lock is free; otherwise it polls and raises InternalError once the
timeout has passed.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any

from signage.errors import InternalError

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.01


@contextmanager
def _locked(fh: IO[str], timeout: float | None) -> Iterator[None]:
    fd = fh.fileno()
    if timeout is None:
        fcntl.flock(fd, fcntl.LOCK_EX)
    else:
        deadline = time.monotonic() + timeout
        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.monotonic() >= deadline:
                    raise InternalError(
                        f"Timed out waiting for lock on {fh.name}"
                    ) from None
                time.sleep(_POLL_INTERVAL)
    try:
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)


def read_locked(path: Path, timeout: float | None = None) -> str:
    """Return the full content of path. Raises FileNotFoundError if missing."""
    with open(path, "r", encoding="utf-8") as fh:
        with _locked(fh, timeout):
            data = fh.read()
    logger.debug("read %s (%d bytes)", path, len(data))
    return data


def write_locked(path: Path, data: str, timeout: float | None = None) -> None:
    """Replace the content of path with data, creating the file if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    # "a" so opening never truncates before the lock is held.
    with open(path, "a", encoding="utf-8") as fh:
        with _locked(fh, timeout):
            fh.seek(0)
            fh.truncate()
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
    logger.debug("wrote %s (%d bytes)", path, len(data))


def read_json(path: Path, timeout: float | None = None) -> Any:
    return json.loads(read_locked(path, timeout))


def write_json(path: Path, data: Any, timeout: float | None = None) -> None:
    write_locked(path, json.dumps(data, indent=2), timeout)
