"""Scoped temporary files for intermediate extraction artifacts.

Videos are transcribed through a temporary WAV, scanned PDF pages through a
temporary PNG, and unsupported audio through a converted WAV.  Every one of
those files is owned by exactly one extraction and must be gone when that
extraction ends, whether it succeeded, failed or was cancelled.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from raven_extract.utils.logging import get_logger

_logger = get_logger(__name__)

_TEMP_PREFIX = "raven-extract-"


def new_temp_path(suffix: str) -> Path:
    """Create an empty, uniquely named temporary file and return its path.

    ``mkstemp`` is used instead of ``mktemp`` so concurrent extractions can
    never be handed the same name.
    """
    fd, name = tempfile.mkstemp(prefix=_TEMP_PREFIX, suffix=suffix)
    os.close(fd)
    return Path(name)


def remove_quietly(path: Path | str | None) -> None:
    """Delete *path* if it exists.  Failures are logged, never raised."""
    if path is None:
        return
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as exc:
        _logger.debug("temp_file_cleanup_failed", path=str(path), error=str(exc))


@asynccontextmanager
async def removing(path: Path | str) -> AsyncIterator[Path]:
    """Yield *path* and delete it on every exit, cancellation included."""
    try:
        yield Path(path)
    finally:
        remove_quietly(path)
