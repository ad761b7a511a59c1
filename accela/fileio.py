"""Reading and writing buffer contents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from .exceptions import FileOperationError

logger = logging.getLogger(__name__)


def read_lines(path: Path) -> List[str]:
    """Read ``path`` as UTF-8 and split it into lines.

    Carriage returns are stripped. ``FileNotFoundError`` propagates so
    callers can start a new buffer bound to the missing name; every other
    failure is raised as ``FileOperationError``.
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise FileOperationError(f"Cannot read {path}: {e.strerror or e}") from e

    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileOperationError(f"Cannot open binary file {path}") from e

    lines = content.replace("\r", "").split("\n")
    logger.info("Read %d lines from %s", len(lines), path)
    return lines


def write_lines(path: Path, lines: Sequence[str]) -> None:
    """Write ``lines`` joined by ``\\n`` without a trailing newline."""
    try:
        path.write_bytes("\n".join(lines).encode("utf-8"))
    except OSError as e:
        raise FileOperationError(f"Cannot write {path}: {e.strerror or e}") from e
    logger.info("Wrote %d lines to %s", len(lines), path)
