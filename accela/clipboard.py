"""System clipboard access through pyperclip."""

from __future__ import annotations

import logging
from typing import Protocol

import pyperclip

from .exceptions import ClipboardError

logger = logging.getLogger(__name__)


class ClipboardBackend(Protocol):
    def write(self, text: str) -> None:
        ...

    def read(self) -> str:
        ...


class Clipboard:
    """Reads and writes the OS clipboard, raising ClipboardError on failure."""

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard write failed: %s", e)
            raise ClipboardError("Clipboard unavailable") from e

    def read(self) -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as e:
            logger.warning("Clipboard read failed: %s", e)
            raise ClipboardError("Clipboard unavailable") from e
