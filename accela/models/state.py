"""State models for the accela editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SplitType(Enum):
    """How the terminal area is divided between panes."""

    NONE = "none"
    HORIZONTAL = "horizontal"  # stacked, one above the other
    VERTICAL = "vertical"  # side by side


class EditorMode(Enum):
    """Interaction modes of the editor state machine."""

    NORMAL = "normal"
    COMMAND_LINE = "command-line"
    SEARCH_PROMPT = "search-prompt"


@dataclass(frozen=True)
class SearchMatch:
    """One literal match found by a search pass."""

    line: int
    column: int
    length: int


@dataclass
class StatusLine:
    """Transient one-line message shown under the status bar."""

    message: str = ""
    is_error: bool = False

    def set(self, message: str, *, error: bool = False) -> None:
        self.message = message
        self.is_error = error

    def clear(self) -> None:
        self.message = ""
        self.is_error = False
