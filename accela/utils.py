"""Utility functions for accela."""

from pathlib import Path
from typing import Optional

from .config.defaults import MIN_GUTTER_WIDTH


def is_word_char(ch: str) -> bool:
    """Letters, digits and underscore form words."""
    return ch.isalpha() or ch.isdigit() or ch == "_"


def char_width(ch: str, visual_col: int, tab_size: int) -> int:
    """Screen cells taken by ``ch`` when it starts at ``visual_col``."""
    if ch == "\t":
        return tab_size - (visual_col % tab_size)
    return 1


def char_to_visual_col(text: str, char_col: int, tab_size: int) -> int:
    """Visual column of ``char_col`` in ``text`` after tab expansion."""
    visual_col = 0
    for ch in text[: max(0, char_col)]:
        visual_col += char_width(ch, visual_col, tab_size)
    return visual_col


def gutter_width(line_count: int) -> int:
    """Width of the line-number gutter, including one column of padding."""
    return max(MIN_GUTTER_WIDTH, len(str(line_count)) + 1)


def display_name(path: Optional[Path]) -> str:
    """Name shown on the status bar for a buffer's file."""
    return str(path) if path else "[No Name]"
