"""Panes and the split layout.

A ``Pane`` is a rectangle of the terminal bound to one ``Buffer``. It owns
the mapping between character columns (indexes into a line) and visual
columns (screen cells after tab expansion). The ``LayoutManager`` lays out
one pane, or two panes stacked or side by side, from the terminal size.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .buffer import Buffer
from .config.defaults import DEFAULT_TAB_SIZE, RESERVED_ROWS
from .models.state import SplitType
from .utils import char_to_visual_col, char_width, gutter_width

logger = logging.getLogger(__name__)

Cell = Tuple[str, int]  # (character to paint, index of the source character)


class Pane:
    """Viewport onto a buffer; scroll offsets are stored on the buffer."""

    def __init__(
        self,
        buffer: Buffer,
        x: int = 0,
        y: int = 0,
        width: int = 0,
        height: int = 0,
        *,
        tab_size: int = DEFAULT_TAB_SIZE,
        show_line_numbers: bool = True,
    ) -> None:
        self.buffer = buffer
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.tab_size = tab_size
        self.show_line_numbers = show_line_numbers

    def __repr__(self) -> str:
        return (
            f"Pane({self.buffer.display_name!r}, x={self.x}, y={self.y}, "
            f"width={self.width}, height={self.height})"
        )

    def place(self, x: int, y: int, width: int, height: int) -> None:
        self.x, self.y, self.width, self.height = x, y, width, height

    @property
    def gutter_width(self) -> int:
        if not self.show_line_numbers:
            return 0
        return gutter_width(self.buffer.line_count)

    @property
    def text_width(self) -> int:
        return max(1, self.width - self.gutter_width)

    @property
    def scroll_x(self) -> int:
        return self.buffer.scroll_x

    @property
    def scroll_y(self) -> int:
        return self.buffer.scroll_y

    def char_to_visual_col(self, line: int, char_col: int) -> int:
        if line >= self.buffer.line_count:
            return char_col
        return char_to_visual_col(self.buffer.lines[line], char_col, self.tab_size)

    def visible_cells(self, line: int) -> List[Cell]:
        """Cells of ``line`` that fall inside the text area, left to right.

        Characters left of ``scroll_x`` are skipped; a tab straddling the
        scroll boundary contributes only its remaining spaces. Tabs expand
        to spaces and output stops at the text width. Cells past the end of
        the line are not included.
        """
        text = self.buffer.lines[line]
        width = self.text_width
        scroll_x = self.scroll_x
        cells: List[Cell] = []

        index = 0
        visual = 0
        while index < len(text) and visual < scroll_x:
            visual += char_width(text[index], visual, self.tab_size)
            index += 1

        if visual > scroll_x:
            cells.extend((" ", index - 1) for _ in range(min(visual - scroll_x, width)))

        while len(cells) < width and index < len(text):
            ch = text[index]
            if ch == "\t":
                spaces = char_width(ch, scroll_x + len(cells), self.tab_size)
                cells.extend((" ", index) for _ in range(min(spaces, width - len(cells))))
            else:
                cells.append((ch, index))
            index += 1
        return cells

    def scroll_to_cursor(self) -> None:
        """Move the offsets the least amount that brings the cursor into view."""
        buffer = self.buffer
        height = max(1, self.height)
        if buffer.cursor_line < buffer.scroll_y:
            buffer.scroll_y = buffer.cursor_line
        elif buffer.cursor_line >= buffer.scroll_y + height:
            buffer.scroll_y = buffer.cursor_line - height + 1

        width = self.text_width
        visual = self.char_to_visual_col(buffer.cursor_line, buffer.cursor_col)
        if visual < buffer.scroll_x:
            buffer.scroll_x = visual
        elif visual >= buffer.scroll_x + width:
            buffer.scroll_x = visual - width + 1

    def cursor_screen_position(self) -> Optional[Tuple[int, int]]:
        """Screen cell of the cursor, or None when it is scrolled out of view."""
        buffer = self.buffer
        gutter = self.gutter_width
        x = self.x + gutter + self.char_to_visual_col(buffer.cursor_line, buffer.cursor_col)
        x -= buffer.scroll_x
        y = self.y + buffer.cursor_line - buffer.scroll_y
        if self.x + gutter <= x < self.x + self.width and self.y <= y < self.y + self.height:
            return x, y
        return None


class LayoutManager:
    """Holds one or two panes and the split between them."""

    MAX_PANES = 2

    def __init__(self, pane: Pane) -> None:
        self.panes: List[Pane] = [pane]
        self.split_type = SplitType.NONE
        self.active_index = 0

    @property
    def active_pane(self) -> Pane:
        return self.panes[self.active_index]

    @property
    def is_split(self) -> bool:
        return len(self.panes) > 1

    def split(self, kind: SplitType, pane: Pane) -> bool:
        """Add ``pane`` as the second pane and focus it. No-op when already split."""
        if kind is SplitType.NONE or len(self.panes) >= self.MAX_PANES:
            return False
        self.panes.append(pane)
        self.split_type = kind
        self.active_index = len(self.panes) - 1
        logger.debug("Split %s", kind.value)
        return True

    def close_active(self) -> Optional[Pane]:
        """Remove the focused pane when split. Returns the removed pane."""
        if len(self.panes) < 2:
            return None
        removed = self.panes.pop(self.active_index)
        self.active_index = min(self.active_index, len(self.panes) - 1)
        self.split_type = SplitType.NONE
        return removed

    def cycle_focus(self) -> None:
        if len(self.panes) > 1:
            self.active_index = (self.active_index + 1) % len(self.panes)

    def arrange(self, width: int, height: int) -> None:
        """Recompute every pane rectangle from the terminal size."""
        edit_height = max(0, height - RESERVED_ROWS)
        if len(self.panes) == 1:
            self.panes[0].place(0, 0, width, edit_height)
            return

        first, second = self.panes
        if self.split_type is SplitType.HORIZONTAL:
            half = edit_height // 2
            first.place(0, 0, width, half)
            second.place(0, half, width, edit_height - half)
        else:
            half = width // 2
            first.place(0, 0, half, edit_height)
            second.place(half, 0, width - half, edit_height)
