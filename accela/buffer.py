"""Editable buffer: lines, cursor, selection, highlighting and scroll state."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

from rich.style import Style

from .config.settings import EditorConfig
from .fileio import read_lines, write_lines
from .exceptions import FileOperationError
from .highlight import HighlightCache, Highlighter, TokenSource
from .models.lines import LineStore
from .models.selection import Selection
from .utils import display_name, is_word_char

logger = logging.getLogger(__name__)


class Buffer:
    """One open document.

    Every mutation works on character columns, clamps the cursor back
    into the line store, and marks the touched lines dirty in the
    highlight cache. Edits that change the line count mark everything
    from the edit point to the end of the document.

    Args:
        lines: Initial content. Defaults to a single empty line.
        path: File the buffer is bound to, if any.
        config: Editor settings (tab size, highlight margin, style).
        source: Token source for highlighting. Defaults to a pygments
            highlighter chosen from ``path``.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        path: Optional[Path] = None,
        config: Optional[EditorConfig] = None,
        source: Optional[TokenSource] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.path = path
        self.lines = LineStore(lines)
        self.cursor_line = 0
        self.cursor_col = 0
        self.scroll_x = 0  # visual columns
        self.scroll_y = 0  # lines
        self.selection = Selection()
        self.highlight = HighlightCache(
            self.lines,
            source or Highlighter.detect(path, self.config.theme),
            margin=self.config.highlight_margin,
        )
        self.highlight.invalidate()
        self.version = 0
        self.modified = False

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Buffer":
        return cls(text.split("\n"), **kwargs)

    # -- accessors ---------------------------------------------------------

    @property
    def cursor(self) -> Tuple[int, int]:
        return self.cursor_line, self.cursor_col

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_line]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def display_name(self) -> str:
        return display_name(self.path)

    def text(self) -> str:
        return self.lines.text()

    def style_at(self, line: int, column: int) -> Style:
        return self.highlight.style_at(line, column)

    def refresh_highlight(self) -> bool:
        return self.highlight.refresh()

    # -- bookkeeping -------------------------------------------------------

    def _clamp_cursor(self) -> None:
        self.cursor_line = max(0, min(self.cursor_line, len(self.lines) - 1))
        self.cursor_col = max(0, min(self.cursor_col, self.lines.line_length(self.cursor_line)))

    def _touch(self) -> None:
        self.version += 1
        self.modified = True

    def _mark_line_dirty(self) -> None:
        self._touch()
        self.highlight.mark_dirty(self.cursor_line, self.cursor_line)

    def _mark_dirty_to_end(self, start: int) -> None:
        self._touch()
        self.highlight.mark_dirty(start, len(self.lines) - 1)

    def set_cursor(self, line: int, col: int) -> None:
        """Place the cursor, clamping both coordinates into the document."""
        self.cursor_line = line
        self.cursor_col = col
        self._clamp_cursor()

    # -- insertion ---------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        self._clamp_cursor()
        line = self.current_line
        self.lines.set_line(
            self.cursor_line, line[: self.cursor_col] + ch + line[self.cursor_col :]
        )
        self.cursor_col += len(ch)
        self._mark_line_dirty()

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor; the cursor ends after it."""
        parts = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        if len(parts) == 1:
            self.insert_char(parts[0])
            return

        self._clamp_cursor()
        start_line = self.cursor_line
        line = self.current_line
        head, tail = line[: self.cursor_col], line[self.cursor_col :]

        self.lines.set_line(start_line, head + parts[0])
        new_lines = parts[1:-1] + [parts[-1] + tail]
        self.lines.insert_lines(start_line + 1, new_lines)
        self.highlight.splice(start_line + 1, 0, len(new_lines))

        self.cursor_line = start_line + len(parts) - 1
        self.cursor_col = len(parts[-1])
        self._mark_dirty_to_end(start_line)

    def insert_newline(self) -> None:
        self.insert_text("\n")

    # -- deletion ----------------------------------------------------------

    def delete_backward(self) -> bool:
        """Backspace. Returns False when there was nothing to delete."""
        self._clamp_cursor()
        line = self.current_line
        if self.cursor_col > 0:
            self.lines.set_line(
                self.cursor_line, line[: self.cursor_col - 1] + line[self.cursor_col :]
            )
            self.cursor_col -= 1
            self._mark_line_dirty()
            return True
        if self.cursor_line > 0:
            previous = self.lines[self.cursor_line - 1]
            self.lines.set_line(self.cursor_line - 1, previous + line)
            self.lines.delete_lines(self.cursor_line, self.cursor_line + 1)
            self.highlight.splice(self.cursor_line, 1, 0)
            self.cursor_line -= 1
            self.cursor_col = len(previous)
            self._mark_dirty_to_end(self.cursor_line)
            return True
        return False

    def delete_forward(self) -> bool:
        """Delete key. The cursor does not move."""
        self._clamp_cursor()
        line = self.current_line
        if self.cursor_col < len(line):
            self.lines.set_line(
                self.cursor_line, line[: self.cursor_col] + line[self.cursor_col + 1 :]
            )
            self._mark_line_dirty()
            return True
        if self.cursor_line < len(self.lines) - 1:
            following = self.lines[self.cursor_line + 1]
            self.lines.set_line(self.cursor_line, line + following)
            self.lines.delete_lines(self.cursor_line + 1, self.cursor_line + 2)
            self.highlight.splice(self.cursor_line + 1, 1, 0)
            self._mark_dirty_to_end(self.cursor_line)
            return True
        return False

    def _clamped_bounds(self, selection: Selection) -> Tuple[int, int, int, int]:
        lo_line, lo_col, hi_line, hi_col = selection.normalized()
        last = len(self.lines) - 1
        lo_line = max(0, min(lo_line, last))
        hi_line = max(0, min(hi_line, last))
        lo_col = max(0, min(lo_col, self.lines.line_length(lo_line)))
        hi_col = max(0, min(hi_col, self.lines.line_length(hi_line)))
        return lo_line, lo_col, hi_line, hi_col

    def delete_range(self, selection: Optional[Selection] = None) -> None:
        """Remove the text a selection covers and clear the selection."""
        selection = selection or self.selection
        lo_line, lo_col, hi_line, hi_col = self._clamped_bounds(selection)

        joined = self.lines[lo_line][:lo_col] + self.lines[hi_line][hi_col:]
        self.lines.set_line(lo_line, joined)
        self.lines.delete_lines(lo_line + 1, hi_line + 1)
        self.highlight.splice(lo_line + 1, hi_line - lo_line, 0)

        self.cursor_line, self.cursor_col = lo_line, lo_col
        selection.deactivate()
        self._mark_dirty_to_end(lo_line)

    def extract_text(self, selection: Optional[Selection] = None) -> str:
        """Text a selection covers, lines joined with ``\\n``."""
        selection = selection or self.selection
        lo_line, lo_col, hi_line, hi_col = self._clamped_bounds(selection)
        if lo_line == hi_line:
            return self.lines[lo_line][lo_col:hi_col]
        parts = [self.lines[lo_line][lo_col:]]
        parts.extend(self.lines[index] for index in range(lo_line + 1, hi_line))
        parts.append(self.lines[hi_line][:hi_col])
        return "\n".join(parts)

    def selected_text(self) -> str:
        if not self.selection.active:
            return ""
        return self.extract_text(self.selection)

    def delete_selection(self) -> bool:
        """Delete the active selection, if any."""
        if not self.selection.active:
            return False
        self.delete_range(self.selection)
        return True

    # -- motion ------------------------------------------------------------

    def apply_motion(self, motion: Callable[[], None], *, select: bool = False) -> None:
        """Run a cursor motion, extending the selection when ``select`` is set."""
        if select:
            self.selection.anchor(self.cursor_line, self.cursor_col)
        motion()
        if select:
            self.selection.extend(self.cursor_line, self.cursor_col)
        else:
            self.selection.deactivate()

    def move_left(self) -> None:
        self._clamp_cursor()
        if self.cursor_col > 0:
            self.cursor_col -= 1
        elif self.cursor_line > 0:
            self.cursor_line -= 1
            self.cursor_col = self.lines.line_length(self.cursor_line)

    def move_right(self) -> None:
        self._clamp_cursor()
        if self.cursor_col < len(self.current_line):
            self.cursor_col += 1
        elif self.cursor_line < len(self.lines) - 1:
            self.cursor_line += 1
            self.cursor_col = 0

    def move_up(self) -> None:
        self.set_cursor(self.cursor_line - 1, self.cursor_col)

    def move_down(self) -> None:
        self.set_cursor(self.cursor_line + 1, self.cursor_col)

    def move_page_up(self, rows: int) -> None:
        self.set_cursor(self.cursor_line - max(1, rows), self.cursor_col)

    def move_page_down(self, rows: int) -> None:
        self.set_cursor(self.cursor_line + max(1, rows), self.cursor_col)

    def move_line_start(self) -> None:
        self.set_cursor(self.cursor_line, 0)

    def move_line_end(self) -> None:
        self.set_cursor(self.cursor_line, len(self.current_line))

    def move_word_left(self) -> None:
        self._clamp_cursor()
        if self.cursor_col == 0:
            if self.cursor_line > 0:
                self.cursor_line -= 1
                self.cursor_col = self.lines.line_length(self.cursor_line)
            return
        line = self.current_line
        col = self.cursor_col
        while col > 0 and not is_word_char(line[col - 1]):
            col -= 1
        while col > 0 and is_word_char(line[col - 1]):
            col -= 1
        self.cursor_col = col

    def move_word_right(self) -> None:
        self._clamp_cursor()
        line = self.current_line
        if self.cursor_col >= len(line):
            if self.cursor_line < len(self.lines) - 1:
                self.cursor_line += 1
                self.cursor_col = 0
            return
        col = self.cursor_col
        while col < len(line) and not is_word_char(line[col]):
            col += 1
        while col < len(line) and is_word_char(line[col]):
            col += 1
        self.cursor_col = col

    # -- files -------------------------------------------------------------

    def load(self, path: Path) -> bool:
        """Replace the content with ``path``. Returns False if the file is new.

        A missing file binds the buffer to that name with empty content.
        Any other failure raises ``FileOperationError`` and leaves the
        buffer untouched.
        """
        try:
            lines = read_lines(path)
            exists = True
        except FileNotFoundError:
            logger.info("%s does not exist, starting a new buffer", path)
            lines = [""]
            exists = False

        self.path = path
        self.lines.replace_all(lines)
        self.cursor_line = self.cursor_col = 0
        self.scroll_x = self.scroll_y = 0
        self.selection = Selection()
        self.highlight.reset(Highlighter.detect(path, self.config.theme))
        self.version += 1
        self.modified = False
        return exists

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the buffer to ``path`` (or its bound file) and return the target."""
        target = path or self.path
        if target is None:
            raise FileOperationError("No file name")
        write_lines(target, self.lines.snapshot())
        if target != self.path:
            self.path = target
            self.highlight.reset(Highlighter.detect(target, self.config.theme))
        self.modified = False
        return target
