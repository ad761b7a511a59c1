"""Syntax highlighting for accela buffers.

Two pieces live here:

``Highlighter``
    Wraps a pygments lexer and style. It turns text into
    ``(token_type, text)`` pairs and maps a token type to a rich ``Style``.

``HighlightCache``
    Per-line lists of styled spans. Edits only mark a dirty line range;
    ``refresh()`` re-tokenizes that range plus a context margin once per
    draw. Tokens that open further away than the margin (a long block
    comment, say) can render stale until a wider edit refreshes them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound
from rich.style import Style

from .config.defaults import DEFAULT_STYLE, HIGHLIGHT_MARGIN
from .models.lines import LineStore

logger = logging.getLogger(__name__)

PLAIN = Style()
BOM = "\ufeff"


class TokenSource(Protocol):
    """What the cache needs from a lexer/style engine."""

    def tokenize(self, text: str) -> Iterable[Tuple[Any, str]]:
        ...

    def style_for(self, token_type: Any) -> Style:
        ...


def _plain_lexer() -> Lexer:
    return TextLexer(stripnl=False, ensurenl=False)


class Highlighter:
    """Pygments lexer plus a pygments style, exposed as rich styles."""

    def __init__(self, lexer: Optional[Lexer] = None, style_name: str = DEFAULT_STYLE):
        self.lexer = lexer or _plain_lexer()
        try:
            self._style = get_style_by_name(style_name)
        except ClassNotFound:
            logger.warning("Unknown pygments style %r, using %r", style_name, DEFAULT_STYLE)
            self._style = get_style_by_name(DEFAULT_STYLE)
        self._styles: Dict[Any, Style] = {}

    @classmethod
    def detect(cls, filename: Optional[Path], style_name: str = DEFAULT_STYLE) -> "Highlighter":
        """Pick a lexer from the file name, falling back to plain text."""
        if filename is None:
            return cls(style_name=style_name)
        try:
            # Keep leading/trailing newlines so token offsets line up with the buffer
            lexer = get_lexer_for_filename(str(filename), stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.debug("No lexer for %s, using plain text", filename)
            lexer = _plain_lexer()
        return cls(lexer, style_name=style_name)

    @property
    def name(self) -> str:
        return self.lexer.name

    def tokenize(self, text: str) -> Iterable[Tuple[Any, str]]:
        if text.startswith(BOM):
            # pygments drops a leading byte order mark; keep it so columns line up
            yield Token.Text, BOM
        yield from self.lexer.get_tokens(text)

    def style_for(self, token_type: Any) -> Style:
        style = self._styles.get(token_type)
        if style is None:
            entry = self._style.style_for_token(token_type)
            style = Style(
                color=f"#{entry['color']}" if entry["color"] else None,
                bold=True if entry["bold"] else None,
                italic=True if entry["italic"] else None,
            )
            self._styles[token_type] = style
        return style


@dataclass(frozen=True)
class Span:
    """A styled run of characters within one line."""

    column: int
    length: int
    style: Style

    def contains(self, column: int) -> bool:
        return self.column <= column < self.column + self.length


class HighlightCache:
    """Line-indexed span cache kept in step with a ``LineStore``."""

    def __init__(
        self,
        lines: LineStore,
        source: TokenSource,
        margin: int = HIGHLIGHT_MARGIN,
    ) -> None:
        self._lines = lines
        self.source = source
        self.margin = margin
        self._spans: List[Optional[List[Span]]] = [None] * len(lines)
        self.dirty_start: Optional[int] = None
        self.dirty_end: Optional[int] = None
        # Line window covered by the most recent refresh
        self.last_refresh: Optional[Tuple[int, int]] = None

    @property
    def is_dirty(self) -> bool:
        return self.dirty_start is not None

    def mark_dirty(self, start: int, end: int) -> None:
        """Grow the pending dirty range to include lines ``[start, end]``."""
        if self.dirty_start is None or start < self.dirty_start:
            self.dirty_start = start
        if self.dirty_end is None or end > self.dirty_end:
            self.dirty_end = end

    def invalidate(self) -> None:
        """Mark the whole document dirty (after a load or lexer change)."""
        self.mark_dirty(0, len(self._lines) - 1)

    def reset(self, source: Optional[TokenSource] = None) -> None:
        """Drop every cached span, optionally switching lexer, and mark all lines dirty."""
        if source is not None:
            self.source = source
        self._spans = [None] * len(self._lines)
        self.dirty_start = None
        self.dirty_end = None
        self.invalidate()

    def splice(self, index: int, removed: int, inserted: int) -> None:
        """Shift cached entries after ``removed`` lines at ``index`` became ``inserted``."""
        self._spans[index : index + removed] = [None] * inserted

    def _sync_length(self) -> None:
        count = len(self._lines)
        if len(self._spans) < count:
            self._spans.extend([None] * (count - len(self._spans)))
        elif len(self._spans) > count:
            del self._spans[count:]

    def refresh(self) -> bool:
        """Re-tokenize the dirty range plus margin. Returns False if nothing was pending."""
        if self.dirty_start is None or self.dirty_end is None:
            return False

        self._sync_length()
        last_line = len(self._lines) - 1
        start = max(0, min(self.dirty_start, last_line) - self.margin)
        end = min(last_line, self.dirty_end + self.margin)

        for index in range(start, end + 1):
            self._spans[index] = []

        line, column = start, 0
        text = self._lines.slice_text(start, end + 1)
        for token_type, value in self.source.tokenize(text):
            style: Optional[Style] = None
            for part_index, part in enumerate(value.split("\n")):
                if part_index:
                    line += 1
                    column = 0
                if part and line <= end:
                    if style is None:
                        style = self.source.style_for(token_type)
                    self._spans[line].append(Span(column, len(part), style))
                column += len(part)

        logger.debug(
            "Re-tokenized lines %d-%d (dirty %d-%d)",
            start,
            end,
            self.dirty_start,
            self.dirty_end,
        )
        self.dirty_start = None
        self.dirty_end = None
        self.last_refresh = (start, end)
        return True

    def spans_for(self, line: int) -> Sequence[Span]:
        if 0 <= line < len(self._spans):
            return self._spans[line] or ()
        return ()

    def style_at(self, line: int, column: int) -> Style:
        for span in self.spans_for(line):
            if span.contains(column):
                return span.style
        return PLAIN
