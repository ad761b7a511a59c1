"""Line storage for accela buffers."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence


class LineStore:
    """Ordered list of text lines; the ground truth of a buffer.

    Lines never carry a trailing newline and the store always holds at
    least one line, so an empty document is a single empty line. All
    positions are character (code point) offsets.
    """

    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self._lines: list[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines.append("")

    @classmethod
    def from_text(cls, text: str) -> "LineStore":
        """Split flat text on ``\\n``; a trailing newline yields a final empty line."""
        return cls(text.split("\n"))

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""
        return tuple(self._lines)

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text

    def insert_lines(self, index: int, lines: Sequence[str]) -> None:
        """Insert ``lines`` so the first of them ends up at ``index``."""
        self._lines[index:index] = list(lines)

    def delete_lines(self, start: int, stop: int) -> None:
        """Remove lines ``[start, stop)``; the store is never left empty."""
        del self._lines[start:stop]
        if not self._lines:
            self._lines.append("")

    def replace_all(self, lines: Iterable[str]) -> None:
        self._lines = list(lines) or [""]

    def slice_text(self, start: int, stop: int) -> str:
        """Join lines ``[start, stop)`` with newlines."""
        return "\n".join(self._lines[start:stop])

    def text(self) -> str:
        """Flat document text, lines joined with ``\\n`` and no trailing newline."""
        return "\n".join(self._lines)
