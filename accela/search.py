"""Literal substring search over a buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .buffer import Buffer
from .models.state import SearchMatch


def search(buffer: Buffer, query: str) -> List[SearchMatch]:
    """Find every occurrence of ``query``, overlapping ones included.

    Scanning resumes one character past the previous match start, so
    ``"ab"`` in ``"ababab"`` matches at columns 0, 2 and 4, and ``"aa"``
    in ``"aaa"`` at 0 and 1.
    """
    if not query:
        return []
    matches: List[SearchMatch] = []
    for line_index, line in enumerate(buffer.lines):
        start = line.find(query)
        while start != -1:
            matches.append(SearchMatch(line_index, start, len(query)))
            start = line.find(query, start + 1)
    return matches


@dataclass
class SearchResults:
    """Matches of one search pass plus a cyclic position among them.

    Results belong to the buffer they were computed on and go stale as
    soon as that buffer is edited (its ``version`` moves on).
    """

    buffer: Buffer
    query: str
    matches: List[SearchMatch] = field(default_factory=list)
    index: int = 0
    version: int = 0

    @classmethod
    def run(cls, buffer: Buffer, query: str) -> "SearchResults":
        return cls(buffer, query, search(buffer, query), 0, buffer.version)

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def is_stale(self) -> bool:
        return self.version != self.buffer.version

    @property
    def current(self) -> SearchMatch:
        return self.matches[self.index]

    def rerun(self) -> None:
        """Search again with the same query; position goes back to the first match."""
        self.matches = search(self.buffer, self.query)
        self.index = 0
        self.version = self.buffer.version

    def next(self) -> Tuple[int, int]:
        """Advance cyclically. Returns the 1-based position and the total."""
        if self.matches:
            self.index = (self.index + 1) % len(self.matches)
        return self.position()

    def previous(self) -> Tuple[int, int]:
        if self.matches:
            self.index = (self.index - 1 + len(self.matches)) % len(self.matches)
        return self.position()

    def position(self) -> Tuple[int, int]:
        if not self.matches:
            return 0, 0
        return self.index + 1, len(self.matches)

    def covers(self, line: int, column: int) -> bool:
        """True if a match spans the given cell."""
        for match in self.matches:
            if match.line == line and match.column <= column < match.column + match.length:
                return True
        return False
