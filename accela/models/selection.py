"""Selection range arithmetic."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Bounds = Tuple[int, int, int, int]  # (lo_line, lo_col, hi_line, hi_col)


@dataclass
class Selection:
    """Directional text range between an anchor (start) and the cursor (end).

    The range is half-open: the low endpoint is included and the high
    endpoint is not. Callers must go through ``normalized()`` because the
    end may sit before the start after extending backwards.
    """

    start_line: int = 0
    start_col: int = 0
    end_line: int = 0
    end_col: int = 0
    active: bool = False

    def normalized(self) -> Bounds:
        if (self.start_line, self.start_col) > (self.end_line, self.end_col):
            return self.end_line, self.end_col, self.start_line, self.start_col
        return self.start_line, self.start_col, self.end_line, self.end_col

    def contains(self, line: int, col: int) -> bool:
        lo_line, lo_col, hi_line, hi_col = self.normalized()
        if line < lo_line or line > hi_line:
            return False
        if lo_line == hi_line:
            return lo_col <= col < hi_col
        if line == lo_line:
            return col >= lo_col
        if line == hi_line:
            return col < hi_col
        return True

    @property
    def is_empty(self) -> bool:
        return (self.start_line, self.start_col) == (self.end_line, self.end_col)

    def anchor(self, line: int, col: int) -> None:
        """Start a selection at the cursor unless one is already active."""
        if self.active:
            return
        self.start_line, self.start_col = line, col
        self.end_line, self.end_col = line, col
        self.active = True

    def extend(self, line: int, col: int) -> None:
        self.end_line, self.end_col = line, col

    def deactivate(self) -> None:
        """Turn the selection off; coordinates stay until the next anchor."""
        self.active = False
