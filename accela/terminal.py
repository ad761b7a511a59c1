"""Terminal surface: input events, the drawing protocol and a cell grid.

The editor never talks to textual directly. It receives ``KeyEvent`` or
``ResizeEvent`` values and paints into anything that satisfies the
``Terminal`` protocol. ``CellGrid`` is the in-memory implementation the
textual widget renders from, and the one tests draw into.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple, Union

from rich.segment import Segment
from rich.style import Style

from .exceptions import TerminalError

PLAIN = Style()
CURSOR = Style(reverse=True)

CHARACTER = "character"

# Key names that are never plain characters, as textual spells them
NAMED_KEYS = {
    "up",
    "down",
    "left",
    "right",
    "home",
    "end",
    "pageup",
    "pagedown",
    "enter",
    "backspace",
    "delete",
    "tab",
    "escape",
    "insert",
}

# textual names for printable keys
KEY_CHARACTERS = {"space": " "}

MODIFIERS = {"ctrl", "alt", "shift", "meta"}


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a logical key name plus modifiers.

    Printable input has ``key == "character"`` and the text in ``char``.
    Control-modified letters keep the letter as ``key`` with ``ctrl`` set.
    """

    key: str
    char: Optional[str] = None
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(CHARACTER, char)

    @classmethod
    def from_name(cls, name: str) -> "KeyEvent":
        """Parse a textual key name such as ``"ctrl+shift+left"`` or ``"x"``."""
        parts = name.split("+")
        key = parts[-1]
        modifiers = {part for part in parts[:-1] if part in MODIFIERS}
        ctrl = "ctrl" in modifiers
        alt = "alt" in modifiers or "meta" in modifiers
        shift = "shift" in modifiers
        if not (ctrl or alt):
            if key in KEY_CHARACTERS:
                return cls.character(KEY_CHARACTERS[key])
            if len(key) == 1:
                return cls.character(key)
        return cls(key.lower() if len(key) == 1 else key, None, ctrl, alt, shift)

    @property
    def is_character(self) -> bool:
        return self.key == CHARACTER

    @property
    def selecting(self) -> bool:
        """Shift or ctrl held with a motion key extends the selection."""
        return self.shift or self.ctrl


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = Union[KeyEvent, ResizeEvent]


class Terminal(Protocol):
    """Drawing surface the editor paints into."""

    def size(self) -> Tuple[int, int]:
        ...

    def set_cell(self, x: int, y: int, char: str, style: Style = PLAIN) -> None:
        ...

    def show_cursor(self, x: int, y: int) -> None:
        ...

    def hide_cursor(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def present(self) -> None:
        ...


Cell = Tuple[str, Style]


class CellGrid:
    """Character grid held in memory.

    Writes outside the grid are clipped. ``present()`` counts frames and
    calls ``on_present`` so a widget can repaint.
    """

    def __init__(
        self,
        width: int = 80,
        height: int = 24,
        on_present: Optional[Callable[[], None]] = None,
    ) -> None:
        self.on_present = on_present
        self.cursor: Optional[Tuple[int, int]] = None
        self.frames = 0
        self.width = 0
        self.height = 0
        self._cells: List[List[Cell]] = []
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise TerminalError(f"Invalid terminal size {width}x{height}")
        self.width = width
        self.height = height
        self.clear()

    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def set_cell(self, x: int, y: int, char: str, style: Style = PLAIN) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._cells[y][x] = (char, style)

    def put_text(self, x: int, y: int, text: str, style: Style = PLAIN) -> None:
        for offset, ch in enumerate(text):
            self.set_cell(x + offset, y, ch, style)

    def show_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def hide_cursor(self) -> None:
        self.cursor = None

    def clear(self) -> None:
        self._cells = [[(" ", PLAIN)] * self.width for _ in range(self.height)]
        self.cursor = None

    def present(self) -> None:
        self.frames += 1
        if self.on_present is not None:
            self.on_present()

    def cell(self, x: int, y: int) -> Cell:
        return self._cells[y][x]

    def row_text(self, y: int) -> str:
        return "".join(ch for ch, _ in self._cells[y])

    def lines(self) -> List[str]:
        return [self.row_text(y) for y in range(self.height)]

    def row_segments(self, y: int) -> List[Segment]:
        """Row ``y`` as rich segments, merging runs of equal style."""
        segments: List[Segment] = []
        if not 0 <= y < self.height:
            return segments
        run: List[str] = []
        run_style: Optional[Style] = None
        for x, (ch, style) in enumerate(self._cells[y]):
            if self.cursor == (x, y):
                style = style + CURSOR
            if run and style != run_style:
                segments.append(Segment("".join(run), run_style))
                run = []
            run.append(ch)
            run_style = style
        if run:
            segments.append(Segment("".join(run), run_style))
        return segments
