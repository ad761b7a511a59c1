"""Editor widget: feeds textual events into the Editor and shows its frames."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.widgets import Static

from ..editor import Editor
from ..terminal import NAMED_KEYS, CellGrid, Event, KeyEvent, ResizeEvent


def key_event(event: events.Key) -> KeyEvent:
    """Translate a textual key press into the editor's key model."""
    if event.key not in NAMED_KEYS and event.is_printable and event.character:
        return KeyEvent.character(event.character)
    return KeyEvent.from_name(event.key)


class EditorView(Static):
    """Full-screen view of an ``Editor``.

    Every key and resize is handed to the editor, which then draws one
    frame into a ``CellGrid``. Presenting the grid rebuilds the rich text
    this widget shows. The app exits once the editor stops running.

    Args:
        editor: The editor to drive.
    """

    can_focus = True

    def __init__(self, editor: Editor, **kwargs):
        super().__init__("", **kwargs)
        self.editor = editor
        width, height = editor.size
        self.grid = CellGrid(width, height, on_present=self.refresh_display)

    def on_mount(self) -> None:
        self.draw_frame()

    def on_resize(self, event: events.Resize) -> None:
        width, height = event.size.width, event.size.height
        self.grid.resize(width, height)
        self.feed(ResizeEvent(width, height))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.feed(key_event(event))

    def feed(self, event: Event) -> None:
        if not self.editor.handle_event(event):
            self.app.exit()
            return
        self.draw_frame()

    def draw_frame(self) -> None:
        self.editor.draw(self.grid)

    def refresh_display(self) -> None:
        result = Text(no_wrap=True, overflow="crop")
        for y in range(self.grid.height):
            for segment in self.grid.row_segments(y):
                result.append(segment.text, style=segment.style)
            if y < self.grid.height - 1:
                result.append("\n")
        self.update(result)
