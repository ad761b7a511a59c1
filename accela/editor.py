"""Editor core: owns the panes, the mode state machine and the status line.

The ``Editor`` is the context object handed to every mode handler and
command. It receives one event at a time through ``handle_event`` and
paints a full frame into a ``Terminal`` with ``draw``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, assert_never

from .buffer import Buffer
from .clipboard import Clipboard, ClipboardBackend
from .config import Config
from .exceptions import ClipboardError, FileOperationError
from .layout import LayoutManager, Pane
from .models.state import EditorMode, SplitType, StatusLine
from .modes import PromptMode, default_handlers
from .search import SearchResults
from .terminal import Event, KeyEvent, ResizeEvent, Terminal
from .themes import DARK_THEME, EditorTheme

logger = logging.getLogger(__name__)


class Editor:
    """Multi-pane text editor driven by key and resize events.

    Args:
        config: Loaded configuration. Defaults to built-in settings.
        clipboard: Clipboard backend. Defaults to the system clipboard.
        theme: UI styles for gutter, selection, status bar and prompt.
        cwd: Directory relative paths and completion are resolved against.
        size: Initial terminal size as ``(width, height)``.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        clipboard: Optional[ClipboardBackend] = None,
        theme: EditorTheme = DARK_THEME,
        cwd: Optional[Path] = None,
        size: Tuple[int, int] = (80, 24),
    ) -> None:
        self.config = config or Config()
        self.clipboard = clipboard or Clipboard()
        self.theme = theme
        self.cwd = cwd or Path.cwd()
        self.size = size
        self.layout = LayoutManager(self.new_pane(self.new_buffer()))
        self.layout.arrange(*size)
        self.mode = EditorMode.NORMAL
        self.prompt = ""
        self.status = StatusLine()
        self.search: Optional[SearchResults] = None
        self.running = True
        self._handlers = default_handlers()

    def new_buffer(self) -> Buffer:
        return Buffer(config=self.config.editor)

    def new_pane(self, buffer: Buffer) -> Pane:
        return Pane(
            buffer,
            tab_size=self.config.editor.tab_size,
            show_line_numbers=self.config.editor.show_line_numbers,
        )

    @property
    def pane(self) -> Pane:
        return self.layout.active_pane

    @property
    def buffer(self) -> Buffer:
        return self.layout.active_pane.buffer

    def resolve(self, path: Path) -> Path:
        """Relative paths are taken relative to ``cwd``."""
        path = path.expanduser()
        return path if path.is_absolute() else self.cwd / path

    # -- files -------------------------------------------------------------

    def open_file(self, path: Path) -> bool:
        """Load ``path`` into the active buffer. A missing file starts a new one."""
        buffer = self.buffer
        try:
            exists = buffer.load(self.resolve(path))
        except FileOperationError as e:
            logger.error("Cannot open %s: %s", path, e)
            self.status.set(f"Error: {e}", error=True)
            return False

        self._forget_search(buffer)
        self.pane.scroll_to_cursor()
        if exists:
            logger.info("Loaded %s", buffer.path)
            self.status.set(f"Loaded: {path}")
        else:
            self.status.set(f"New file: {path}")
        return True

    def save(self, path: Optional[Path] = None) -> bool:
        """Write the active buffer, optionally under a new name."""
        try:
            target = self.buffer.save(self.resolve(path) if path else None)
        except FileOperationError as e:
            logger.error("Cannot save %s: %s", path or self.buffer.path, e)
            self.status.set(f"Error: {e}", error=True)
            return False
        logger.info("Wrote %s", target)
        self.status.set(f"Written: {path or target}")
        return True

    # -- panes -------------------------------------------------------------

    def split(self, kind: SplitType, path: Optional[Path] = None) -> bool:
        """Open a second pane with a fresh buffer, loading ``path`` if given."""
        if self.layout.is_split:
            self.status.set("Only two panes are supported", error=True)
            return False

        buffer = self.new_buffer()
        if path is not None:
            try:
                buffer.load(self.resolve(path))
            except FileOperationError as e:
                logger.error("Cannot open %s: %s", path, e)
                self.status.set(f"Error: {e}", error=True)
                return False

        self.layout.split(kind, self.new_pane(buffer))
        self._rearrange()
        label = "Horizontal split" if kind is SplitType.HORIZONTAL else "Vertical split"
        if path is not None:
            label = f"{label}: {path}"
        self.status.set(f"{label}, new pane active")
        return True

    def close_pane(self) -> bool:
        removed = self.layout.close_active()
        if removed is None:
            self.status.set("Cannot close the last pane", error=True)
            return False
        self._forget_search(removed.buffer)
        self._rearrange()
        return True

    def goto_line(self, line_number: int) -> None:
        """Move to a 1-based line, clamped into the buffer."""
        buffer = self.buffer
        line = max(0, min(line_number - 1, buffer.line_count - 1))
        buffer.selection.deactivate()
        buffer.set_cursor(line, 0)
        self.pane.scroll_to_cursor()
        self.status.set(f"Line {line + 1}")

    def _rearrange(self) -> None:
        self.layout.arrange(*self.size)
        for pane in self.layout.panes:
            pane.scroll_to_cursor()

    # -- search ------------------------------------------------------------

    def run_search(self, query: str) -> None:
        """Search the active buffer and jump to the first match."""
        if not query:
            return
        self.search = SearchResults.run(self.buffer, query)
        if not self.search.count:
            self.status.set("No matches found")
            return
        self.jump_to_match()
        self.status.set(f"Found {self.search.count} matches")

    def step_search(self, forward: bool = True) -> None:
        """Go to the next (or previous) match of the last search, cyclically."""
        results = self.search
        if results is None or results.buffer is not self.buffer:
            return
        if results.is_stale:
            logger.debug("Buffer changed since search, searching again for %r", results.query)
            results.rerun()
            if not results.count:
                self.status.set("No matches found")
                return
            # rerun() positions on the first match
            self.jump_to_match()
            return
        if not results.count:
            return
        if forward:
            results.next()
        else:
            results.previous()
        self.jump_to_match()

    def jump_to_match(self) -> None:
        results = self.search
        if results is None or not results.count:
            return
        match = results.current
        buffer = results.buffer
        buffer.selection.deactivate()
        buffer.set_cursor(match.line, match.column)
        self.pane.scroll_to_cursor()
        position, total = results.position()
        self.status.set(f"Match {position}/{total}")

    def _forget_search(self, buffer: Buffer) -> None:
        if self.search is not None and self.search.buffer is buffer:
            self.search = None

    # -- clipboard ---------------------------------------------------------

    def copy(self) -> None:
        if not self.buffer.selection.active:
            return
        try:
            self.clipboard.write(self.buffer.selected_text())
        except ClipboardError as e:
            self.status.set(f"Error: {e}", error=True)
            return
        self.status.set("Copied to clipboard")

    def cut(self) -> None:
        buffer = self.buffer
        if not buffer.selection.active:
            return
        try:
            self.clipboard.write(buffer.selected_text())
        except ClipboardError as e:
            self.status.set(f"Error: {e}", error=True)
            return
        buffer.delete_selection()
        self.pane.scroll_to_cursor()
        self.status.set("Cut to clipboard")

    def paste(self) -> None:
        try:
            text = self.clipboard.read()
        except ClipboardError as e:
            self.status.set(f"Error: {e}", error=True)
            return
        if not text:
            return
        buffer = self.buffer
        buffer.delete_selection()
        buffer.insert_text(text)
        self.pane.scroll_to_cursor()
        self.status.set("Pasted from clipboard")

    # -- state -------------------------------------------------------------

    def quit(self) -> None:
        logger.info("Quit requested")
        self.running = False

    def clear_transient(self) -> None:
        """Drop the selection, the search results and the status message."""
        self.buffer.selection.deactivate()
        self.search = None
        self.status.clear()

    def set_mode(self, mode: EditorMode) -> None:
        if mode is self.mode:
            return
        logger.debug("Mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode
        self._handlers[mode].on_enter(self)

    # -- events ------------------------------------------------------------

    def handle_event(self, event: Event) -> bool:
        """Process one event. Returns False once the editor should exit."""
        if isinstance(event, KeyEvent):
            self.handle_key(event)
        elif isinstance(event, ResizeEvent):
            self.handle_resize(event.width, event.height)
        else:
            assert_never(event)
        return self.running

    def handle_key(self, key: KeyEvent) -> None:
        next_mode = self._handlers[self.mode].handle_key(self, key)
        self.set_mode(next_mode)

    def handle_resize(self, width: int, height: int) -> None:
        self.size = (max(0, width), max(0, height))
        self._rearrange()

    # -- drawing -----------------------------------------------------------

    def draw(self, terminal: Terminal) -> None:
        """Paint one full frame: panes, status bar, command line and cursor."""
        width, height = terminal.size()
        terminal.clear()
        self.layout.arrange(width, height)

        refreshed = set()
        for pane in self.layout.panes:
            if id(pane.buffer) not in refreshed:
                pane.buffer.refresh_highlight()
                refreshed.add(id(pane.buffer))

        for pane in self.layout.panes:
            self._draw_pane(terminal, pane)
        self._draw_status_bar(terminal, width, height)
        prompt_end = self._draw_command_line(terminal, width, height)

        if prompt_end is not None:
            terminal.show_cursor(min(prompt_end, max(0, width - 1)), height - 1)
        else:
            position = self.pane.cursor_screen_position()
            if position is None:
                terminal.hide_cursor()
            else:
                terminal.show_cursor(*position)
        terminal.present()

    def _draw_pane(self, terminal: Terminal, pane: Pane) -> None:
        buffer = pane.buffer
        theme = self.theme
        gutter = pane.gutter_width
        right = pane.x + pane.width
        selection = buffer.selection if buffer.selection.active else None
        search = self.search
        if search is not None and (search.buffer is not buffer or search.is_stale):
            search = None

        for row in range(pane.height):
            line = buffer.scroll_y + row
            if line >= buffer.line_count:
                break
            y = pane.y + row

            if gutter:
                label = str(line + 1).rjust(gutter - 1) + " "
                for offset, ch in enumerate(label[: pane.width]):
                    terminal.set_cell(pane.x + offset, y, ch, theme.gutter_style)

            for offset, (ch, index) in enumerate(pane.visible_cells(line)):
                x = pane.x + gutter + offset
                if x >= right:
                    break
                if selection is not None and selection.contains(line, index):
                    style = theme.selection_style
                elif search is not None and search.covers(line, index):
                    style = theme.search_style
                else:
                    style = theme.text_style + buffer.style_at(line, index)
                terminal.set_cell(x, y, ch, style)

    def _draw_status_bar(self, terminal: Terminal, width: int, height: int) -> None:
        buffer = self.buffer
        modified = " [+]" if buffer.modified else ""
        text = (
            f" {buffer.display_name}{modified} | "
            f"Line {buffer.cursor_line + 1}/{buffer.line_count}, Col {buffer.cursor_col + 1} "
        )
        if self.layout.is_split:
            text += f"| Pane {self.layout.active_index + 1}/{len(self.layout.panes)} "
        y = height - 2
        for x in range(width):
            ch = text[x] if x < len(text) else " "
            terminal.set_cell(x, y, ch, self.theme.status_style)

    def _draw_command_line(self, terminal: Terminal, width: int, height: int) -> Optional[int]:
        """Draw the prompt or the status message. Returns the prompt end column."""
        handler = self._handlers[self.mode]
        prompt_end = None
        if isinstance(handler, PromptMode):
            text = handler.prefix + self.prompt
            style = self.theme.command_style
            prompt_end = len(text)
        else:
            text = self.status.message
            style = self.theme.error_style if self.status.is_error else self.theme.command_style

        y = height - 1
        for x in range(min(width, len(text))):
            terminal.set_cell(x, y, text[x], style)
        return prompt_end
