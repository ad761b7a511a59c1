"""Interaction modes of the editor.

Each ``EditorMode`` has one handler. A handler receives the editor as an
explicit context object plus the key, performs the action, and returns
the mode the editor should be in next. Escape and Enter in the prompt
modes lead back to ``NORMAL``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict

from .commands import complete_command, execute_command
from .models.state import EditorMode
from .terminal import KeyEvent

if TYPE_CHECKING:
    from .editor import Editor


class ModeHandler(ABC):
    """Base class all concrete mode handlers inherit from."""

    mode: EditorMode = EditorMode.NORMAL

    def on_enter(self, editor: "Editor") -> None:
        """Called when the editor switches into this mode."""

    @abstractmethod
    def handle_key(self, editor: "Editor", key: KeyEvent) -> EditorMode:
        """Handle one key and return the next mode."""


class NormalMode(ModeHandler):
    """Text editing: typing, motions, selection and control shortcuts."""

    mode = EditorMode.NORMAL

    MOTION_KEYS = {"up", "down", "left", "right", "home", "end", "pageup", "pagedown"}

    def __init__(self) -> None:
        self._control: Dict[str, Callable[["Editor"], EditorMode]] = {
            "q": self._quit,
            "s": self._save,
            "c": self._copy,
            "x": self._cut,
            "v": self._paste,
            "w": self._switch_pane,
            "e": lambda editor: EditorMode.COMMAND_LINE,
            "f": lambda editor: EditorMode.SEARCH_PROMPT,
            "n": self._next_match,
            "p": self._previous_match,
        }

    def handle_key(self, editor: "Editor", key: KeyEvent) -> EditorMode:
        if key.key in self.MOTION_KEYS:
            self._move(editor, key)
            return self.mode

        if key.ctrl and len(key.key) == 1:
            action = self._control.get(key.key)
            return action(editor) if action else self.mode

        buffer = editor.buffer
        if key.key == "escape":
            editor.clear_transient()
            return self.mode

        if key.key == "enter":
            buffer.delete_selection()
            buffer.insert_newline()
        elif key.key == "backspace":
            if not buffer.delete_selection():
                buffer.delete_backward()
        elif key.key == "delete":
            if not buffer.delete_selection():
                buffer.delete_forward()
        elif key.key == "tab":
            buffer.delete_selection()
            buffer.insert_char("\t")
        elif key.is_character and key.char:
            buffer.delete_selection()
            buffer.insert_text(key.char)
        else:
            return self.mode

        editor.pane.scroll_to_cursor()
        return self.mode

    def _move(self, editor: "Editor", key: KeyEvent) -> None:
        buffer = editor.buffer
        pane = editor.pane
        motions: Dict[str, Callable[[], None]] = {
            "up": buffer.move_up,
            "down": buffer.move_down,
            "left": buffer.move_word_left if key.alt else buffer.move_left,
            "right": buffer.move_word_right if key.alt else buffer.move_right,
            "home": buffer.move_line_start,
            "end": buffer.move_line_end,
            "pageup": lambda: buffer.move_page_up(pane.height),
            "pagedown": lambda: buffer.move_page_down(pane.height),
        }
        buffer.apply_motion(motions[key.key], select=key.selecting)
        pane.scroll_to_cursor()

    def _quit(self, editor: "Editor") -> EditorMode:
        editor.quit()
        return self.mode

    def _save(self, editor: "Editor") -> EditorMode:
        editor.save()
        return self.mode

    def _copy(self, editor: "Editor") -> EditorMode:
        editor.copy()
        return self.mode

    def _cut(self, editor: "Editor") -> EditorMode:
        editor.cut()
        return self.mode

    def _paste(self, editor: "Editor") -> EditorMode:
        editor.paste()
        return self.mode

    def _switch_pane(self, editor: "Editor") -> EditorMode:
        editor.layout.cycle_focus()
        return self.mode

    def _next_match(self, editor: "Editor") -> EditorMode:
        editor.step_search(forward=True)
        return self.mode

    def _previous_match(self, editor: "Editor") -> EditorMode:
        editor.step_search(forward=False)
        return self.mode


class PromptMode(ModeHandler):
    """One-line text prompt on the bottom row."""

    prefix = ""

    def on_enter(self, editor: "Editor") -> None:
        editor.prompt = ""

    def handle_key(self, editor: "Editor", key: KeyEvent) -> EditorMode:
        if key.key == "escape":
            self.cancel(editor)
            return EditorMode.NORMAL
        if key.key == "enter":
            text = editor.prompt
            editor.prompt = ""
            self.submit(editor, text)
            return EditorMode.NORMAL
        if key.key == "backspace":
            if not editor.prompt:
                return EditorMode.NORMAL
            editor.prompt = editor.prompt[:-1]
        elif key.key == "tab":
            editor.prompt = self.complete(editor, editor.prompt)
        elif key.is_character and key.char:
            editor.prompt += key.char
        return self.mode

    def cancel(self, editor: "Editor") -> None:
        editor.prompt = ""

    @abstractmethod
    def submit(self, editor: "Editor", text: str) -> None:
        """Act on the text entered at the prompt."""

    def complete(self, editor: "Editor", text: str) -> str:
        return text


class CommandLineMode(PromptMode):
    mode = EditorMode.COMMAND_LINE
    prefix = ":"

    def submit(self, editor: "Editor", text: str) -> None:
        execute_command(editor, text)

    def complete(self, editor: "Editor", text: str) -> str:
        return complete_command(text, editor.cwd)


class SearchPromptMode(PromptMode):
    mode = EditorMode.SEARCH_PROMPT
    prefix = "/"

    def cancel(self, editor: "Editor") -> None:
        super().cancel(editor)
        editor.search = None

    def submit(self, editor: "Editor", text: str) -> None:
        editor.run_search(text)


def default_handlers() -> Dict[EditorMode, ModeHandler]:
    handlers = [NormalMode(), CommandLineMode(), SearchPromptMode()]
    return {handler.mode: handler for handler in handlers}


__all__ = [
    "ModeHandler",
    "NormalMode",
    "PromptMode",
    "CommandLineMode",
    "SearchPromptMode",
    "default_handlers",
]
