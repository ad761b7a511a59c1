"""Command-line commands (typed after Ctrl+E).

Commands are looked up by name or short alias. Usage problems raise
``CommandError`` inside a command; ``execute_command`` turns those, and
unknown names, into a status message so nothing escapes the control loop.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List

from .config.defaults import COMMAND_ALIASES, PATH_COMMANDS
from .exceptions import CommandError
from .models.state import SplitType

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)

Command = Callable[["Editor", List[str]], None]


def _quit(editor: "Editor", args: List[str]) -> None:
    editor.quit()


def _write(editor: "Editor", args: List[str]) -> None:
    editor.save(Path(args[0]) if args else None)


def _write_quit(editor: "Editor", args: List[str]) -> None:
    if editor.save(Path(args[0]) if args else None):
        editor.quit()


def _edit(editor: "Editor", args: List[str]) -> None:
    if not args:
        raise CommandError("Usage: edit <path>")
    editor.open_file(Path(args[0]))


def _horizontal_split(editor: "Editor", args: List[str]) -> None:
    editor.split(SplitType.HORIZONTAL, Path(args[0]) if args else None)


def _vertical_split(editor: "Editor", args: List[str]) -> None:
    editor.split(SplitType.VERTICAL, Path(args[0]) if args else None)


def _close(editor: "Editor", args: List[str]) -> None:
    editor.close_pane()


def _goto(editor: "Editor", args: List[str]) -> None:
    if not args:
        raise CommandError("Usage: goto <line>")
    try:
        line_number = int(args[0])
    except ValueError:
        raise CommandError("Invalid line number") from None
    editor.goto_line(line_number)


COMMANDS: Dict[str, Command] = {
    "quit": _quit,
    "write": _write,
    "write-quit": _write_quit,
    "edit": _edit,
    "horizontal-split": _horizontal_split,
    "vertical-split": _vertical_split,
    "close": _close,
    "goto": _goto,
}


def execute_command(editor: "Editor", text: str) -> None:
    """Run one command line; problems end up on the status line."""
    parts = text.split()
    if not parts:
        return

    name, args = parts[0], parts[1:]
    canonical = COMMAND_ALIASES.get(name)
    if canonical is None:
        editor.status.set(f"Unknown command: {name}", error=True)
        return

    try:
        COMMANDS[canonical](editor, args)
    except CommandError as e:
        logger.info("Command %r failed: %s", text, e)
        editor.status.set(str(e), error=True)


def complete_command(text: str, cwd: Path) -> str:
    """Complete a unique command name, or a unique path for file commands.

    Returns ``text`` unchanged when there is nothing unique to complete.
    """
    parts = text.split()
    if not parts:
        return text

    if len(parts) == 1 and not text.endswith(" "):
        names = [name for name in COMMAND_ALIASES if name.startswith(parts[0])]
        if len(names) == 1:
            return names[0]
        canonical = {COMMAND_ALIASES[name] for name in names}
        if len(canonical) == 1:
            return canonical.pop()
        return text

    name = parts[0]
    if COMMAND_ALIASES.get(name) not in PATH_COMMANDS:
        return text

    prefix = parts[-1] if len(parts) > 1 else ""
    if not prefix or prefix.endswith("/"):
        directory, base = prefix, ""
    else:
        directory, base = os.path.split(prefix)

    search_dir = cwd / directory if directory else cwd
    try:
        matches = [entry for entry in search_dir.iterdir() if entry.name.startswith(base)]
    except OSError:
        return text
    if len(matches) != 1:
        return text

    entry = matches[0]
    completed = os.path.join(directory, entry.name) if directory else entry.name
    if entry.is_dir():
        completed += "/"
    return f"{name} {completed}"
