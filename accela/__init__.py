"""accela: a small terminal text editor with split panes and syntax highlighting.

This package provides both the editor application and its core pieces,
which can be driven without a real terminal.

Quick Start (Application):
    ```python
    from accela import AccelaApp, Editor

    editor = Editor()
    editor.open_file(Path("notes.md"))
    AccelaApp(editor).run()
    ```

Driving the editor headless:
    ```python
    from accela import Editor
    from accela.terminal import CellGrid, KeyEvent

    editor = Editor(size=(40, 10))
    editor.handle_event(KeyEvent.character("x"))
    grid = CellGrid(40, 10)
    editor.draw(grid)
    print(grid.row_text(0))
    ```
"""

__version__ = "0.1.0"

from .app import AccelaApp
from .buffer import Buffer
from .config import Config
from .editor import Editor
from .exceptions import (
    AccelaError,
    ClipboardError,
    CommandError,
    ConfigError,
    FileOperationError,
    TerminalError,
)
from .layout import LayoutManager, Pane

__all__ = [
    # Main application
    "AccelaApp",
    "Editor",
    # Configuration
    "Config",
    # Core
    "Buffer",
    "Pane",
    "LayoutManager",
    # Exceptions
    "AccelaError",
    "ConfigError",
    "FileOperationError",
    "TerminalError",
    "CommandError",
    "ClipboardError",
    # Version
    "__version__",
]
