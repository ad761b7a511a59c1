"""Main application for accela."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult

from .config import Config
from .editor import Editor
from .exceptions import AccelaError
from .widgets import EditorView

logger = logging.getLogger(__name__)


class AccelaApp(App, inherit_bindings=False):
    """Terminal text editor application.

    All keys go to the ``EditorView``; the app keeps no bindings of its
    own so shortcuts such as Ctrl+C and Ctrl+Q reach the editor.
    """

    CSS = """
    Screen {
        overflow: hidden;
    }

    EditorView {
        width: 1fr;
        height: 1fr;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    def __init__(self, editor: Editor):
        super().__init__()
        self.editor = editor

    def compose(self) -> ComposeResult:
        yield EditorView(self.editor, id="editor")

    def on_mount(self) -> None:
        self.title = "accela"
        self.query_one(EditorView).focus()


def configure_logging(config: Config) -> None:
    """Send log records to the configured file; the terminal belongs to the UI."""
    if not config.logging.file:
        logging.getLogger("accela").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=config.logging.file,
        level=config.logging.get_level(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point."""
    args = sys.argv[1:] if argv is None else argv
    path = Path(args[0]) if args else None

    try:
        config = Config.load(Path.cwd())
        configure_logging(config)
        editor = Editor(config)
        if path is not None:
            editor.open_file(path)
        app = AccelaApp(editor)
        app.run()
    except (AccelaError, OSError) as e:
        logger.exception("Startup failed")
        print(f"accela: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
