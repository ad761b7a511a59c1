"""Default configuration values for accela."""

# Pygments style used for syntax colouring
DEFAULT_STYLE = "monokai"

# Screen columns a tab advances to (next multiple of this width)
DEFAULT_TAB_SIZE = 4

# Lines of context re-tokenized above and below a dirty range
HIGHLIGHT_MARGIN = 50

# Rows kept for the status bar and the command line
RESERVED_ROWS = 2

MIN_GUTTER_WIDTH = 3

DEFAULT_LOG_LEVEL = "WARNING"

# Command-line names and their short aliases
COMMAND_ALIASES = {
    "q": "quit",
    "quit": "quit",
    "w": "write",
    "write": "write",
    "wq": "write-quit",
    "write-quit": "write-quit",
    "e": "edit",
    "edit": "edit",
    "hsplit": "horizontal-split",
    "horizontal-split": "horizontal-split",
    "vsplit": "vertical-split",
    "vertical-split": "vertical-split",
    "close": "close",
    "g": "goto",
    "goto": "goto",
}

# Commands whose argument is completed against the filesystem
PATH_COMMANDS = {"edit", "horizontal-split", "vertical-split", "write"}
