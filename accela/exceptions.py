"""Custom exceptions for accela.

This module defines the exception hierarchy for accela, allowing callers
to catch and handle editor-specific errors.

Example:
    ```python
    from accela.exceptions import AccelaError, FileOperationError

    try:
        buffer.save()
    except FileOperationError as e:
        print(f"Could not save: {e}")
    ```
"""


class AccelaError(Exception):
    """Base exception for all accela errors.

    All exceptions raised by accela inherit from this class,
    making it easy to catch all editor-specific errors.
    """

    pass


class ConfigError(AccelaError):
    """Error related to configuration loading or validation.

    Raised when:
    - A configuration value has the wrong type
    - A configuration value is out of range
    """

    pass


class FileOperationError(AccelaError):
    """Error during file operations.

    Raised when:
    - File cannot be read (permissions, encoding)
    - File cannot be saved (permissions, disk full, missing directory)
    - A buffer has no file name to save to
    """

    pass


class TerminalError(AccelaError):
    """Error related to the terminal surface.

    Raised when:
    - The terminal cannot be initialised
    - The grid is resized to a negative size
    """

    pass


class CommandError(AccelaError):
    """Error raised while running a command-line command.

    The message is shown to the user verbatim on the status line.
    """

    pass


class ClipboardError(AccelaError):
    """Error raised when the system clipboard is unavailable."""

    pass
