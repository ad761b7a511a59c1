"""Theme structure for accela."""

from dataclasses import dataclass

from rich.style import Style


@dataclass(frozen=True)
class EditorTheme:
    """Styles for everything that is not syntax coloured."""

    name: str
    text_style: Style
    gutter_style: Style
    selection_style: Style
    search_style: Style
    status_style: Style
    command_style: Style
    error_style: Style
