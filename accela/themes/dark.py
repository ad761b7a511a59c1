"""Dark theme definitions for accela."""

from rich.style import Style

from .base import EditorTheme

# Dark theme matching the default "monokai" pygments style.
# Selection uses terminal blue, search matches terminal yellow.
DARK_THEME = EditorTheme(
    name="dark",
    text_style=Style(),
    gutter_style=Style(color="#75715e"),
    selection_style=Style(color="white", bgcolor="blue"),
    search_style=Style(color="black", bgcolor="yellow"),
    status_style=Style(color="black", bgcolor="#a0a0a0"),
    command_style=Style(),
    error_style=Style(color="#f92672", bold=True),
)
