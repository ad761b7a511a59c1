"""Themes for accela."""

from .base import EditorTheme
from .dark import DARK_THEME

__all__ = ["EditorTheme", "DARK_THEME"]
