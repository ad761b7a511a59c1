"""Data models for accela."""

from .lines import LineStore
from .selection import Selection
from .state import EditorMode, SearchMatch, SplitType, StatusLine

__all__ = ["LineStore", "Selection", "EditorMode", "SearchMatch", "SplitType", "StatusLine"]
