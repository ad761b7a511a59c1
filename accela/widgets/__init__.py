"""Widget components for accela."""

from .editor import EditorView, key_event

__all__ = [
    "EditorView",
    "key_event",
]
