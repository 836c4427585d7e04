"""Clip-facing utilities that route note edits through the notation codec."""

from .clip_editor import ClipEditor, ClipMutation, apply_deletion_markers

__all__ = [
    "ClipEditor",
    "ClipMutation",
    "apply_deletion_markers",
]
