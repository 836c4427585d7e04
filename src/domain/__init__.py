"""Domain package exposing clip models and JSON persistence helpers."""
from .models import Clip, NoteEvent, TimeSignature
from .persistence import ClipFileAdapter, ClipSerializer, NoteSerializer

__all__ = [
    "Clip",
    "NoteEvent",
    "TimeSignature",
    "ClipFileAdapter",
    "ClipSerializer",
    "NoteSerializer",
]
