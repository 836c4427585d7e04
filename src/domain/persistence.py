"""JSON payload helpers for clips and note lists exchanged with tool calls."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from notation.events import NoteEvent

from .models import Clip


class NoteSerializer:
    """Serialize note events to/from JSON-compatible lists."""

    @staticmethod
    def to_payload(notes: Iterable[NoteEvent]) -> List[Dict[str, Any]]:
        """Convert notes to JSON-ready dictionaries."""

        return [note.model_dump(mode="json") for note in notes]

    @staticmethod
    def from_payload(payload: Iterable[Mapping[str, Any]]) -> List[NoteEvent]:
        """Validate raw dictionaries into note events."""

        return [NoteEvent.model_validate(item) for item in payload]

    @classmethod
    def loads(cls, text: str) -> List[NoteEvent]:
        """Parse a JSON array of notes, or an object with a ``notes`` key."""

        payload = json.loads(text)
        if isinstance(payload, Mapping):
            payload = payload.get("notes", [])
        if not isinstance(payload, list):
            raise ValueError("Expected a JSON list of notes")
        return cls.from_payload(payload)

    @classmethod
    def dumps(cls, notes: Iterable[NoteEvent], *, indent: int | None = 2) -> str:
        return json.dumps(cls.to_payload(notes), indent=indent)


class ClipSerializer:
    """Serialize :class:`Clip` instances to/from JSON-compatible dicts."""

    @staticmethod
    def to_dict(clip: Clip) -> Dict[str, Any]:
        """Convert a clip to a JSON-ready dictionary."""

        return clip.model_dump(mode="json")

    @staticmethod
    def from_dict(payload: Dict[str, Any]) -> Clip:
        """Rehydrate a clip instance from serialized data."""

        return Clip.model_validate(payload)


class ClipFileAdapter:
    """Filesystem adapter that persists clip documents under a base path."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path

    def save(self, clip: Clip, filename: str) -> Path:
        """Write the clip to ``base_path / filename`` and return the path."""

        destination = self.base_path / filename
        destination.parent.mkdir(parents=True, exist_ok=True)
        data = json.dumps(ClipSerializer.to_dict(clip), indent=2)
        destination.write_text(data, encoding="utf-8")
        return destination

    def load(self, filename: str) -> Clip:
        """Load the clip stored at ``base_path / filename``."""

        source = self.base_path / filename
        payload = json.loads(source.read_text(encoding="utf-8"))
        return ClipSerializer.from_dict(payload)
