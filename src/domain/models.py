"""Pydantic-powered domain models for host clips.

Clips mirror the MIDI clips exposed by the host scripting API: a time
signature, a loop length in host beats and a flat list of note events.
The codec itself never stores a time signature; clips carry one so the clip
tools can hand it to every codec call.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Iterable, List

from pydantic import BaseModel, Field

from notation.events import NoteEvent, TimeSignature


class Clip(BaseModel):
    """MIDI clip holding note events positioned in host beats."""

    id: str
    name: str = ""
    time_signature: TimeSignature = Field(default_factory=TimeSignature)
    length: float = Field(4.0, gt=0.0, description="Clip loop length in host beats")
    notes: List[NoteEvent] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        """Update the modification timestamp."""

        self.updated_at = datetime.now(UTC)

    def replace_notes(self, notes: Iterable[NoteEvent]) -> None:
        """Swap the clip's notes while keeping timestamps accurate."""

        self.notes = list(notes)
        self.touch()

    @property
    def end_time(self) -> float:
        """Return the latest note end, or 0 for an empty clip."""

        return max((note.start_time + note.duration for note in self.notes), default=0.0)

    @property
    def bar_count(self) -> float:
        """Return the clip length measured in bars of its time signature."""

        return self.length / self.time_signature.host_beats_per_bar


__all__ = ["Clip", "NoteEvent", "TimeSignature"]
