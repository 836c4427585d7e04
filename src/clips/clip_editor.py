"""Clip read/write/update/duplicate helpers built on the notation codec."""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, List, Literal, Tuple

from domain.models import Clip
from notation.barbeat_time import duration_to_beats, position_to_beats
from notation.config import DEFAULTS
from notation.events import NoteEvent
from notation.formatter import format_notation
from notation.parser import parse_notation

logger = logging.getLogger(__name__)

WriteMode = Literal["replace", "merge"]


@dataclass(frozen=True)
class ClipMutation:
    """Record describing a note-list change for auditing or undo."""

    mutation_id: str
    label: str
    previous: Tuple[NoteEvent, ...]
    updated: Tuple[NoteEvent, ...]


def apply_deletion_markers(
    notes: Iterable[NoteEvent], *, tolerance: float = DEFAULTS.tolerance
) -> List[NoteEvent]:
    """Drop notes cancelled by later velocity-0 markers, and the markers."""

    kept: List[NoteEvent] = []
    for note in notes:
        if note.is_deletion_marker:
            kept = [
                existing
                for existing in kept
                if existing.pitch != note.pitch
                or abs(existing.start_time - note.start_time) > tolerance
            ]
            continue
        kept.append(note)
    return kept


class ClipEditor:
    """In-memory helper that performs clip note edits with undo/redo."""

    def __init__(self, clip: Clip) -> None:
        self._clip = clip
        self._history: List[ClipMutation] = []
        self._undo_stack: List[ClipMutation] = []
        self._redo_stack: List[ClipMutation] = []
        self._mutation_counter = 0

    @property
    def clip(self) -> Clip:
        """Return the underlying clip reference."""

        return self._clip

    @property
    def history(self) -> List[ClipMutation]:
        """Return the recorded mutations in order of execution."""

        return list(self._history)

    @property
    def undo_stack(self) -> List[ClipMutation]:
        return list(self._undo_stack)

    @property
    def redo_stack(self) -> List[ClipMutation]:
        return list(self._redo_stack)

    @property
    def time_signature(self) -> Tuple[int, int]:
        return self._clip.time_signature.as_tuple()

    def read_notation(self) -> str:
        """Return the clip's notes as bar|beat notation."""

        return format_notation(self._clip.notes, *self.time_signature)

    def write_notation(self, text: str, *, mode: WriteMode = "replace") -> List[NoteEvent]:
        """Parse *text* into the clip, replacing or merging with existing notes.

        Merge mode appends the parsed notes and then lets velocity-0 notes
        delete matching existing notes. Replace mode drops deletion markers.
        """

        parsed = parse_notation(text, *self.time_signature)
        if mode == "replace":
            updated = apply_deletion_markers(parsed)
        elif mode == "merge":
            updated = apply_deletion_markers([*self._clip.notes, *parsed])
        else:
            raise ValueError(f"Unknown write mode {mode!r}; expected 'replace' or 'merge'")
        self._commit(f"write:{mode}", updated)
        return list(self._clip.notes)

    def notes_in_range(self, start: float, end: float) -> List[NoteEvent]:
        """Return notes starting in ``[start, end)`` host beats."""

        tolerance = DEFAULTS.tolerance
        return [
            note
            for note in self._clip.notes
            if note.start_time >= start - tolerance and note.start_time < end - tolerance
        ]

    def duplicate(self, source_start: str, length: str, destination: str) -> List[NoteEvent]:
        """Copy notes from a bar|beat window to another bar|beat position.

        *length* is a bar:beat duration; the copies are returned.
        """

        numerator, denominator = self.time_signature
        start = position_to_beats(source_start, numerator, denominator)
        span = duration_to_beats(length, numerator, denominator)
        target = position_to_beats(destination, numerator, denominator)
        offset = target - start
        copies = [note.shifted(offset) for note in self.notes_in_range(start, start + span)]
        if copies:
            self._commit("duplicate", [*self._clip.notes, *copies])
        return copies

    def clear(self) -> None:
        """Remove every note from the clip."""

        self._commit("clear", [])

    def undo(self, steps: int = 1) -> List[ClipMutation]:
        """Revert the most recent mutations, returning the applied records."""

        undone: List[ClipMutation] = []
        for _ in range(min(max(steps, 0), len(self._undo_stack))):
            mutation = self._undo_stack.pop()
            self._clip.replace_notes(mutation.previous)
            self._redo_stack.append(mutation)
            undone.append(mutation)
        return undone

    def redo(self, steps: int = 1) -> List[ClipMutation]:
        """Reapply the most recently undone mutations in order."""

        replayed: List[ClipMutation] = []
        for _ in range(min(max(steps, 0), len(self._redo_stack))):
            mutation = self._redo_stack.pop()
            self._clip.replace_notes(mutation.updated)
            self._undo_stack.append(mutation)
            replayed.append(mutation)
        return replayed

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _next_mutation_id(self) -> str:
        self._mutation_counter += 1
        return f"mutation_{self._mutation_counter}"

    def _commit(self, label: str, notes: Iterable[NoteEvent]) -> None:
        previous = tuple(self._clip.notes)
        updated = tuple(notes)
        if previous == updated:
            return
        mutation = ClipMutation(
            mutation_id=self._next_mutation_id(),
            label=label,
            previous=previous,
            updated=updated,
        )
        self._clip.replace_notes(updated)
        self._history.append(mutation)
        self._undo_stack.append(mutation)
        self._redo_stack.clear()
        logger.debug(
            "Clip %s %s: %d -> %d notes",
            self._clip.id,
            label,
            len(previous),
            len(updated),
        )


__all__ = ["ClipEditor", "ClipMutation", "apply_deletion_markers"]
