"""Note events -> minimal bar|beat notation.

Only pitch, start time, duration and velocity survive formatting.
``probability`` and ``velocity_deviation`` are intentionally dropped: the
notation is a partial view of clip state and parsing fills those fields with
their defaults again.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Union

from pydantic import ValidationError

from .barbeat_time import (
    beats_to_position,
    format_beat_value,
    musical_precision,
    validate_time_signature,
)
from .config import DEFAULTS
from .errors import NotationRangeError
from .events import NoteEvent
from .pitch import to_name

logger = logging.getLogger(__name__)

NoteLike = Union[NoteEvent, Mapping[str, Any]]


def _coerce_events(events: Iterable[NoteLike]) -> List[NoteEvent]:
    coerced: List[NoteEvent] = []
    for index, event in enumerate(events):
        try:
            coerced.append(NoteEvent.coerce(event))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or "note"
            raise NotationRangeError(
                f"Invalid note event: {field}: {first.get('msg', 'invalid value')}",
                index=index,
                token=str(event),
            ) from exc
    return coerced


def _note_tokens(event: NoteEvent, default_duration: float, denominator: int) -> List[str]:
    tokens: List[str] = []
    if event.duration > 0 and abs(event.duration - default_duration) > DEFAULTS.tolerance:
        precision = musical_precision(denominator)
        # never let a positive duration round down to an unparseable t0
        musical = max(event.duration * denominator / 4, 10 ** -precision)
        tokens.append(f"t{format_beat_value(musical, precision)}")
    if event.velocity != DEFAULTS.velocity:
        tokens.append(f"v{event.velocity}")
    tokens.append(to_name(event.pitch))
    return tokens


def format_notation(events: Iterable[NoteLike] | None, numerator: int, denominator: int) -> str:
    """Render events as notation, sorted by ``(start_time, pitch)``."""

    validate_time_signature(numerator, denominator)
    notes = sorted(_coerce_events(events or ()), key=lambda note: note.sort_key)
    if not notes:
        return ""

    default_duration = DEFAULTS.duration * 4 / denominator
    tokens: List[str] = []
    current_position = None
    for note in notes:
        position = beats_to_position(note.start_time, numerator, denominator)
        if position != current_position:
            tokens.append(str(position))
            current_position = position
        tokens.extend(_note_tokens(note, default_duration, denominator))

    text = " ".join(tokens)
    logger.debug("Formatted %d notes in %d/%d", len(notes), numerator, denominator)
    return text


__all__ = ["format_notation"]
