"""Pitch name <-> MIDI note number conversion.

The host displays pitch 60 as ``C3`` (one octave below the MIDI standard
name), so the display octave is ``pitch // 12 - 2``. Names are always
written with flats; sharps and lowercase letters are accepted on input.
"""
from __future__ import annotations

import re
from typing import Dict, Tuple

from .errors import NotationRangeError, NotationSyntaxError

MIN_PITCH = 0
MAX_PITCH = 127
OCTAVE_OFFSET = 2

PITCH_CLASS_NAMES: Tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

PITCH_CLASS_VALUES: Dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
}

_LOWERCASE_VALUES = {name.lower(): value for name, value in PITCH_CLASS_VALUES.items()}

_NOTE_NAME = re.compile(r"^([A-Ga-g][#bB]?)(-?\d+)$")

NOTE_NAME_GRAMMAR = 'a note name like "C3", "Eb-1" or "F#4"'


def to_name(pitch: int) -> str:
    """Return the flat-spelled display name for a MIDI pitch."""

    if isinstance(pitch, bool) or not isinstance(pitch, int):
        if isinstance(pitch, float) and pitch.is_integer():
            pitch = int(pitch)
        else:
            raise NotationRangeError(f"Pitch must be an integer 0-127, got {pitch!r}")
    if not MIN_PITCH <= pitch <= MAX_PITCH:
        raise NotationRangeError(f"Pitch must be 0-127, got {pitch}")
    octave = pitch // 12 - OCTAVE_OFFSET
    return f"{PITCH_CLASS_NAMES[pitch % 12]}{octave}"


def from_name(name: str) -> int:
    """Resolve a note name such as ``"Db1"`` or ``"c#-2"`` to a MIDI pitch."""

    match = _NOTE_NAME.match(name.strip()) if isinstance(name, str) else None
    pitch_class = _LOWERCASE_VALUES.get(match.group(1).lower()) if match else None
    if match is None or pitch_class is None:
        raise NotationSyntaxError(
            "Unrecognized pitch", token=str(name), expected=NOTE_NAME_GRAMMAR
        )
    octave = int(match.group(2))
    pitch = (octave + OCTAVE_OFFSET) * 12 + pitch_class
    if not MIN_PITCH <= pitch <= MAX_PITCH:
        raise NotationRangeError(
            f"Pitch {pitch} is outside 0-127", token=name, expected="a note between C-2 and G8"
        )
    return pitch


def is_valid_note_name(name: object) -> bool:
    """Return ``True`` when *name* resolves to a pitch in range."""

    if not isinstance(name, str):
        return False
    try:
        from_name(name)
    except (NotationSyntaxError, NotationRangeError):
        return False
    return True


__all__ = [
    "PITCH_CLASS_NAMES",
    "PITCH_CLASS_VALUES",
    "to_name",
    "from_name",
    "is_valid_note_name",
]
