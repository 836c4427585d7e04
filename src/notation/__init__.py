"""Bar|beat notation codec: pitch names, bar|beat time, parse and format."""
from .barbeat_time import (
    BarBeatDuration,
    BarBeatPosition,
    beats_to_duration,
    beats_to_position,
    duration_to_beats,
    position_to_beats,
    validate_time_signature,
)
from .config import DEFAULTS, SUPPORTED_DENOMINATORS, NotationDefaults
from .errors import (
    NotationError,
    NotationRangeError,
    NotationSyntaxError,
    TimeSignatureError,
)
from .events import NoteEvent, TimeSignature
from .formatter import format_notation
from .parser import parse_notation, tokenize_notation
from .pitch import from_name, is_valid_note_name, to_name

__all__ = [
    "BarBeatDuration",
    "BarBeatPosition",
    "beats_to_duration",
    "beats_to_position",
    "duration_to_beats",
    "position_to_beats",
    "validate_time_signature",
    "DEFAULTS",
    "SUPPORTED_DENOMINATORS",
    "NotationDefaults",
    "NotationError",
    "NotationRangeError",
    "NotationSyntaxError",
    "TimeSignatureError",
    "NoteEvent",
    "TimeSignature",
    "format_notation",
    "parse_notation",
    "tokenize_notation",
    "from_name",
    "is_valid_note_name",
    "to_name",
]
