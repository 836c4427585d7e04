"""Bar|beat position and bar:beat duration conversions.

The host measures time in quarter notes ("host beats") whatever the meter.
Musical beats scale with the time signature denominator, so in 6/8 one
eighth note is a musical beat while the host still counts quarters::

    musical_beats = host_beats * denominator / 4

Positions (``"bar|beat"``) are 1-indexed locations. Durations
(``"bar:beat"``) are 0-indexed magnitudes. The two string kinds are
returned as distinct ``str`` subclasses so callers cannot silently swap them.
"""
from __future__ import annotations

from fractions import Fraction
import math
import re
from typing import Tuple

from .config import DEFAULTS, SUPPORTED_DENOMINATORS
from .errors import NotationRangeError, NotationSyntaxError, TimeSignatureError

_BEAT_VALUE = r"-?\d+(?:\.\d+|/\d+|\+\d+/\d+)?|-?\.\d+"
_POSITION = re.compile(rf"^(-?\d+)\|({_BEAT_VALUE})$")
_DURATION = re.compile(rf"^(-?\d+):({_BEAT_VALUE})$")
_BEATS_ONLY = re.compile(rf"^(?:{_BEAT_VALUE})$")

POSITION_GRAMMAR = (
    '"{int}|{beat}" like "1|2", "2|3.5", "1|4/3" or "1|2+1/3" '
    "(bar and beat both start at 1)"
)
DURATION_GRAMMAR = (
    '"{int}:{beat}" like "1:0" or "0:1.5", or a beat count like "2", "0.25" or "4/3"'
)


def validate_time_signature(numerator: int, denominator: int) -> Tuple[int, int]:
    """Return ``(numerator, denominator)`` or raise :class:`TimeSignatureError`."""

    if isinstance(numerator, bool) or not isinstance(numerator, int) or numerator <= 0:
        raise TimeSignatureError(
            f"Time signature numerator must be a positive integer, got {numerator!r}"
        )
    if (
        isinstance(denominator, bool)
        or not isinstance(denominator, int)
        or denominator not in SUPPORTED_DENOMINATORS
    ):
        supported = ", ".join(str(value) for value in SUPPORTED_DENOMINATORS)
        raise TimeSignatureError(
            f"Time signature denominator must be one of {supported}, got {denominator!r}"
        )
    return numerator, denominator


def format_beat_value(value: float, precision: int = DEFAULTS.precision) -> str:
    """Render a beat count without trailing zeros (``2``, ``2.5``, ``1.333``)."""

    rounded = round(float(value), precision)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{precision}f}".rstrip("0").rstrip(".")


def parse_beat_value(text: str, *, context: str | None = None, kind: str = "duration") -> float:
    """Parse ``"2.5"``, ``"4/3"`` or ``"2+1/3"`` into a float."""

    source = context if context is not None else text
    grammar = POSITION_GRAMMAR if kind == "bar|beat" else DURATION_GRAMMAR
    try:
        if "+" in text:
            whole, _, fraction = text.partition("+")
            value = Fraction(int(whole)) + Fraction(fraction)
        else:
            value = Fraction(text)
    except ZeroDivisionError as exc:
        raise NotationSyntaxError(
            f"Invalid {kind} format: division by zero", token=source, expected=grammar
        ) from exc
    except ValueError as exc:
        raise NotationSyntaxError(
            f"Invalid {kind} format", token=source, expected=grammar
        ) from exc
    return float(value)


class _BarBeatString(str):
    """String tagged with the bar and beat components it was built from."""

    separator = ""
    kind = ""
    bar: int
    beat: float

    def __new__(
        cls, bar: int, beat: float, precision: int = DEFAULTS.precision
    ) -> _BarBeatString:
        text = f"{bar}{cls.separator}{format_beat_value(beat, precision)}"
        instance = super().__new__(cls, text)
        instance.bar = int(bar)
        instance.beat = float(beat)
        return instance

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class BarBeatPosition(_BarBeatString):
    """1-indexed ``"bar|beat"`` location."""

    separator = "|"
    kind = "bar|beat position"


class BarBeatDuration(_BarBeatString):
    """0-indexed ``"bar:beat"`` magnitude."""

    separator = ":"
    kind = "bar:beat duration"


def musical_precision(denominator: int) -> int:
    """Decimals needed so a 0.001 host-beat step survives scaling to musical beats.

    In x/1 and x/2 meters one musical beat spans four or two host beats, so a
    thousandth of a host beat needs extra digits on the musical side.
    """

    return DEFAULTS.precision + {1: 2, 2: 1}.get(denominator, 0)


def _musical_beats(host_beats: float, denominator: int) -> float:
    # denominator / 4 is a power of two, so the scaling adds no rounding error
    return round(host_beats, DEFAULTS.precision) * denominator / 4


def _host_beats(musical_beats: float, denominator: int) -> float:
    return musical_beats * 4 / denominator


def _require_finite(beats: float, what: str) -> float:
    if isinstance(beats, bool) or not isinstance(beats, (int, float)):
        raise NotationRangeError(f"{what} must be a number, got {beats!r}")
    if not math.isfinite(beats):
        raise NotationRangeError(f"{what} must be finite, got {beats!r}")
    if beats < 0:
        raise NotationRangeError(f"{what} cannot be negative, got {beats}")
    return float(beats)


def parse_position(text: str) -> BarBeatPosition:
    """Split a ``"bar|beat"`` string into a tagged position."""

    if isinstance(text, BarBeatDuration):
        raise TypeError(f"Expected a bar|beat position, got bar:beat duration {str(text)!r}")
    if isinstance(text, BarBeatPosition):
        return text
    source = text.strip() if isinstance(text, str) else ""
    match = _POSITION.match(source)
    if match is None:
        raise NotationSyntaxError(
            "Invalid bar|beat position", token=str(text), expected=POSITION_GRAMMAR
        )
    bar = int(match.group(1))
    beat = parse_beat_value(match.group(2), context=source, kind="bar|beat")
    if bar < 1:
        raise NotationRangeError(f"Bar number must be 1 or greater, got {bar}", token=source)
    if beat < 1:
        raise NotationRangeError(
            f"Beat must be 1 or greater, got {format_beat_value(beat)}", token=source
        )
    return BarBeatPosition(bar, beat)


def beats_to_position(beats: float, numerator: int, denominator: int) -> BarBeatPosition:
    """Convert a host-beat offset into a 1-indexed ``"bar|beat"`` position."""

    validate_time_signature(numerator, denominator)
    musical = _musical_beats(_require_finite(beats, "Position"), denominator)
    bar = int(musical // numerator) + 1
    precision = musical_precision(denominator)
    beat = round(musical - (bar - 1) * numerator, precision) + 1
    return BarBeatPosition(bar, beat, precision)


def position_to_beats(position: str, numerator: int, denominator: int) -> float:
    """Convert a ``"bar|beat"`` position into a host-beat offset."""

    validate_time_signature(numerator, denominator)
    parsed = parse_position(position)
    musical = (parsed.bar - 1) * numerator + (parsed.beat - 1)
    return _host_beats(musical, denominator)


def parse_duration(text: str, numerator: int) -> float:
    """Return the musical beats described by a duration string.

    Accepts ``"bar:beat"`` (bars scaled by *numerator*) or a bare beat count.
    """

    if isinstance(text, BarBeatPosition):
        raise TypeError(f"Expected a bar:beat duration, got bar|beat position {str(text)!r}")
    source = text.strip() if isinstance(text, str) else ""
    if "|" in source:
        raise NotationSyntaxError(
            'Invalid duration: use ":" for bar:beat durations, "|" marks positions',
            token=source,
            expected=DURATION_GRAMMAR,
        )
    match = _DURATION.match(source)
    if match is not None:
        bars = int(match.group(1))
        beats = parse_beat_value(match.group(2), context=source)
        if bars < 0:
            raise NotationRangeError(f"Bars in duration must be 0 or greater, got {bars}", token=source)
        if beats < 0:
            raise NotationRangeError(
                f"Beats in duration must be 0 or greater, got {format_beat_value(beats)}",
                token=source,
            )
        return bars * numerator + beats
    if _BEATS_ONLY.match(source) is None:
        raise NotationSyntaxError(
            "Invalid bar:beat duration", token=str(text), expected=DURATION_GRAMMAR
        )
    return parse_beat_value(source)


def beats_to_duration(beats: float, numerator: int, denominator: int) -> BarBeatDuration:
    """Convert a host-beat span into a 0-indexed ``"bar:beat"`` duration."""

    validate_time_signature(numerator, denominator)
    musical = _musical_beats(_require_finite(beats, "Duration"), denominator)
    bars = int(musical // numerator)
    precision = musical_precision(denominator)
    remainder = round(musical - bars * numerator, precision)
    return BarBeatDuration(bars, remainder, precision)


def duration_to_beats(duration: str, numerator: int, denominator: int) -> float:
    """Convert a duration string into host beats; the result is always positive."""

    validate_time_signature(numerator, denominator)
    musical = parse_duration(duration, numerator)
    host = _host_beats(musical, denominator)
    if host <= 0:
        raise NotationRangeError(
            "Duration must be greater than 0", token=str(duration), expected=DURATION_GRAMMAR
        )
    return host


__all__ = [
    "BarBeatPosition",
    "BarBeatDuration",
    "validate_time_signature",
    "format_beat_value",
    "musical_precision",
    "parse_beat_value",
    "parse_position",
    "parse_duration",
    "beats_to_position",
    "position_to_beats",
    "beats_to_duration",
    "duration_to_beats",
]
