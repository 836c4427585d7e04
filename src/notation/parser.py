"""Bar|beat notation -> note events.

A position token (``1|1``) opens a group of simultaneous notes. ``t`` and
``v`` tokens override duration and velocity for the single pitch token that
follows them::

    1|1 C3 E3 G3 1|3 t2 v80 C4

Parsing is all-or-nothing: the first bad token raises with its index and no
events are returned.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Iterator, List, Optional, Tuple

from .barbeat_time import (
    POSITION_GRAMMAR,
    duration_to_beats,
    position_to_beats,
    validate_time_signature,
)
from .config import DEFAULTS
from .errors import NotationError, NotationRangeError, NotationSyntaxError
from .events import NoteEvent
from .pitch import NOTE_NAME_GRAMMAR, from_name

logger = logging.getLogger(__name__)

_VELOCITY = re.compile(r"^v(-?\d+)$")
_PITCH_SHAPE = re.compile(r"^[A-Za-z][#bB]?-?\d+$")

TOKEN_GRAMMAR = (
    'a position "bar|beat", a duration "t<beats>", a velocity "v<0-127>" '
    f"or {NOTE_NAME_GRAMMAR}"
)


def tokenize_notation(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(index, token)`` pairs for whitespace-separated tokens."""

    for index, token in enumerate((text or "").split()):
        yield index, token


@dataclass
class _PendingNote:
    """Overrides waiting for the next pitch token."""

    duration: Optional[float] = None
    velocity: Optional[int] = None
    first_index: Optional[int] = None
    first_token: Optional[str] = None

    def remember(self, index: int, token: str) -> None:
        if self.first_index is None:
            self.first_index = index
            self.first_token = token

    @property
    def active(self) -> bool:
        return self.first_index is not None


def _fail_dangling(pending: _PendingNote) -> None:
    if pending.active:
        raise NotationSyntaxError(
            "Override is not followed by a pitch",
            token=pending.first_token,
            index=pending.first_index,
            expected=NOTE_NAME_GRAMMAR,
        )


def _parse_velocity(token: str, index: int) -> int:
    match = _VELOCITY.match(token)
    if match is None:
        raise NotationSyntaxError(
            "Invalid velocity", token=token, index=index, expected='"v<integer 0-127>" like "v90"'
        )
    velocity = int(match.group(1))
    if not 0 <= velocity <= 127:
        raise NotationRangeError(
            f"Velocity must be 0-127, got {velocity}",
            token=token,
            index=index,
            expected='"v<integer 0-127>"',
        )
    return velocity


def _is_position(token: str) -> bool:
    return "|" in token


def _is_duration(token: str) -> bool:
    return token.startswith("t") and len(token) > 1


def _is_velocity(token: str) -> bool:
    return token.startswith("v") and len(token) > 1


def _fail_empty_group(group_token: Optional[Tuple[int, str]], group_size: int) -> None:
    if group_token is not None and group_size == 0:
        raise NotationSyntaxError(
            "Position has no notes",
            token=group_token[1],
            index=group_token[0],
            expected=NOTE_NAME_GRAMMAR,
        )


def parse_notation(text: str, numerator: int, denominator: int) -> List[NoteEvent]:
    """Parse notation into note events positioned in host beats."""

    validate_time_signature(numerator, denominator)
    default_duration = DEFAULTS.duration * 4 / denominator
    events: List[NoteEvent] = []
    current_start: Optional[float] = None
    group_token: Optional[Tuple[int, str]] = None
    group_size = 0
    pending = _PendingNote()

    for index, token in tokenize_notation(text):
        try:
            if _is_position(token):
                _fail_dangling(pending)
                _fail_empty_group(group_token, group_size)
                current_start = position_to_beats(token, numerator, denominator)
                group_token = (index, token)
                group_size = 0
                continue

            if current_start is None:
                raise NotationSyntaxError(
                    "Notes and overrides must follow a position",
                    token=token,
                    expected=POSITION_GRAMMAR,
                )

            if _is_duration(token):
                pending.duration = duration_to_beats(token[1:], numerator, denominator)
                pending.remember(index, token)
                continue

            if _is_velocity(token):
                pending.velocity = _parse_velocity(token, index)
                pending.remember(index, token)
                continue

            if not _PITCH_SHAPE.match(token):
                raise NotationSyntaxError(
                    "Unknown token", token=token, expected=TOKEN_GRAMMAR
                )
            pitch = from_name(token)
        except NotationError as exc:
            if exc.index is not None:
                raise
            raise exc.with_index(index, token) from exc

        events.append(
            NoteEvent(
                pitch=pitch,
                start_time=current_start,
                duration=pending.duration if pending.duration is not None else default_duration,
                velocity=pending.velocity if pending.velocity is not None else DEFAULTS.velocity,
                probability=DEFAULTS.probability,
                velocity_deviation=DEFAULTS.velocity_deviation,
            )
        )
        group_size += 1
        pending = _PendingNote()

    _fail_dangling(pending)
    _fail_empty_group(group_token, group_size)
    logger.debug(
        "Parsed %d notes in %d/%d from %d characters",
        len(events),
        numerator,
        denominator,
        len(text or ""),
    )
    return events


__all__ = ["parse_notation", "tokenize_notation", "TOKEN_GRAMMAR"]
