"""Pydantic models for the values exchanged with the notation codec."""
from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .barbeat_time import validate_time_signature
from .config import DEFAULTS
from .errors import TimeSignatureError


class NoteEvent(BaseModel):
    """Single clip note expressed in host beats (quarter notes)."""

    model_config = ConfigDict(frozen=True)

    pitch: int = Field(..., ge=0, le=127, description="MIDI note number")
    start_time: float = Field(..., ge=0.0, description="Offset from clip start in host beats")
    duration: float = Field(
        DEFAULTS.duration, description="Length in host beats; unchecked for deletion markers"
    )
    velocity: int = Field(DEFAULTS.velocity, ge=0, le=127, description="MIDI velocity")
    probability: float = Field(DEFAULTS.probability, ge=0.0, le=1.0)
    velocity_deviation: float = Field(DEFAULTS.velocity_deviation)

    @model_validator(mode="after")
    def validate_duration(self) -> NoteEvent:  # type: ignore[override]
        if not self.is_deletion_marker and self.duration <= 0.0:
            raise ValueError("Note duration must be greater than 0")
        return self

    @property
    def is_deletion_marker(self) -> bool:
        """Velocity 0 notes ask collaborators to remove a matching note."""

        return self.velocity == 0

    @property
    def sort_key(self) -> tuple[float, int]:
        return (self.start_time, self.pitch)

    @classmethod
    def coerce(cls, value: NoteEvent | Mapping[str, Any]) -> NoteEvent:
        """Accept either a model instance or a JSON-style mapping."""

        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    def shifted(self, offset: float) -> NoteEvent:
        """Return a copy moved by *offset* host beats."""

        return self.model_copy(update={"start_time": self.start_time + offset})


class TimeSignature(BaseModel):
    """Meter supplied alongside every codec call."""

    model_config = ConfigDict(frozen=True)

    numerator: int = Field(DEFAULTS.time_signature[0], gt=0)
    denominator: int = Field(DEFAULTS.time_signature[1], gt=0)

    @field_validator("denominator")
    @classmethod
    def validate_denominator(cls, value: int) -> int:
        try:
            validate_time_signature(1, value)
        except TimeSignatureError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @classmethod
    def parse(cls, text: str) -> TimeSignature:
        """Build a time signature from ``"6/8"`` style text."""

        numerator, sep, denominator = text.strip().partition("/")
        if not sep:
            raise TimeSignatureError(
                f"Invalid time signature {text!r}", expected='"{numerator}/{denominator}" like "4/4"'
            )
        try:
            values = (int(numerator), int(denominator))
        except ValueError as exc:
            raise TimeSignatureError(
                f"Invalid time signature {text!r}", expected='"{numerator}/{denominator}" like "4/4"'
            ) from exc
        validate_time_signature(*values)
        return cls(numerator=values[0], denominator=values[1])

    def as_tuple(self) -> tuple[int, int]:
        return (self.numerator, self.denominator)

    @property
    def host_beats_per_bar(self) -> float:
        """Length of one bar in quarter notes."""

        return self.numerator * 4 / self.denominator

    @property
    def musical_beat_in_host_beats(self) -> float:
        return 4 / self.denominator

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


__all__ = ["NoteEvent", "TimeSignature"]
