"""Default values applied when notation leaves a note property unspecified."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

SUPPORTED_DENOMINATORS: Tuple[int, ...] = (1, 2, 4, 8, 16, 32)


@dataclass(frozen=True)
class NotationDefaults:
    """Codec-wide defaults; durations are expressed in musical beats."""

    velocity: int = 100
    duration: float = 1.0
    probability: float = 1.0
    velocity_deviation: float = 0.0
    time_signature: Tuple[int, int] = (4, 4)
    precision: int = 3
    tolerance: float = 0.001


DEFAULTS = NotationDefaults()

__all__ = ["NotationDefaults", "DEFAULTS", "SUPPORTED_DENOMINATORS"]
