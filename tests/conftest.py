import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from domain.models import Clip, TimeSignature  # noqa: E402
from notation.events import NoteEvent  # noqa: E402


@pytest.fixture()
def example_clip() -> Clip:
    notes = [
        NoteEvent(pitch=60, start_time=0.0, duration=1.0),
        NoteEvent(pitch=64, start_time=0.0, duration=1.0, velocity=90),
        NoteEvent(pitch=67, start_time=2.0, duration=0.5),
    ]
    return Clip(id="clip-1", name="Keys", length=8.0, notes=notes)


@pytest.fixture()
def compound_clip() -> Clip:
    return Clip(
        id="clip-68",
        name="Shuffle",
        time_signature=TimeSignature(numerator=6, denominator=8),
        length=6.0,
    )
