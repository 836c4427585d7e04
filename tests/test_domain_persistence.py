import json
from pathlib import Path
from typing import Dict

import pytest
from pydantic import ValidationError

from domain.models import Clip, NoteEvent
from domain.persistence import ClipFileAdapter, ClipSerializer, NoteSerializer


def test_clip_serializer_round_trip(example_clip: Clip):
    payload: Dict[str, object] = ClipSerializer.to_dict(example_clip)
    restored = ClipSerializer.from_dict(payload)
    assert restored == example_clip


def test_clip_file_adapter_round_trip(tmp_path: Path, compound_clip: Clip):
    adapter = ClipFileAdapter(tmp_path)
    destination = adapter.save(compound_clip, "clips/shuffle.json")
    assert destination.exists()

    loaded = adapter.load("clips/shuffle.json")
    assert loaded == compound_clip


def test_note_payload_round_trip(example_clip: Clip):
    payload = NoteSerializer.to_payload(example_clip.notes)
    assert payload[1] == {
        "pitch": 64,
        "start_time": 0.0,
        "duration": 1.0,
        "velocity": 90,
        "probability": 1.0,
        "velocity_deviation": 0.0,
    }
    assert NoteSerializer.from_payload(payload) == example_clip.notes


def test_note_loads_accepts_lists_and_wrapped_objects():
    notes = [{"pitch": 60, "start_time": 0}]
    assert NoteSerializer.loads(json.dumps(notes)) == [NoteEvent(pitch=60, start_time=0.0)]
    assert NoteSerializer.loads(json.dumps({"notes": notes})) == [NoteEvent(pitch=60, start_time=0.0)]
    assert NoteSerializer.loads(NoteSerializer.dumps([NoteEvent(pitch=61, start_time=2.0)]))[0].pitch == 61


def test_note_loads_rejects_bad_payloads():
    with pytest.raises(ValueError):
        NoteSerializer.loads('"C3"')
    with pytest.raises(ValidationError):
        NoteSerializer.loads('[{"pitch": 200, "start_time": 0}]')
