import pytest

from notation.errors import NotationRangeError, NotationSyntaxError, TimeSignatureError
from notation.events import NoteEvent
from notation.parser import parse_notation, tokenize_notation


def test_sequential_notes_in_common_time():
    notes = parse_notation("1|1 C3 1|2 D3 1|3 E3", 4, 4)

    assert notes == [
        NoteEvent(pitch=60, start_time=0.0, duration=1.0, velocity=100),
        NoteEvent(pitch=62, start_time=1.0, duration=1.0, velocity=100),
        NoteEvent(pitch=64, start_time=2.0, duration=1.0, velocity=100),
    ]
    assert all(note.probability == 1.0 for note in notes)
    assert all(note.velocity_deviation == 0 for note in notes)


def test_pitches_after_a_position_are_simultaneous():
    notes = parse_notation("1|1 C3 E3 G3 2|1 C4", 4, 4)

    assert [note.pitch for note in notes] == [60, 64, 67, 72]
    assert [note.start_time for note in notes] == [0.0, 0.0, 0.0, 4.0]


def test_compound_meter_scales_positions_and_default_duration():
    notes = parse_notation("1|1 C3 1|3 D3 1|5 E3", 6, 8)

    assert [note.start_time for note in notes] == [0.0, 1.0, 2.0]
    assert all(note.duration == 0.5 for note in notes)


def test_overrides_apply_to_the_next_pitch_only():
    first, second = parse_notation("1|1 t0.25 v100 C1 1|2 v90 D1", 4, 4)

    assert (first.pitch, first.duration, first.velocity) == (36, 0.25, 100)
    assert (second.pitch, second.duration, second.velocity) == (38, 1.0, 90)


def test_override_clears_within_a_group():
    held, plain = parse_notation("1|1 t2 v70 C3 D3", 4, 4)

    assert (held.duration, held.velocity) == (2.0, 70)
    assert (plain.duration, plain.velocity) == (1.0, 100)


def test_velocity_may_precede_duration():
    (note,) = parse_notation("1|1 v90 t0.5 C3", 4, 4)
    assert (note.duration, note.velocity) == (0.5, 90)


@pytest.mark.parametrize(
    ("token", "numerator", "denominator", "expected"),
    [
        ("t1:0", 4, 4, 4.0),
        ("t1:0", 6, 8, 3.0),
        ("t0:2", 3, 4, 2.0),
        ("t3", 6, 8, 1.5),
        ("t1/3", 4, 4, 1 / 3),
    ],
)
def test_duration_override_units(token, numerator, denominator, expected):
    (note,) = parse_notation(f"1|1 {token} C3", numerator, denominator)
    assert note.duration == pytest.approx(expected)


def test_fractional_positions():
    notes = parse_notation("1|2.5 C3 2|1+1/2 D3", 4, 4)
    assert [note.start_time for note in notes] == [1.5, 4.5]


def test_deletion_marker_velocity_parses():
    (note,) = parse_notation("1|1 v0 C3", 4, 4)
    assert note.velocity == 0
    assert note.is_deletion_marker


@pytest.mark.parametrize("text", ["", "   ", "\n\t "])
def test_blank_input_yields_no_notes(text):
    assert parse_notation(text, 4, 4) == []


def test_unknown_pitch_reports_token_and_index():
    with pytest.raises(NotationSyntaxError) as excinfo:
        parse_notation("1|1 Z9", 4, 4)

    error = excinfo.value
    assert error.token == "Z9"
    assert error.index == 1
    assert error.expected
    assert "'Z9'" in str(error)
    assert "index 1" in str(error)


def test_velocity_out_of_range():
    with pytest.raises(NotationRangeError, match="200") as excinfo:
        parse_notation("1|1 v200 C3", 4, 4)
    assert excinfo.value.index == 1
    assert excinfo.value.token == "v200"


@pytest.mark.parametrize(
    ("text", "index"),
    [
        ("1|1 t0 C3", 1),
        ("1|1 C3 t-1 D3", 2),
        ("1|1 t0:0 C3", 1),
    ],
)
def test_non_positive_duration_override(text, index):
    with pytest.raises(NotationRangeError) as excinfo:
        parse_notation(text, 4, 4)
    assert excinfo.value.index == index


@pytest.mark.parametrize(
    ("text", "index", "token"),
    [
        ("C3", 0, "C3"),
        ("t2 1|1 C3", 0, "t2"),
        ("1|1", 0, "1|1"),
        ("1|1 C3 1|2", 2, "1|2"),
        ("1|1 1|2 C3", 0, "1|1"),
        ("1|1 t2", 1, "t2"),
        ("1|1 v90 2|1 C3", 1, "v90"),
        ("1|1 v9.5 C3", 1, "v9.5"),
        ("1|1 foo", 1, "foo"),
        ("1|1 C3 x|y D3", 2, "x|y"),
        ("1|1 C3 1:2 D3", 2, "1:2"),
        ("1|1 tq C3", 1, "tq"),
    ],
)
def test_syntax_errors_carry_token_and_index(text, index, token):
    with pytest.raises(NotationSyntaxError) as excinfo:
        parse_notation(text, 4, 4)
    assert excinfo.value.index == index
    assert excinfo.value.token == token


def test_position_before_the_clip_is_a_range_error():
    with pytest.raises(NotationRangeError) as excinfo:
        parse_notation("1|1 C3 0|1 D3", 4, 4)
    assert excinfo.value.index == 2


def test_invalid_time_signature_is_rejected_before_parsing():
    with pytest.raises(TimeSignatureError):
        parse_notation("1|1 C3", 4, 3)


def test_tokenize_notation_indexes_tokens():
    assert list(tokenize_notation(" 1|1  C3\nD3 ")) == [(0, "1|1"), (1, "C3"), (2, "D3")]
