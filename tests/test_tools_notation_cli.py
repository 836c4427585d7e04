import io
import json
from pathlib import Path

from tools import notation_cli


def run(args, stdin_text=""):
    stdout, stderr = io.StringIO(), io.StringIO()
    exit_code = notation_cli.main(args, stdin=io.StringIO(stdin_text), stdout=stdout, stderr=stderr)
    return exit_code, stdout.getvalue(), stderr.getvalue()


def test_cli_parses_notation_to_json():
    exit_code, out, _ = run(["parse", "1|1 C3 1|2 v90 D3"])
    assert exit_code == 0
    notes = json.loads(out)
    assert [(note["pitch"], note["start_time"], note["velocity"]) for note in notes] == [
        (60, 0.0, 100),
        (62, 1.0, 90),
    ]


def test_cli_formats_notes_from_file(tmp_path: Path):
    notes_file = tmp_path / "notes.json"
    notes_file.write_text(
        json.dumps([{"pitch": 62, "start_time": 1.0, "duration": 0.5}, {"pitch": 60, "start_time": 0.0, "duration": 0.5}]),
        encoding="utf-8",
    )
    exit_code, out, _ = run(["--time-signature", "6/8", "format", "--notes-file", str(notes_file)])
    assert exit_code == 0
    assert out.strip() == "1|1 C3 1|3 D3"


def test_cli_formats_notes_from_stdin():
    exit_code, out, _ = run(["format"], stdin_text='{"notes": [{"pitch": 64, "start_time": 2}]}')
    assert exit_code == 0
    assert out.strip() == "1|3 E3"


def test_cli_time_conversions():
    assert run(["--time-signature", "6/8", "position", "1"])[1].strip() == "1|3"
    assert run(["--time-signature", "6/8", "duration", "4"])[1].strip() == "1:2"
    assert json.loads(run(["to-beats", "2|1"])[1]) == 4.0
    assert json.loads(run(["--time-signature", "6/8", "to-beats", "1:2"])[1]) == 4.0


def test_cli_reports_codec_errors():
    exit_code, out, err = run(["parse", "1|1 Z9"])
    assert exit_code == 2
    assert out == ""
    assert err.startswith("error: Unrecognized pitch")
    assert "index 1" in err
