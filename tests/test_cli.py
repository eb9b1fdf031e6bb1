import json
import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from subtrack.cli import CLIHandler
from subtrack.log_setup import setup_logging


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SUBTRACK_CONFIG", raising=False)
    root = logging.getLogger()
    saved_level = root.level
    yield
    # Drop the console and file handlers installed by setup_logging
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


def test_convert_command(tmp_path, sample_srt, capsys):
    source = tmp_path / "a.srt"
    source.write_text(sample_srt, encoding="utf-8")

    CLIHandler().run(["convert", str(source)])

    assert (tmp_path / "a.vtt").read_text(encoding="utf-8").startswith("WEBVTT\n\n00:00:01.000")
    assert str(tmp_path / "a.vtt") in capsys.readouterr().out


def test_cues_command_prints_json(tmp_path, sample_srt, capsys):
    source = tmp_path / "a.srt"
    source.write_text(sample_srt, encoding="utf-8")

    CLIHandler().run(["cues", str(source)])

    captured = capsys.readouterr()
    rows = json.loads(captured.out)
    assert "INFO" in captured.err
    assert [r["start"] for r in rows] == ["00:00:01.000", "00:00:03.000"]
    assert rows[1]["text"] == "Line one\nLine two"


def test_missing_input_exits_with_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        CLIHandler().run(["convert", str(tmp_path / "nope.srt")])
    assert excinfo.value.code == 1


def test_setup_logging_console_stream(tmp_path, capsys):
    setup_logging(log_dir=str(tmp_path / "logs"), stream=sys.stderr)
    logging.getLogger("subtrack.test").info("to stderr")
    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert captured.out == ""
    assert (tmp_path / "logs" / "subtrack.log").exists()
