import json
import logging
import tempfile
from pathlib import Path

import pytest

from context_tailor.app.cli import main

SCENARIO = [
    {"role": "system", "content": "sys"},
    {"role": "user", "content": "a" * 200},
    {"role": "user", "content": "b" * 200},
    {"role": "user", "content": "tail"},
]


def _write(d: str, data) -> str:
    p = Path(d) / "messages.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return str(p)


def test_cli_tailors_file(capsys):
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, SCENARIO)
        main([path, "--strategy", "tail", "--max-input-tokens", "100"])

    out = json.loads(capsys.readouterr().out)
    assert [m["content"][:1] for m in out] == ["s", "a", "t"]


def test_cli_count(capsys):
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, {"messages": SCENARIO})
        main([path, "--count"])

    out = json.loads(capsys.readouterr().out)
    assert out == {"messages": 4, "tokens": 102, "per_message": [1, 50, 50, 1]}


def test_cli_window(capsys):
    main(["--window", "claude-3-haiku-20240307"])
    assert json.loads(capsys.readouterr().out)["context_window"] == 200000


def test_cli_show_preview(capsys):
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, SCENARIO)
        main([path, "--strategy", "head", "--max-input-tokens", "100", "--show"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "messages=4->3 tokens=102->52 budget=100"
    assert lines[1] == "[0] system: sys"
    assert lines[-1] == "[2] user: tail"


def test_cli_rejects_malformed_input():
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, {"not": "messages"})
        with pytest.raises(SystemExit):
            main([path])


@pytest.mark.parametrize("bad", [
    [{"role": "user", "content": 5}],
    [{"role": "user", "content": "x", "content_parts": "abc"}],
])
def test_cli_rejects_mistyped_fields(bad, capsys):
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, bad)
        with pytest.raises(SystemExit):
            main([path, "--max-input-tokens", "5"])
    assert "invalid message" in capsys.readouterr().err


def test_cli_keeps_log_events_from_env_without_debug(monkeypatch, caplog):
    monkeypatch.setenv("CT_LOG_EVENTS", "1")
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, SCENARIO)
        with caplog.at_level(logging.INFO, logger="context_tailor"):
            main([path, "--max-input-tokens", "100"])
    assert any('"event": "tailor"' in r.getMessage() for r in caplog.records)

    caplog.clear()
    monkeypatch.setenv("CT_LOG_EVENTS", "0")
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, SCENARIO)
        with caplog.at_level(logging.INFO, logger="context_tailor"):
            main([path, "--max-input-tokens", "100"])
            quiet = list(caplog.records)
            main([path, "--max-input-tokens", "100", "--debug"])
    assert not any('"event": "tailor"' in r.getMessage() for r in quiet)
    assert any('"event": "tailor"' in r.getMessage() for r in caplog.records)


def test_cli_negative_budget_keeps_only_preserved(capsys):
    with tempfile.TemporaryDirectory() as d:
        path = _write(d, SCENARIO)
        main([path, "--max-input-tokens", "-5"])

    out = json.loads(capsys.readouterr().out)
    assert [m["content"] for m in out] == ["sys", "tail"]
