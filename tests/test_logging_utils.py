import json

from minecrawl import logging_utils
from minecrawl.logging_utils import get_logger
from minecrawl.room import LEFT, Room


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    get_logger("test.kv").info(event="room_generated", size="9x9", note="two words", skipped=None)
    line = capsys.readouterr().out.strip()
    assert line.startswith("level=info ts=")
    assert "event=room_generated" in line
    assert "note=two_words" in line
    assert "skipped" not in line
    assert "logger=test.kv" in line


def test_json_format(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    get_logger("test.json").warn(event="placement_underfill", kind="bomb", requested=5, placed=3)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["level"] == "warn"
    assert rec["placed"] == 3
    assert rec["logger"] == "test.json"


def test_level_filtering(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    log = get_logger("test.level")
    log.debug(event="hidden")
    log.info(event="hidden")
    assert capsys.readouterr().out == ""
    log.error(event="shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=shown" in captured.err


def test_set_level(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.CURRENT_LEVEL)
    logging_utils.set_level("debug")
    assert logging_utils.CURRENT_LEVEL == 10


def test_logger_cache():
    assert get_logger("same") is get_logger("same")


def test_room_generation_logs_room_level(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    room = Room(15, 15, 30, LEFT, 10, 3, 2, seed=77)
    assert room.level == 1
    lines = [ln for ln in capsys.readouterr().out.splitlines() if "event=room_generated" in ln]
    assert len(lines) == 1
    assert lines[0].startswith("level=info ")
    assert "room_level=1" in lines[0]


def test_room_generation_logs_room_level_as_json(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    Room(12, 12, 30, LEFT, 5, seed=3)
    recs = [json.loads(ln) for ln in capsys.readouterr().out.splitlines() if '"room_generated"' in ln]
    assert recs[0]["level"] == "info"
    assert recs[0]["room_level"] == 1
