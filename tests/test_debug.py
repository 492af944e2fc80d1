"""Tests for the logging manager."""

import pytest

from connect4_rules.debug import DebugLevel, DebugManager


@pytest.fixture
def manager():
    mgr = DebugManager("connect4_rules.test")
    yield mgr
    mgr.configure(level=DebugLevel.WARNING, components=[], log_file="")


def test_level_filtering(manager, caplog):
    manager.configure(level=DebugLevel.INFO)
    manager.info("shown", "board")
    manager.debug("hidden", "board")

    messages = [r.getMessage() for r in caplog.records]
    assert "[board] shown" in messages
    assert "[board] hidden" not in messages


def test_component_filtering(manager, caplog):
    manager.configure(level=DebugLevel.TRACE, components=["win"])
    manager.trace("scan", "win")
    manager.debug("move", "board")

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["[win] scan"]
    assert caplog.records[0].levelname == "TRACE"


def test_none_level_silences_everything(manager):
    manager.configure(level=DebugLevel.NONE)
    assert not manager.is_enabled_for(DebugLevel.ERROR)


def test_set_from_string(manager):
    assert manager.set_from_string("debug") is True
    assert manager.level == DebugLevel.DEBUG
    assert manager.set_from_string("loud") is False
    assert manager.level == DebugLevel.DEBUG


def test_timers(manager):
    manager.start_timer("win_check")
    assert manager.end_timer("win_check") >= 0.0
    assert manager.end_timer("win_check") is None


def test_log_file(manager, tmp_path):
    path = tmp_path / "game.log"
    manager.configure(level=DebugLevel.INFO, log_file=str(path))
    manager.info("written", "cli")
    manager.configure(log_file="")

    assert "[cli] written" in path.read_text()
