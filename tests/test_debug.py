"""
Tests for the logging wrapper.
"""

import logging

import pytest

from connectfour.debug import DebugManager, DebugLevel, TRACE, debug


class TestDebugManager:
    def test_level_from_string(self):
        assert DebugLevel.from_string("Trace") == DebugLevel.TRACE
        with pytest.raises(ValueError):
            DebugLevel.from_string("loud")

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("CONNECTFOUR_DEBUG", "debug")
        assert DebugManager().level == DebugLevel.DEBUG

        monkeypatch.setenv("CONNECTFOUR_DEBUG", "nonsense")
        assert DebugManager().level == DebugLevel.WARNING

    def test_trace_level_registered(self):
        assert logging.getLevelName(TRACE) == "TRACE"

    def test_component_filter(self):
        debug.configure(level=DebugLevel.DEBUG, components=["ai"])
        assert debug.is_enabled_for(DebugLevel.DEBUG, "ai")
        assert not debug.is_enabled_for(DebugLevel.DEBUG, "env")
        assert not debug.is_enabled_for(DebugLevel.TRACE, "ai")

    def test_messages_reach_logger(self, caplog):
        debug.configure(level=DebugLevel.INFO)
        with caplog.at_level(logging.INFO, logger="connectfour"):
            debug.info("difficulty changed", "ai")
            debug.debug("hidden", "ai")

        assert "[ai] difficulty changed" in caplog.text
        assert "hidden" not in caplog.text

    def test_timer(self):
        debug.start_timer("block")
        elapsed = debug.end_timer("block")
        assert elapsed is not None and elapsed >= 0
        assert debug.end_timer("block") is None

        with debug.timer("context"):
            pass
