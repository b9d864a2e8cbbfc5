"""Tests for the structlog setup."""

from __future__ import annotations

import json

import structlog

from novendor.core.logging import setup_logging


class TestSetupLogging:
    def test_default_level_hides_debug(self, monkeypatch, capsys):
        monkeypatch.delenv("NOVENDOR_LOG_LEVEL", raising=False)
        monkeypatch.delenv("NOVENDOR_LOG_FORMAT", raising=False)
        setup_logging()
        structlog.get_logger("novendor.test").debug("test.hidden")
        structlog.get_logger("novendor.test").warning("test.shown")
        captured = capsys.readouterr()
        assert "test.hidden" not in captured.err
        assert "test.shown" in captured.err
        assert captured.out == ""

    def test_json_format_on_stderr(self, monkeypatch, capsys):
        monkeypatch.delenv("NOVENDOR_LOG_LEVEL", raising=False)
        monkeypatch.setenv("NOVENDOR_LOG_FORMAT", "json")
        setup_logging(verbose=True)
        structlog.get_logger("novendor.test").debug("test.event", import_path="example.org/x")
        captured = capsys.readouterr()
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "test.event"
        assert record["import_path"] == "example.org/x"
        assert record["level"] == "debug"
        assert record["logger"] == "novendor.test"
        assert "timestamp" in record
        assert captured.out == ""

    def test_level_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("NOVENDOR_LOG_LEVEL", "error")
        monkeypatch.delenv("NOVENDOR_LOG_FORMAT", raising=False)
        setup_logging(verbose=True)
        structlog.get_logger("novendor.test").warning("test.hidden")
        assert "test.hidden" not in capsys.readouterr().err
