# Area: Shared Tests
"""Tests for logging setup and protocol mode."""

import json
import logging

import pytest

from imposter_engine._shared.logging_config import (
    JSONFormatter,
    ProtocolFilter,
    TerminalFormatter,
    disable_protocol_mode,
    enable_protocol_mode,
    is_protocol_mode_enabled,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_protocol_mode():
    disable_protocol_mode()
    yield
    disable_protocol_mode()


def make_record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("imposter_engine.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    def test_json_line(self):
        line = json.loads(JSONFormatter().format(make_record(room_id="abc")))
        assert line["level"] == "INFO"
        assert line["logger"] == "imposter_engine.test"
        assert line["message"] == "hello"
        assert line["room_id"] == "abc"
        assert "timestamp" in line

    def test_json_without_room(self):
        line = json.loads(JSONFormatter().format(make_record()))
        assert "room_id" not in line

    def test_terminal_colors_level(self):
        record = make_record(level=logging.WARNING)
        text = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert text == "\033[33mWARNING\033[0m hello"
        # The original record is untouched for other handlers
        assert record.levelname == "WARNING"


class TestSetupLogging:
    def test_no_file_handler_when_path_empty(self):
        setup_logging("", "DEBUG")
        pkg_logger = logging.getLogger("imposter_engine")

        assert pkg_logger.level == logging.DEBUG
        assert [type(h) for h in pkg_logger.handlers] == [logging.StreamHandler]
        assert pkg_logger.propagate is False

    def test_file_handler_writes_json(self, tmp_path):
        path = tmp_path / "logs" / "engine.log"
        setup_logging(str(path))
        logging.getLogger("imposter_engine.test").info("to file")
        for handler in logging.getLogger("imposter_engine").handlers:
            handler.flush()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["message"] == "to file"
        setup_logging("")

    def test_repeat_setup_replaces_handlers(self):
        setup_logging("")
        setup_logging("")
        assert len(logging.getLogger("imposter_engine").handlers) == 1


class TestProtocolMode:
    def test_toggle(self):
        assert is_protocol_mode_enabled() is False
        enable_protocol_mode()
        assert is_protocol_mode_enabled() is True
        disable_protocol_mode()
        assert is_protocol_mode_enabled() is False

    def test_filter_follows_mode(self):
        log_filter = ProtocolFilter()
        assert log_filter.filter(make_record()) is True
        enable_protocol_mode()
        assert log_filter.filter(make_record()) is False
