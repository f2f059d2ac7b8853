# Area: Shared Tests
"""Tests for protocol logger."""

from imposter_engine._shared.protocol import ACTION_TYPES
from imposter_engine._shared.protocol_logger import (
    GREEN,
    RECEIVE_DISPLAY_NAMES,
    RED,
    RESET,
    SEND_DISPLAY_NAMES,
    ProtocolLogger,
    get_protocol_logger,
)


class TestMessageTypeMappings:
    """Tests for message type → display name mappings."""

    def test_every_action_has_a_display_name(self):
        assert set(RECEIVE_DISPLAY_NAMES) == set(ACTION_TYPES)

    def test_send_display_names(self):
        assert SEND_DISPLAY_NAMES["ROLE_INFO"] == "ROLE"
        assert SEND_DISPLAY_NAMES["ACTION_REJECTED"] == "REJECTED"


class TestProtocolLogger:
    """Tests for the printed protocol lines."""

    def test_received_line(self, capsys):
        ProtocolLogger().log_received("sess-1", "CAST_VOTE")
        out = capsys.readouterr().out
        assert out.startswith(GREEN)
        assert "RECEIVED" in out
        assert "sess-1" in out
        assert "VOTE" in out
        assert out.rstrip("\n").endswith(RESET)

    def test_unknown_action_shown_raw(self, capsys):
        logger = ProtocolLogger()
        logger.log_received("sess-1", "DANCE")
        logger.log_received("sess-1", None)
        lines = capsys.readouterr().out.splitlines()
        assert "DANCE" in lines[0]
        assert "?" in lines[1]

    def test_sent_line_with_detail(self, capsys):
        ProtocolLogger().log_sent("sess-2", "PHASE_CHANGED", "voting (round 1)")
        out = capsys.readouterr().out
        assert "SENT" in out
        assert "PHASE" in out
        assert "| voting (round 1)" in out

    def test_sent_line_without_detail(self, capsys):
        ProtocolLogger().log_sent("sess-2", "ROOM_UPDATED")
        out = capsys.readouterr().out
        assert "ROOM-UPDATE" in out
        assert out.count("|") == 3

    def test_rejection_goes_to_stderr(self, capsys):
        ProtocolLogger().log_rejected("sess-3", "UNAUTHORIZED", "Only the host can do that")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith(RED)
        assert "UNAUTHORIZED" in captured.err
        assert "Only the host can do that" in captured.err

    def test_disabled_logger_prints_nothing(self, capsys):
        logger = ProtocolLogger(enabled=False)
        logger.log_received("sess-1", "LEAVE")
        logger.log_sent("sess-1", "GAME_OVER", "civilians win")
        logger.log_rejected("sess-1", "NOT_FOUND", "Room not found")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_set_enabled(self, capsys):
        logger = ProtocolLogger(enabled=False)
        logger.set_enabled(True)
        logger.log_received("sess-1", "LEAVE")
        assert "LEAVE" in capsys.readouterr().out


class TestSingleton:
    def test_same_instance(self):
        assert get_protocol_logger() is get_protocol_logger()
