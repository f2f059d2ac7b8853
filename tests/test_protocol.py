# Area: Shared Tests
"""Tests for the wire protocol models."""

import pytest

from imposter_engine._shared.protocol import (
    ACTION_TYPES,
    ORIGIN,
    ROOM,
    ActionRejected,
    CastVote,
    CreateRoom,
    GameOver,
    Leave,
    RoleInfo,
    UpdateSettings,
    parse_action,
    to_player,
)
from imposter_engine.errors import ValidationFailedError


class TestParseAction:
    """Tests for parse_action()."""

    def test_all_action_types_known(self):
        assert ACTION_TYPES == {
            "CREATE_ROOM", "JOIN_ROOM", "UPDATE_SETTINGS", "ENTER_ROOM",
            "START_GAME", "SUBMIT_CLUE", "MARK_READY", "CAST_VOTE",
            "NEXT_ROUND", "FORCE_END_GAME", "RESET_TO_LOBBY", "RESTART_GAME",
            "LEAVE",
        }

    def test_parses_create_room_with_defaults(self):
        action = parse_action({"type": "CREATE_ROOM"})
        assert isinstance(action, CreateRoom)
        assert action.host_name == ""

    def test_parses_vote(self):
        action = parse_action({"type": "CAST_VOTE", "room_id": "r1",
                               "player_id": "p1", "target_id": "p2"})
        assert isinstance(action, CastVote)
        assert action.target_id == "p2"

    def test_parses_nested_settings(self):
        action = parse_action({
            "type": "UPDATE_SETTINGS", "room_id": "r1", "player_id": "p1",
            "settings": {"imposter_count": 2, "clue_mode": "passthrough"},
        })
        assert isinstance(action, UpdateSettings)
        assert action.settings.model_dump(exclude_none=True) == {
            "imposter_count": 2, "clue_mode": "passthrough",
        }

    def test_leave(self):
        assert isinstance(parse_action({"type": "LEAVE"}), Leave)

    def test_missing_fields_listed(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_action({"type": "CAST_VOTE", "room_id": "r1"})
        assert exc_info.value.reason == "Malformed action"
        errors = exc_info.value.details["errors"]
        assert any(e.startswith("player_id") for e in errors)
        assert any(e.startswith("target_id") for e in errors)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationFailedError):
            parse_action({"type": "CREATE_ROOM", "is_host": True})

    def test_bad_clue_mode_rejected(self):
        with pytest.raises(ValidationFailedError):
            parse_action({"type": "UPDATE_SETTINGS", "room_id": "r1", "player_id": "p1",
                          "settings": {"clue_mode": "telepathic"}})

    def test_unknown_type(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            parse_action({"type": "SHOUT"})
        assert "SHOUT" in exc_info.value.reason

    def test_non_object(self):
        with pytest.raises(ValidationFailedError):
            parse_action(["CREATE_ROOM"])

    def test_actions_are_immutable(self):
        action = parse_action({"type": "CREATE_ROOM", "host_name": "Ann"})
        with pytest.raises(Exception):
            action.host_name = "Ben"


class TestNotifications:
    """Tests for outbound notification models."""

    def test_role_info_wire_shape(self):
        wire = RoleInfo(role="civilian", word="pizza").to_wire()
        assert wire == {
            "type": "ROLE_INFO",
            "role": "civilian",
            "word": "pizza",
            "category": None,
            "imposter_count": None,
            "other_imposter_count": None,
        }

    def test_game_over_wire_shape(self):
        wire = GameOver(winners="imposters", imposter_ids=["p2"], secret_word="taco").to_wire()
        assert wire["type"] == "GAME_OVER"
        assert wire["forced"] is False

    def test_rejection_from_error_notice(self):
        error = ValidationFailedError("Too many", {"max_imposters": 2})
        wire = ActionRejected(**error.to_notice("START_GAME")).to_wire()
        assert wire == {
            "type": "ACTION_REJECTED",
            "error_type": "VALIDATION_FAILED",
            "reason": "Too many",
            "action": "START_GAME",
            "details": {"max_imposters": 2},
        }


class TestAudiences:
    def test_scopes(self):
        assert ROOM.scope == "room"
        assert ORIGIN.scope == "origin"
        assert to_player("p1").player_id == "p1"
        assert to_player("p1") == to_player("p1")
