# Area: Shared
"""
imposter_engine._shared.protocol — Wire protocol models
=======================================================

Closed set of tagged message variants, validated with pydantic at the
boundary. Inbound actions are discriminated on ``type``; every outbound
notification carries its own ``type`` literal as well.

Audience helpers describe who an outbound notification is for; the
dispatcher resolves them to concrete sessions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors import ValidationFailedError


class _Message(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# ══════════════════════════════════════════════════════════════
# INBOUND ACTIONS
# ══════════════════════════════════════════════════════════════


class CreateRoom(_Message):
    type: Literal["CREATE_ROOM"] = "CREATE_ROOM"
    host_name: str = ""


class JoinRoom(_Message):
    type: Literal["JOIN_ROOM"] = "JOIN_ROOM"
    join_code: str = Field(min_length=1)
    player_name: str


class SettingsPatch(_Message):
    """Partial settings; omitted fields stay unchanged."""
    imposter_count: Optional[int] = None
    word_category: Optional[str] = None
    custom_words: Optional[List[str]] = None
    max_players: Optional[int] = None
    clue_mode: Optional[Literal["interactive", "passthrough"]] = None


class _RoomAction(_Message):
    room_id: str = Field(min_length=1)
    player_id: str = Field(min_length=1)


class UpdateSettings(_RoomAction):
    type: Literal["UPDATE_SETTINGS"] = "UPDATE_SETTINGS"
    settings: SettingsPatch


class EnterRoom(_RoomAction):
    type: Literal["ENTER_ROOM"] = "ENTER_ROOM"


class StartGame(_RoomAction):
    type: Literal["START_GAME"] = "START_GAME"


class SubmitClue(_RoomAction):
    type: Literal["SUBMIT_CLUE"] = "SUBMIT_CLUE"
    text: str = ""


class MarkReady(_RoomAction):
    type: Literal["MARK_READY"] = "MARK_READY"


class CastVote(_RoomAction):
    type: Literal["CAST_VOTE"] = "CAST_VOTE"
    target_id: str = Field(min_length=1)


class NextRound(_RoomAction):
    type: Literal["NEXT_ROUND"] = "NEXT_ROUND"


class ForceEndGame(_RoomAction):
    type: Literal["FORCE_END_GAME"] = "FORCE_END_GAME"


class ResetToLobby(_RoomAction):
    type: Literal["RESET_TO_LOBBY"] = "RESET_TO_LOBBY"


class RestartGame(_RoomAction):
    type: Literal["RESTART_GAME"] = "RESTART_GAME"


class Leave(_Message):
    type: Literal["LEAVE"] = "LEAVE"


Action = Annotated[
    Union[
        CreateRoom,
        JoinRoom,
        UpdateSettings,
        EnterRoom,
        StartGame,
        SubmitClue,
        MarkReady,
        CastVote,
        NextRound,
        ForceEndGame,
        ResetToLobby,
        RestartGame,
        Leave,
    ],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter = TypeAdapter(Action)

ACTION_TYPES = frozenset(
    model.model_fields["type"].default
    for model in (
        CreateRoom, JoinRoom, UpdateSettings, EnterRoom, StartGame,
        SubmitClue, MarkReady, CastVote, NextRound, ForceEndGame,
        ResetToLobby, RestartGame, Leave,
    )
)


def parse_action(raw: Any) -> Action:
    """
    Validate a raw inbound payload into an action variant.

    Raises:
        ValidationFailedError: If the payload is not a well-formed action
    """
    if not isinstance(raw, dict):
        raise ValidationFailedError(
            f"Action must be an object, got {type(raw).__name__}"
        )
    if raw.get("type") not in ACTION_TYPES:
        raise ValidationFailedError(f"Unknown action type: {raw.get('type')!r}")
    try:
        return _ACTION_ADAPTER.validate_python(raw)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'][1:]) or 'payload'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationFailedError("Malformed action", {"errors": errors})


# ══════════════════════════════════════════════════════════════
# OUTBOUND NOTIFICATIONS
# ══════════════════════════════════════════════════════════════


class Notification(_Message):
    type: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class RoomJoined(Notification):
    type: Literal["ROOM_JOINED"] = "ROOM_JOINED"
    room_id: str
    join_code: str
    player: Dict[str, Any]


class RoomUpdated(Notification):
    type: Literal["ROOM_UPDATED"] = "ROOM_UPDATED"
    room: Dict[str, Any]


class PhaseChanged(Notification):
    type: Literal["PHASE_CHANGED"] = "PHASE_CHANGED"
    phase: str
    round_number: int


class RoleInfo(Notification):
    type: Literal["ROLE_INFO"] = "ROLE_INFO"
    role: Literal["civilian", "imposter"]
    word: Optional[str] = None
    category: Optional[str] = None
    imposter_count: Optional[int] = None
    other_imposter_count: Optional[int] = None


class CluesSubmitted(Notification):
    type: Literal["CLUE_SUBMITTED"] = "CLUE_SUBMITTED"
    clues: List[Dict[str, Any]]


class ReadyUpdate(Notification):
    type: Literal["READY_UPDATE"] = "READY_UPDATE"
    ready_count: int
    total_players: int


class VoteUpdate(Notification):
    type: Literal["VOTE_UPDATE"] = "VOTE_UPDATE"
    votes_received: int
    total_votes: int


class TiedPlayer(_Message):
    player_id: str
    name: Optional[str] = None


class VoteTie(Notification):
    type: Literal["VOTE_TIE"] = "VOTE_TIE"
    tied_players: List[TiedPlayer]
    vote_count: int


class VoteResults(Notification):
    type: Literal["VOTE_RESULTS"] = "VOTE_RESULTS"
    eliminated_player: Dict[str, Any]
    was_imposter: bool
    remaining_imposter_count: int
    vote_breakdown: Dict[str, int]


class GameOver(Notification):
    type: Literal["GAME_OVER"] = "GAME_OVER"
    winners: Literal["civilians", "imposters"]
    imposter_ids: List[str]
    secret_word: Optional[str] = None
    forced: bool = False


class ActionRejected(Notification):
    type: Literal["ACTION_REJECTED"] = "ACTION_REJECTED"
    error_type: str
    reason: str
    action: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


# ══════════════════════════════════════════════════════════════
# AUDIENCES
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Audience:
    """Who a notification is addressed to."""
    scope: Literal["room", "player", "origin"]
    player_id: Optional[str] = None


ROOM = Audience("room")
ORIGIN = Audience("origin")


def to_player(player_id: str) -> Audience:
    return Audience("player", player_id)


# (audience, notification) pairs produced by the engine and handlers
Outbound = List[Tuple[Audience, Notification]]
