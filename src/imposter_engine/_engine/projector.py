# Area: Engine
"""
imposter_engine._engine.projector — Public View Projection
==========================================================

Builds the role-blind room snapshot broadcast to every player. The
secret word and the imposter identities never appear in it; each
player's own role is delivered separately (see roles.build_role_payload).
"""

from typing import List

from .enums import GamePhase
from .state import Player, Room
from ..types import PublicClue, PublicGameState, PublicPlayer, PublicRoomView

# Phases in which the current round's clues are shown
_CLUE_VISIBLE_PHASES = (
    GamePhase.CLUE,
    GamePhase.DISCUSSION,
    GamePhase.VOTING,
    GamePhase.TIE,
)


def public_player(player: Player) -> PublicPlayer:
    return {
        "player_id": player.id,
        "name": player.display_name,
        "is_host": player.is_host,
        "connected": player.connected,
        "eliminated": player.eliminated,
    }


def project_players(room: Room) -> List[PublicPlayer]:
    return [public_player(p) for p in room.players]


def project_clues(room: Room) -> List[PublicClue]:
    if room.phase not in _CLUE_VISIBLE_PHASES:
        return []
    return [
        {"player_id": c.player_id, "player_name": c.player_name, "text": c.text}
        for c in room.game.clues
    ]


def project_game_state(room: Room) -> PublicGameState:
    return {
        "phase": room.phase.value,
        "round_number": room.game.round_number,
        "clues": project_clues(room),
        "player_order": list(room.game.player_order),
    }


def public_view(room: Room) -> PublicRoomView:
    """Role-blind snapshot of the room."""
    settings = room.settings
    return {
        "room_id": room.id,
        "join_code": room.join_code,
        "status": room.status.value,
        "players": project_players(room),
        "settings": {
            "imposter_count": settings.imposter_count,
            "word_category": settings.word_category,
            "custom_words": list(settings.custom_words),
            "max_players": settings.max_players,
            "clue_mode": settings.clue_mode.value,
        },
        "game_state": project_game_state(room),
    }
