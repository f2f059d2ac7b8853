"""
imposter_engine.types — TypedDict schemas for projected payloads
================================================================

This module documents the exact structure of the dictionaries the
engine hands to clients: the role-blind room snapshot broadcast to a
whole room, and the private role payload sent to a single player.

All types are exported from the main package:

    from imposter_engine import PublicRoomView, RolePayload
"""

from typing import TypedDict, List, Optional


# ============================================
# Room snapshot (broadcast)
# ============================================

class PublicPlayer(TypedDict):
    """One roster entry. Never carries the player's role."""
    player_id: str
    name: str
    is_host: bool
    connected: bool
    eliminated: bool


class PublicSettings(TypedDict):
    """Host-editable settings, as shown in the lobby."""
    imposter_count: int
    word_category: str
    custom_words: List[str]
    max_players: int
    clue_mode: str          # "interactive" | "passthrough"


class PublicClue(TypedDict):
    player_id: str
    player_name: str
    text: str


class PublicGameState(TypedDict):
    """Phase-appropriate slice of the game state.

    Fields
    ------
    phase : str
        Current phase, e.g. "clue".
    round_number : int
        1-based round number (0 in the lobby).
    clues : List[PublicClue]
        Clues of the current round (empty outside clue/discussion/voting).
    player_order : List[str]
        Turn order of the current round.
    """
    phase: str
    round_number: int
    clues: List[PublicClue]
    player_order: List[str]


class PublicRoomView(TypedDict):
    """Role-blind snapshot of a room. Never includes the secret word."""
    room_id: str
    join_code: str
    status: str             # "lobby" | "playing" | "finished"
    players: List[PublicPlayer]
    settings: PublicSettings
    game_state: PublicGameState


# ============================================
# Private role payload (unicast)
# ============================================

class RolePayload(TypedDict):
    """Sent only to the player it describes.

    Fields
    ------
    role : str
        "civilian" or "imposter".
    word : Optional[str]
        The secret word for civilians, None for imposters.
    category : Optional[str]
        Word category (imposters only).
    imposter_count : Optional[int]
        Total number of imposters (imposters only).
    other_imposter_count : Optional[int]
        Number of imposters besides this player (imposters only).
    """
    role: str
    word: Optional[str]
    category: Optional[str]
    imposter_count: Optional[int]
    other_imposter_count: Optional[int]


# ============================================
# Elimination record (broadcast with vote results)
# ============================================

class EliminationPayload(TypedDict):
    player_id: str
    name: str
    was_imposter: bool
