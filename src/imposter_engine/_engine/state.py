# Area: Engine
"""
imposter_engine._engine.state — Room and game state
===================================================

Data model for one room: its players, host-editable settings, and the
embedded game state. The game state is replaced wholesale when the room
returns to the lobby or a game (re)starts; the room's generation counter
is never reset and increases on every phase change.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set
import logging
import threading

from .enums import ClueMode, GamePhase, RoomStatus, Winners
from .words import DEFAULT_CATEGORY

logger = logging.getLogger("imposter_engine.state")


@dataclass
class Player:
    """A seat in a room, identified by an opaque server-issued token."""
    id: str
    display_name: str
    is_host: bool = False
    connected: bool = False
    eliminated: bool = False

    @property
    def active(self) -> bool:
        """Connected and still in the game."""
        return self.connected and not self.eliminated


@dataclass
class RoomSettings:
    imposter_count: int = 1
    word_category: str = DEFAULT_CATEGORY
    custom_words: List[str] = field(default_factory=list)
    max_players: int = 10
    clue_mode: ClueMode = ClueMode.INTERACTIVE


@dataclass
class Clue:
    player_id: str
    player_name: str
    text: str


@dataclass
class EliminationRecord:
    player_id: str
    name: str
    was_imposter: bool


@dataclass
class GameState:
    """
    State of the game currently played in a room.

    secret_word and imposter_ids are fixed for the whole game; clues,
    votes and ready_players are per round.
    """
    phase: GamePhase = GamePhase.LOBBY
    secret_word: Optional[str] = None
    imposter_ids: Set[str] = field(default_factory=set)
    clues: List[Clue] = field(default_factory=list)
    votes: Dict[str, str] = field(default_factory=dict)        # voter -> target
    ready_players: Set[str] = field(default_factory=set)
    eliminated_player: Optional[EliminationRecord] = None
    round_number: int = 0
    player_order: List[str] = field(default_factory=list)
    winners: Optional[Winners] = None

    # ── Round helpers ────────────────────────────────────────

    def clue_for(self, player_id: str) -> Optional[Clue]:
        for clue in self.clues:
            if clue.player_id == player_id:
                return clue
        return None

    def record_clue(self, clue: Clue) -> None:
        """Store a clue, replacing the player's earlier clue in place."""
        for i, existing in enumerate(self.clues):
            if existing.player_id == clue.player_id:
                self.clues[i] = clue
                return
        self.clues.append(clue)

    def purge_clues(self, active_ids: Set[str]) -> None:
        """Drop clues of players who are no longer active."""
        self.clues = [c for c in self.clues if c.player_id in active_ids]

    def reset_round_tallies(self) -> None:
        self.clues = []
        self.votes = {}
        self.ready_players = set()


@dataclass
class Room:
    """
    One game room.

    All mutation must happen while holding ``lock``; the registry hands
    rooms out only inside that lock.
    """
    id: str
    join_code: str
    players: List[Player] = field(default_factory=list)
    settings: RoomSettings = field(default_factory=RoomSettings)
    status: RoomStatus = RoomStatus.LOBBY
    game: GameState = field(default_factory=GameState)
    generation: int = 0
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    # ── Player lookup ───────────────────────────────────────

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    @property
    def host(self) -> Optional[Player]:
        for player in self.players:
            if player.is_host:
                return player
        return None

    def connected_players(self) -> List[Player]:
        return [p for p in self.players if p.connected]

    def active_players(self) -> List[Player]:
        """Connected, non-eliminated players, in roster order."""
        return [p for p in self.players if p.active]

    def active_ids(self) -> Set[str]:
        return {p.id for p in self.active_players()}

    # ── Role helpers ─────────────────────────────────────────

    def is_imposter(self, player_id: str) -> bool:
        return player_id in self.game.imposter_ids

    def active_imposter_count(self) -> int:
        return sum(1 for p in self.active_players() if self.is_imposter(p.id))

    def active_civilian_count(self) -> int:
        return sum(1 for p in self.active_players() if not self.is_imposter(p.id))

    # ── Phase bookkeeping ────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self.game.phase

    def set_phase(self, new_phase: GamePhase) -> None:
        logger.info(f"[{self.join_code}] Phase: {self.game.phase.value} → {new_phase.value}")
        self.game.phase = new_phase
        self.generation += 1
