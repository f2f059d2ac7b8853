# Area: Engine
"""
Engine — the per-room game state machine.

This package contains:
- Randomness source and word bank
- Room / player / game state model
- Phase transition table
- Role assignment, vote tallying and win evaluation
- Public view projection
- Deferred phase timers
"""

from .enums import ClueMode, GamePhase, PhaseEvent, Role, RoomStatus, TimerKind, Winners
from .game_engine import GameEngine
from .phase_timers import PhaseTimer, PhaseTimerTracker
from .randomness import RandomSource
from .state import Clue, EliminationRecord, GameState, Player, Room, RoomSettings

__all__ = [
    "ClueMode",
    "GamePhase",
    "PhaseEvent",
    "Role",
    "RoomStatus",
    "TimerKind",
    "Winners",
    "GameEngine",
    "PhaseTimer",
    "PhaseTimerTracker",
    "RandomSource",
    "Clue",
    "EliminationRecord",
    "GameState",
    "Player",
    "Room",
    "RoomSettings",
]
