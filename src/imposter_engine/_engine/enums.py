# Area: Engine
"""
imposter_engine._engine.enums — Game Enums
==========================================

Defines phases, phase events, room status, roles and clue modes.
"""

from enum import Enum


class GamePhase(Enum):
    """
    Phases of a room's game.

    Phase transitions:
    LOBBY -> CLUE (on START_GAME)
    CLUE -> DISCUSSION (on CLUES_COMPLETE)
    DISCUSSION -> VOTING (on ALL_READY)
    VOTING -> TIE (on VOTE_TIED)
    TIE -> DISCUSSION (on TIE_RESOLVED, after the tie display delay)
    VOTING -> REVEAL (on PLAYER_ELIMINATED)
    REVEAL -> CLUE (on NEXT_ROUND, host)
    REVEAL -> GAME_OVER (on GAME_DECIDED, after the game-over delay)
    Any in-game phase -> GAME_OVER (on FORCE_END, host)
    Any phase except LOBBY -> LOBBY (on RESET, host)
    Any phase -> CLUE (on RESTART, host)
    """
    LOBBY = "lobby"
    CLUE = "clue"
    DISCUSSION = "discussion"
    VOTING = "voting"
    TIE = "tie"
    REVEAL = "reveal"
    GAME_OVER = "gameOver"


class PhaseEvent(Enum):
    """Events that trigger phase transitions."""
    START_GAME = "START_GAME"
    CLUES_COMPLETE = "CLUES_COMPLETE"
    ALL_READY = "ALL_READY"
    VOTE_TIED = "VOTE_TIED"
    TIE_RESOLVED = "TIE_RESOLVED"
    PLAYER_ELIMINATED = "PLAYER_ELIMINATED"
    NEXT_ROUND = "NEXT_ROUND"
    GAME_DECIDED = "GAME_DECIDED"
    FORCE_END = "FORCE_END"
    RESET = "RESET"
    RESTART = "RESTART"


class RoomStatus(Enum):
    """Coarse room lifecycle status."""
    LOBBY = "lobby"
    PLAYING = "playing"
    FINISHED = "finished"


class Role(Enum):
    CIVILIAN = "civilian"
    IMPOSTER = "imposter"


class Winners(Enum):
    CIVILIANS = "civilians"
    IMPOSTERS = "imposters"


class ClueMode(Enum):
    """
    How clues are collected.

    INTERACTIVE: every clue is typed and shown to the table.
    PASSTHROUGH: clues are spoken in person; an empty submission only
    marks the player as done.
    """
    INTERACTIVE = "interactive"
    PASSTHROUGH = "passthrough"


class TimerKind(Enum):
    """Kinds of deferred transitions scheduled per room."""
    TIE_RESOLVE = "TIE_RESOLVE"
    GAME_OVER = "GAME_OVER"
    ROOM_EXPIRY = "ROOM_EXPIRY"
