# Area: Engine
"""
imposter_engine._engine.state_machine — Phase State Machine
===========================================================

Table of legal phase transitions and helpers to check and apply them.
Every applied transition bumps the room's generation so that deferred
timers scheduled for an earlier phase can recognise themselves as stale.
"""

from typing import Dict

from .enums import GamePhase, PhaseEvent
from .state import Room
from ..errors import InvalidPhaseError

_IN_GAME = (
    GamePhase.CLUE,
    GamePhase.DISCUSSION,
    GamePhase.VOTING,
    GamePhase.TIE,
    GamePhase.REVEAL,
)

# Valid phase transitions: {current_phase: {event: next_phase}}
TRANSITIONS: Dict[GamePhase, Dict[PhaseEvent, GamePhase]] = {
    GamePhase.LOBBY: {
        PhaseEvent.START_GAME: GamePhase.CLUE,
        PhaseEvent.RESTART: GamePhase.CLUE,
    },
    GamePhase.CLUE: {
        PhaseEvent.CLUES_COMPLETE: GamePhase.DISCUSSION,
    },
    GamePhase.DISCUSSION: {
        PhaseEvent.ALL_READY: GamePhase.VOTING,
    },
    GamePhase.VOTING: {
        PhaseEvent.VOTE_TIED: GamePhase.TIE,
        PhaseEvent.PLAYER_ELIMINATED: GamePhase.REVEAL,
    },
    GamePhase.TIE: {
        PhaseEvent.TIE_RESOLVED: GamePhase.DISCUSSION,
    },
    GamePhase.REVEAL: {
        PhaseEvent.NEXT_ROUND: GamePhase.CLUE,
        PhaseEvent.GAME_DECIDED: GamePhase.GAME_OVER,
    },
    GamePhase.GAME_OVER: {
        PhaseEvent.RESET: GamePhase.LOBBY,
        PhaseEvent.RESTART: GamePhase.CLUE,
    },
}

for _phase in _IN_GAME:
    TRANSITIONS[_phase][PhaseEvent.FORCE_END] = GamePhase.GAME_OVER
    TRANSITIONS[_phase][PhaseEvent.RESET] = GamePhase.LOBBY
    TRANSITIONS[_phase][PhaseEvent.RESTART] = GamePhase.CLUE


def can_transition(phase: GamePhase, event: PhaseEvent) -> bool:
    """Check if an event is legal from the given phase."""
    return event in TRANSITIONS.get(phase, {})


def require_transition(room: Room, event: PhaseEvent, action: str) -> GamePhase:
    """
    Return the phase the event would lead to, without applying it.

    Raises:
        InvalidPhaseError: If the event is not legal in the room's phase
    """
    if not can_transition(room.phase, event):
        expected = ", ".join(
            p.value for p, events in TRANSITIONS.items() if event in events
        )
        raise InvalidPhaseError(action, room.phase.value, expected or None)
    return TRANSITIONS[room.phase][event]


def transition(room: Room, event: PhaseEvent) -> GamePhase:
    """
    Apply an event to the room's phase.

    Raises:
        InvalidPhaseError: If the event is not legal in the room's phase
    """
    next_phase = require_transition(room, event, event.value.lower())
    room.set_phase(next_phase)
    return next_phase
