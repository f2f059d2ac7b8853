# Area: Engine
"""
imposter_engine._engine.win_condition — Win-Condition Evaluation
================================================================

Evaluated once per elimination, and once when the host force-ends a
game. "Active" means connected and not eliminated.

Parity rule: when a civilian is voted out and the active imposters are
greater than or equal to the active civilians, the imposters win.
Equal counts therefore favour the imposters.
"""

from typing import Optional

from .enums import Winners
from .state import EliminationRecord, Room


def evaluate_elimination(room: Room, record: EliminationRecord) -> Optional[Winners]:
    """
    Decide the game after one elimination.

    Returns:
        The winning side, or None if the game continues
    """
    imposters = room.active_imposter_count()

    if record.was_imposter:
        if imposters == 0:
            return Winners.CIVILIANS
        return None

    if imposters >= room.active_civilian_count():
        return Winners.IMPOSTERS
    return None


def evaluate_forced_end(room: Room) -> Winners:
    """
    Decide the winner when the host ends the game early.

    Imposters win unless they are all eliminated or outnumbered by
    civilians.
    """
    imposters = room.active_imposter_count()
    if imposters == 0 or room.active_civilian_count() > imposters:
        return Winners.CIVILIANS
    return Winners.IMPOSTERS
