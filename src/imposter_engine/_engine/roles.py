# Area: Engine
"""
imposter_engine._engine.roles — Role & Word Assignment
======================================================

Chooses the imposters for a new game and builds each player's private
role payload.
"""

import logging
from typing import List, Optional, Set

from .enums import Role
from .randomness import RandomSource
from .state import Player, Room
from ..errors import ValidationFailedError
from ..types import RolePayload

logger = logging.getLogger("imposter_engine.roles")


def max_imposters(active_count: int) -> int:
    return max(active_count - 1, 0)


def validate_imposter_count(imposter_count: int, active_count: int) -> None:
    """
    Raises:
        ValidationFailedError: If imposter_count is not in [1, active_count - 1]
    """
    maximum = max_imposters(active_count)
    if imposter_count < 1:
        raise ValidationFailedError(
            "There must be at least one imposter",
            {"max_imposters": maximum},
        )
    if imposter_count >= active_count:
        raise ValidationFailedError(
            f"Cannot have {imposter_count} imposter(s) with {active_count} "
            f"player(s). Maximum is {maximum}.",
            {"max_imposters": maximum},
        )


def select_imposters(
    candidates: List[Player], k: int, rng: RandomSource
) -> Set[str]:
    """
    Shuffle the connected candidates and take the first k as imposters.

    Raises:
        ValidationFailedError: If k is not smaller than the eligible count
    """
    eligible = [p for p in candidates if p.connected]
    validate_imposter_count(k, len(eligible))
    shuffled = rng.shuffled(eligible)
    chosen = {p.id for p in shuffled[:k]}
    logger.debug(f"Selected {k} imposter(s) from {len(eligible)} players: {sorted(chosen)}")
    return chosen


def role_of(room: Room, player_id: str) -> Role:
    return Role.IMPOSTER if room.is_imposter(player_id) else Role.CIVILIAN


def build_role_payload(room: Room, player_id: str) -> Optional[RolePayload]:
    """
    Private role payload for one player, or None outside a game.

    Civilians receive the word; imposters receive no word but the
    category and imposter counts.
    """
    if room.game.secret_word is None:
        return None

    if role_of(room, player_id) is Role.CIVILIAN:
        return {
            "role": Role.CIVILIAN.value,
            "word": room.game.secret_word,
            "category": None,
            "imposter_count": None,
            "other_imposter_count": None,
        }

    total = len(room.game.imposter_ids)
    return {
        "role": Role.IMPOSTER.value,
        "word": None,
        "category": room.settings.word_category,
        "imposter_count": total,
        "other_imposter_count": total - 1,
    }
