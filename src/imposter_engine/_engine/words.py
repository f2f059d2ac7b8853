# Area: Engine
"""
imposter_engine._engine.words — Word Bank
=========================================

Static category → word list mapping plus the room's custom list.
Pure lookup; the only state is the randomness source passed in.
"""

from typing import Dict, List, Sequence, Tuple

from .randomness import RandomSource
from ..errors import ValidationFailedError

CUSTOM_CATEGORY = "custom"
DEFAULT_CATEGORY = "animals"

WORD_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "animals": (
        "elephant", "giraffe", "penguin", "kangaroo",
        "dolphin", "octopus", "butterfly", "rhinoceros",
    ),
    "food": (
        "pizza", "sushi", "taco", "burger",
        "pasta", "croissant", "ramen", "burrito",
    ),
    "objects": (
        "umbrella", "telescope", "guitar", "camera",
        "skateboard", "backpack", "laptop", "headphones",
    ),
    "places": (
        "beach", "mountain", "library", "museum",
        "airport", "stadium", "theater", "castle",
    ),
}


def categories() -> List[str]:
    """All selectable categories, including the custom one."""
    return sorted(WORD_CATEGORIES) + [CUSTOM_CATEGORY]


def is_known_category(category: str) -> bool:
    return category == CUSTOM_CATEGORY or category in WORD_CATEGORIES


def word_pool(category: str, custom_words: Sequence[str]) -> List[str]:
    """
    Resolve the word pool for a category.

    Raises:
        ValidationFailedError: Unknown category, or empty custom list
    """
    if category == CUSTOM_CATEGORY:
        pool = [w for w in custom_words if w.strip()]
        if not pool:
            raise ValidationFailedError(
                "Custom category selected but the custom word list is empty"
            )
        return pool
    if category not in WORD_CATEGORIES:
        raise ValidationFailedError(f"Unknown word category: {category}")
    return list(WORD_CATEGORIES[category])


def select_word(
    category: str, custom_words: Sequence[str], rng: RandomSource
) -> str:
    """Draw one word uniformly from the category's pool."""
    return rng.choice(word_pool(category, custom_words))
