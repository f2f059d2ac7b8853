# Area: Engine
"""
imposter_engine._engine.randomness — Randomness Source
======================================================

Uniform integers in [0, n) from the operating system's CSPRNG.
Used for join codes, word selection and player shuffling.
"""

import secrets
from typing import List, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Cryptographically strong randomness.

    Subclasses may override below() (e.g. for deterministic tests);
    every other method is built on it.
    """

    def below(self, n: int) -> int:
        """Return a uniformly distributed integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"Upper bound must be positive, got {n}")
        return secrets.randbelow(n)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.below(len(items))]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher–Yates shuffled copy of items."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.below(i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def digits(self, width: int) -> str:
        """Return a fixed-width numeric string (leading zeros allowed)."""
        return str(self.below(10 ** width)).zfill(width)
