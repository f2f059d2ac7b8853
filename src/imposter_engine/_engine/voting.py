# Area: Engine
"""
imposter_engine._engine.voting — Vote tallying
==============================================

Counts votes per target and reports whether the maximum is unique.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class VoteTally:
    counts: Dict[str, int] = field(default_factory=dict)
    max_count: int = 0
    leaders: List[str] = field(default_factory=list)

    @property
    def is_tie(self) -> bool:
        return len(self.leaders) > 1

    @property
    def eliminated(self) -> Optional[str]:
        """The uniquely max-voted target, or None on a tie or no votes."""
        return self.leaders[0] if len(self.leaders) == 1 else None


def tally_votes(votes: Dict[str, str]) -> VoteTally:
    """
    Tally a voter -> target map.

    Leaders keep the order in which targets first received a vote.
    """
    counts = Counter(votes.values())
    if not counts:
        return VoteTally()
    max_count = max(counts.values())
    leaders = [target for target, n in counts.items() if n == max_count]
    return VoteTally(counts=dict(counts), max_count=max_count, leaders=leaders)
