# Area: Tests
"""Shared fixtures: deterministic randomness and ready-made rooms."""

import pytest

from imposter_engine._engine.game_engine import GameEngine
from imposter_engine._engine.phase_timers import PhaseTimerTracker
from imposter_engine._engine.randomness import RandomSource
from imposter_engine._engine.state import Player, Room


class ZeroRandom(RandomSource):
    """
    Always draws 0.

    choice() takes the first item and shuffled() rotates left by one,
    so with players p1..pN the first imposter is p2.
    """

    def below(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Upper bound must be positive, got {n}")
        return 0


class CountingRandom(RandomSource):
    """Draws 0, 1, 2, ... (mod n). Join codes never repeat."""

    def __init__(self):
        self.calls = 0

    def below(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Upper bound must be positive, got {n}")
        value = self.calls % n
        self.calls += 1
        return value


def build_room(n_players: int = 4, connected: bool = True) -> Room:
    """Room with players p1..pN; p1 is the host."""
    players = [
        Player(id=f"p{i}", display_name=f"Player {i}", is_host=(i == 1), connected=connected)
        for i in range(1, n_players + 1)
    ]
    return Room(id="room-1", join_code="123456", players=players)


@pytest.fixture
def zero_rng():
    return ZeroRandom()


@pytest.fixture
def counting_rng():
    return CountingRandom()


@pytest.fixture
def engine(zero_rng):
    return GameEngine(config={}, rng=zero_rng, timers=PhaseTimerTracker())


@pytest.fixture
def room():
    return build_room(4)


@pytest.fixture
def make_room():
    return build_room
