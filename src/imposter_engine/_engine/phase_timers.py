# Area: Engine
"""
imposter_engine._engine.phase_timers — Deferred phase transitions
=================================================================

Tracks per-room timers for the tie display, the reveal-to-game-over
delay, and empty-room expiry. Timers are poll-driven: the runner calls
due() on every loop iteration. Each timer captures the room generation
it was scheduled in, so the caller can drop it if the room has moved on.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .enums import TimerKind

logger = logging.getLogger("imposter_engine.phase_timers")


@dataclass(frozen=True)
class PhaseTimer:
    room_id: str
    kind: TimerKind
    generation: int
    expires_at: float


class PhaseTimerTracker:
    """
    Tracks deferred transitions keyed by (room_id, kind).

    Scheduling a timer of a kind that is already pending for the room
    replaces it.
    """

    def __init__(self) -> None:
        self._timers: Dict[Tuple[str, TimerKind], PhaseTimer] = {}
        self._lock = threading.Lock()

    def schedule(
        self, room_id: str, kind: TimerKind, generation: int, delay_seconds: float
    ) -> PhaseTimer:
        """Schedule (or overwrite) a timer for a room."""
        timer = PhaseTimer(
            room_id=room_id,
            kind=kind,
            generation=generation,
            expires_at=time.monotonic() + delay_seconds,
        )
        with self._lock:
            self._timers[(room_id, kind)] = timer
        logger.debug(
            "Timer set: %s for room %s (gen %d, %.1fs)",
            kind.value, room_id, generation, delay_seconds,
        )
        return timer

    def due(self) -> List[PhaseTimer]:
        """Return expired timers, oldest first, and stop tracking them."""
        now = time.monotonic()
        with self._lock:
            expired = [t for t in self._timers.values() if now >= t.expires_at]
            for timer in expired:
                del self._timers[(timer.room_id, timer.kind)]
        expired.sort(key=lambda t: t.expires_at)
        if expired:
            logger.debug("Due timers: %s", [(t.room_id, t.kind.value) for t in expired])
        return expired

    def pending(self, room_id: str) -> List[PhaseTimer]:
        with self._lock:
            return [t for t in self._timers.values() if t.room_id == room_id]

    def cancel(self, room_id: str, kind: TimerKind = None) -> None:
        """Cancel one kind of timer, or all timers of a room. No-op if none."""
        with self._lock:
            keys = [
                key for key in self._timers
                if key[0] == room_id and (kind is None or key[1] is kind)
            ]
            for key in keys:
                del self._timers[key]
        if keys:
            logger.debug("Timers cancelled for room %s: %s", room_id, [k[1].value for k in keys])

    def clear(self) -> None:
        """Remove all tracked timers."""
        with self._lock:
            self._timers.clear()
        logger.debug("All timers cleared")
