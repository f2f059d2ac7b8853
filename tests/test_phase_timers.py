# Area: Engine Tests
"""Tests for PhaseTimerTracker — deferred phase transitions."""

from unittest.mock import patch

from imposter_engine._engine.enums import TimerKind
from imposter_engine._engine.phase_timers import PhaseTimerTracker


MOCK_TIME = "imposter_engine._engine.phase_timers.time"


class TestPhaseTimerTracker:
    """Unit tests for PhaseTimerTracker."""

    def test_no_timers_initially(self):
        tracker = PhaseTimerTracker()
        assert tracker.due() == []

    def test_schedule_and_not_yet_due(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.TIE_RESOLVE, 3, 5)
            mock_time.monotonic.return_value = 104.9
            assert tracker.due() == []

    def test_due_returns_and_forgets(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.TIE_RESOLVE, 3, 5)

            mock_time.monotonic.return_value = 105.0
            due = tracker.due()
            assert len(due) == 1
            assert due[0].room_id == "r1"
            assert due[0].kind is TimerKind.TIE_RESOLVE
            assert due[0].generation == 3

            # Fired once only
            assert tracker.due() == []

    def test_zero_delay_is_due_immediately(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 50.0
            tracker.schedule("r1", TimerKind.GAME_OVER, 1, 0)
            assert len(tracker.due()) == 1

    def test_reschedule_same_kind_replaces(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.ROOM_EXPIRY, 1, 10)
            tracker.schedule("r1", TimerKind.ROOM_EXPIRY, 2, 60)
            assert len(tracker.pending("r1")) == 1

            mock_time.monotonic.return_value = 120.0
            assert tracker.due() == []

    def test_due_sorted_by_expiry(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.GAME_OVER, 1, 3)
            tracker.schedule("r2", TimerKind.TIE_RESOLVE, 1, 1)

            mock_time.monotonic.return_value = 200.0
            assert [t.room_id for t in tracker.due()] == ["r2", "r1"]

    def test_cancel_one_kind(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.GAME_OVER, 1, 3)
            tracker.schedule("r1", TimerKind.ROOM_EXPIRY, 1, 3)

            tracker.cancel("r1", TimerKind.GAME_OVER)

            assert [t.kind for t in tracker.pending("r1")] == [TimerKind.ROOM_EXPIRY]

    def test_cancel_all_of_room(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.GAME_OVER, 1, 3)
            tracker.schedule("r1", TimerKind.ROOM_EXPIRY, 1, 3)
            tracker.schedule("r2", TimerKind.ROOM_EXPIRY, 1, 3)

            tracker.cancel("r1")

            mock_time.monotonic.return_value = 200.0
            assert [t.room_id for t in tracker.due()] == ["r2"]

    def test_cancel_unknown_room_is_noop(self):
        tracker = PhaseTimerTracker()
        # Should not raise
        tracker.cancel("missing")

    def test_clear_removes_all(self):
        tracker = PhaseTimerTracker()
        with patch(MOCK_TIME) as mock_time:
            mock_time.monotonic.return_value = 100.0
            tracker.schedule("r1", TimerKind.GAME_OVER, 1, 3)
            tracker.schedule("r2", TimerKind.GAME_OVER, 1, 3)

            tracker.clear()

            mock_time.monotonic.return_value = 200.0
            assert tracker.due() == []
