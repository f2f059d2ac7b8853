# Area: Server Tests
"""Tests for per-room serialization of actions and timers across threads."""

import threading

from imposter_engine._engine.enums import GamePhase
from imposter_engine._server.dispatcher import EventDispatcher

from conftest import CountingRandom
from test_dispatcher import Table, payloads


def run_together(*calls):
    """Start every call on its own thread at the same moment; return results."""
    barrier = threading.Barrier(len(calls))
    results = [None] * len(calls)

    def worker(index, call):
        barrier.wait()
        results[index] = call()

    threads = [threading.Thread(target=worker, args=(i, c)) for i, c in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
        assert not thread.is_alive()
    return results


def voting_table(**config):
    table = Table(EventDispatcher(config, CountingRandom()), n=6)
    table.start()
    table.play_to_voting()
    return table


class TestConcurrentVotes:
    """Votes arriving at once on one room."""

    def test_every_vote_recorded_and_resolved_once(self):
        table = voting_table()
        target = table.players[table.imposter]
        other = table.players[table.civilians[0]]

        def vote(session):
            target_id = other if session == table.imposter else target
            return lambda: table.act(session, "CAST_VOTE", target_id=target_id)

        results = run_together(*(vote(s) for s in table.players))

        room = table.d.registry.get(table.room_id)
        assert len(room.game.votes) == 6
        assert room.phase is GamePhase.REVEAL

        seen_by_host = [p for out in results for p in payloads(out, "s1")]
        counts = sorted(p["votes_received"] for p in seen_by_host
                        if p["type"] == "VOTE_UPDATE")
        assert counts == [1, 2, 3, 4, 5, 6]
        assert [p["type"] for p in seen_by_host].count("VOTE_RESULTS") == 1

    def test_actions_wait_for_the_room_lock(self):
        table = voting_table()
        target = table.players[table.imposter]
        done = threading.Event()

        def vote():
            table.act("s2", "CAST_VOTE", target_id=target)
            done.set()

        with table.d.registry.locked(table.room_id) as room:
            thread = threading.Thread(target=vote)
            thread.start()
            assert not done.wait(0.2)
            assert room.game.votes == {}

        thread.join(timeout=10)
        assert done.is_set()
        assert room.game.votes == {table.players["s2"]: target}


class TestTimerRaces:
    """A due timer and an action on the same room."""

    def tie(self, table):
        p = table.players
        table.act("s1", "CAST_VOTE", target_id=p["s2"])
        table.act("s2", "CAST_VOTE", target_id=p["s1"])
        table.act("s3", "CAST_VOTE", target_id=p["s4"])
        table.act("s4", "CAST_VOTE", target_id=p["s3"])
        table.act("s5", "CAST_VOTE", target_id=p["s6"])
        table.act("s6", "CAST_VOTE", target_id=p["s5"])
        assert table.d.registry.get(table.room_id).phase is GamePhase.TIE

    def test_tie_timer_taken_before_reset_is_stale(self):
        table = voting_table(tie_display_seconds=0)
        self.tie(table)
        [timer] = table.d.timers.due()

        table.act("s1", "RESET_TO_LOBBY")

        assert table.d._fire(timer) == []
        assert table.d.registry.get(table.room_id).phase is GamePhase.LOBBY

    def test_tie_timer_racing_reset(self):
        for _ in range(10):
            table = voting_table(tie_display_seconds=0)
            self.tie(table)

            timer_out, reset_out = run_together(
                table.d.check_timers,
                lambda: table.act("s1", "RESET_TO_LOBBY"),
            )

            room = table.d.registry.get(table.room_id)
            assert room.phase is GamePhase.LOBBY
            assert [p["type"] for p in payloads(reset_out, "s1")][0] == "PHASE_CHANGED"
            phases = [p["phase"] for p in payloads(timer_out, "s1", "PHASE_CHANGED")]
            assert phases in ([], ["discussion"])
