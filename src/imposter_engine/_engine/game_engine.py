# Area: Engine
"""
imposter_engine._engine.game_engine — Game State Machine
========================================================

Applies game actions to a room: role assignment, clue collection,
ready/vote aggregation, tie handling, elimination and win evaluation.

Every public method expects the caller to hold ``room.lock``, validates
before mutating (a rejected action leaves the room untouched), and
returns the (audience, notification) pairs to deliver.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from .enums import ClueMode, GamePhase, PhaseEvent, RoomStatus, TimerKind
from .phase_timers import PhaseTimer, PhaseTimerTracker
from .projector import project_clues, public_view
from .randomness import RandomSource
from .roles import build_role_payload, select_imposters, validate_imposter_count
from .state import Clue, EliminationRecord, GameState, Player, Room
from .state_machine import require_transition, transition
from .voting import VoteTally, tally_votes
from .win_condition import evaluate_elimination, evaluate_forced_end
from .words import is_known_category, select_word
from .._shared.protocol import (
    ROOM,
    CluesSubmitted,
    GameOver,
    Outbound,
    PhaseChanged,
    ReadyUpdate,
    RoleInfo,
    RoomUpdated,
    TiedPlayer,
    VoteResults,
    VoteTie,
    VoteUpdate,
    to_player,
)
from .._runner_config import DEFAULT_CONFIG
from ..errors import InvalidPhaseError, NotFoundError, ValidationFailedError

logger = logging.getLogger("imposter_engine.engine")


class GameEngine:
    """
    Stateless rules engine; all game state lives on the Room.

    Deferred transitions (tie display, game-over announcement) are
    registered with the shared PhaseTimerTracker and later fired through
    fire_timer().
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[RandomSource] = None,
        timers: Optional[PhaseTimerTracker] = None,
    ):
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)
        self.rng = rng or RandomSource()
        self.timers = timers or PhaseTimerTracker()

    # ── Notification helpers ─────────────────────────────────

    def room_updated(self, room: Room) -> Outbound:
        return [(ROOM, RoomUpdated(room=public_view(room)))]

    def phase_changed(self, room: Room) -> Outbound:
        return [(ROOM, PhaseChanged(phase=room.phase.value,
                                    round_number=room.game.round_number))]

    def role_info(self, room: Room, player_id: str) -> Outbound:
        payload = build_role_payload(room, player_id)
        if payload is None:
            return []
        return [(to_player(player_id), RoleInfo(**payload))]

    # ── Settings ─────────────────────────────────────────────

    def update_settings(self, room: Room, patch: Dict[str, Any]) -> Outbound:
        """Apply a partial settings update (lobby only)."""
        if room.phase is not GamePhase.LOBBY:
            raise InvalidPhaseError("change settings", room.phase.value, "lobby")

        changes = self._validated_settings(room, patch)
        for key, value in changes.items():
            setattr(room.settings, key, value)
        logger.info(f"[{room.join_code}] Settings updated: {sorted(changes)}")
        return self.room_updated(room)

    def _validated_settings(self, room: Room, patch: Dict[str, Any]) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}

        if patch.get("imposter_count") is not None:
            count = patch["imposter_count"]
            if count < 1:
                raise ValidationFailedError("There must be at least one imposter")
            changes["imposter_count"] = count

        if patch.get("word_category") is not None:
            category = patch["word_category"].strip().lower()
            if not is_known_category(category):
                raise ValidationFailedError(f"Unknown word category: {patch['word_category']}")
            changes["word_category"] = category

        if patch.get("custom_words") is not None:
            words = [w.strip() for w in patch["custom_words"] if w.strip()]
            limit = self.config["custom_word_max"]
            if len(words) > limit:
                raise ValidationFailedError(
                    f"Custom word list is limited to {limit} words", {"limit": limit}
                )
            changes["custom_words"] = words

        if patch.get("max_players") is not None:
            max_players = patch["max_players"]
            low = max(self.config["min_players"], len(room.players))
            high = self.config["max_players_limit"]
            if not low <= max_players <= high:
                raise ValidationFailedError(
                    f"Max players must be between {low} and {high}",
                    {"min": low, "max": high},
                )
            changes["max_players"] = max_players

        if patch.get("clue_mode") is not None:
            changes["clue_mode"] = ClueMode(patch["clue_mode"])

        return changes

    # ── Game start / restart ─────────────────────────────────

    def start_game(self, room: Room) -> Outbound:
        require_transition(room, PhaseEvent.START_GAME, "start the game")
        return self._begin_game(room, PhaseEvent.START_GAME)

    def restart_game(self, room: Room) -> Outbound:
        require_transition(room, PhaseEvent.RESTART, "restart the game")
        return self._begin_game(room, PhaseEvent.RESTART)

    def _begin_game(self, room: Room, event: PhaseEvent) -> Outbound:
        settings = room.settings
        candidates = room.connected_players()

        validate_imposter_count(settings.imposter_count, len(candidates))
        min_players = self.config["min_players"]
        if len(candidates) < min_players:
            raise ValidationFailedError(
                f"At least {min_players} connected players are needed to start",
                {"min_players": min_players, "connected": len(candidates)},
            )
        word = select_word(settings.word_category, settings.custom_words, self.rng)
        imposter_ids = select_imposters(candidates, settings.imposter_count, self.rng)

        # Validation passed; from here on the room is mutated
        self._cancel_game_timers(room)
        for player in room.players:
            player.eliminated = False
        room.game = GameState(
            phase=room.phase,
            secret_word=word,
            imposter_ids=imposter_ids,
            round_number=1,
            player_order=[p.id for p in self.rng.shuffled(room.active_players())],
        )
        room.status = RoomStatus.PLAYING
        transition(room, event)
        logger.info(
            f"[{room.join_code}] Game started with {len(candidates)} players, "
            f"{len(imposter_ids)} imposter(s)"
        )
        logger.debug(f"[{room.join_code}] Secret word: {word}")

        outbound = self.phase_changed(room)
        for player in room.connected_players():
            outbound.extend(self.role_info(room, player.id))
        outbound.extend(self.room_updated(room))
        return outbound

    # ── Clue phase ───────────────────────────────────────────

    def submit_clue(self, room: Room, player: Player, text: str) -> Outbound:
        if room.phase is not GamePhase.CLUE:
            raise InvalidPhaseError("submit a clue", room.phase.value, "clue")

        text = text.strip()
        if room.settings.clue_mode is ClueMode.INTERACTIVE and not text:
            raise ValidationFailedError("Clue cannot be empty")
        limit = self.config["clue_max_length"]
        if len(text) > limit:
            raise ValidationFailedError(
                f"Clue is limited to {limit} characters", {"limit": limit}
            )

        room.game.purge_clues(room.active_ids())
        room.game.record_clue(Clue(player.id, player.display_name, text))
        logger.info(f"[{room.join_code}] Clue from {player.display_name} "
                    f"({len(room.game.clues)}/{len(room.active_players())})")

        outbound: Outbound = [(ROOM, CluesSubmitted(clues=project_clues(room)))]
        outbound.extend(self._check_clues_complete(room))
        return outbound

    def _check_clues_complete(self, room: Room) -> Outbound:
        room.game.purge_clues(room.active_ids())
        active = room.active_ids()
        submitted = {c.player_id for c in room.game.clues}
        if not active or not active <= submitted:
            return []
        room.game.ready_players = set()
        transition(room, PhaseEvent.CLUES_COMPLETE)
        return self.phase_changed(room)

    # ── Discussion phase ─────────────────────────────────────

    def mark_ready(self, room: Room, player: Player) -> Outbound:
        if room.phase is not GamePhase.DISCUSSION:
            raise InvalidPhaseError("mark ready for voting", room.phase.value, "discussion")
        room.game.ready_players.add(player.id)
        return self._check_all_ready(room)

    def _check_all_ready(self, room: Room) -> Outbound:
        active = room.active_ids()
        ready = room.game.ready_players & active
        outbound: Outbound = [(ROOM, ReadyUpdate(ready_count=len(ready),
                                                 total_players=len(active)))]
        if active and ready == active:
            room.game.votes = {}
            room.game.ready_players = set()
            transition(room, PhaseEvent.ALL_READY)
            outbound.extend(self.phase_changed(room))
        return outbound

    # ── Voting phase ─────────────────────────────────────────

    def cast_vote(self, room: Room, voter: Player, target_id: str) -> Outbound:
        if room.phase is not GamePhase.VOTING:
            raise InvalidPhaseError("vote", room.phase.value, "voting")
        target = room.get_player(target_id)
        if target is None:
            raise NotFoundError("Vote target not found")
        if target.eliminated:
            raise ValidationFailedError(f"{target.display_name} is already eliminated")

        room.game.votes[voter.id] = target.id
        return self._check_votes_complete(room)

    def _check_votes_complete(self, room: Room) -> Outbound:
        active = room.active_ids()
        voted = set(room.game.votes) & active
        outbound: Outbound = [(ROOM, VoteUpdate(votes_received=len(voted),
                                                total_votes=len(active)))]
        if active and voted == active:
            # Ballots already cast stay counted even if the voter has left since
            outbound.extend(self._resolve_votes(room, tally_votes(room.game.votes)))
        return outbound

    def _resolve_votes(self, room: Room, tally: VoteTally) -> Outbound:
        if tally.is_tie:
            return self._enter_tie(room, tally)

        target = room.get_player(tally.eliminated)
        target.eliminated = True
        record = EliminationRecord(
            player_id=target.id,
            name=target.display_name,
            was_imposter=room.is_imposter(target.id),
        )
        room.game.eliminated_player = record
        room.game.winners = evaluate_elimination(room, record)
        transition(room, PhaseEvent.PLAYER_ELIMINATED)
        logger.info(
            f"[{room.join_code}] {record.name} eliminated "
            f"({'imposter' if record.was_imposter else 'civilian'})"
        )

        outbound: Outbound = [(ROOM, VoteResults(
            eliminated_player={
                "player_id": record.player_id,
                "name": record.name,
                "was_imposter": record.was_imposter,
            },
            was_imposter=record.was_imposter,
            remaining_imposter_count=room.active_imposter_count(),
            vote_breakdown=tally.counts,
        ))]
        outbound.extend(self.phase_changed(room))
        outbound.extend(self.room_updated(room))

        if room.game.winners is not None:
            logger.info(f"[{room.join_code}] Game decided: {room.game.winners.value} win")
            self.timers.schedule(
                room.id, TimerKind.GAME_OVER, room.generation,
                self.config["game_over_delay_seconds"],
            )
        return outbound

    def _enter_tie(self, room: Room, tally: VoteTally) -> Outbound:
        tied = []
        for player_id in tally.leaders:
            player = room.get_player(player_id)
            tied.append(TiedPlayer(player_id=player_id,
                                   name=player.display_name if player else None))
        room.game.votes = {}
        room.game.ready_players = set()
        transition(room, PhaseEvent.VOTE_TIED)
        logger.info(f"[{room.join_code}] Tie between {len(tied)} players "
                    f"at {tally.max_count} vote(s)")
        self.timers.schedule(
            room.id, TimerKind.TIE_RESOLVE, room.generation,
            self.config["tie_display_seconds"],
        )
        outbound: Outbound = [(ROOM, VoteTie(tied_players=tied, vote_count=tally.max_count))]
        outbound.extend(self.phase_changed(room))
        return outbound

    # ── Deferred transitions ─────────────────────────────────

    def fire_timer(self, room: Room, timer: PhaseTimer) -> Outbound:
        """Run a due timer; stale timers are dropped silently."""
        if timer.generation != room.generation:
            logger.debug(f"[{room.join_code}] Stale {timer.kind.value} timer ignored")
            return []
        if timer.kind is TimerKind.TIE_RESOLVE:
            return self.resolve_tie(room)
        if timer.kind is TimerKind.GAME_OVER:
            return self.finish_game(room)
        return []

    def resolve_tie(self, room: Room) -> Outbound:
        """Tie display elapsed: back to discussion with the same clues."""
        if room.phase is not GamePhase.TIE:
            return []
        transition(room, PhaseEvent.TIE_RESOLVED)
        return self.phase_changed(room)

    def finish_game(self, room: Room) -> Outbound:
        """Reveal delay elapsed on a decided game: announce the winners."""
        if room.phase is not GamePhase.REVEAL or room.game.winners is None:
            return []
        transition(room, PhaseEvent.GAME_DECIDED)
        room.status = RoomStatus.FINISHED
        return self._game_over(room, forced=False)

    def _game_over(self, room: Room, forced: bool) -> Outbound:
        outbound: Outbound = [(ROOM, GameOver(
            winners=room.game.winners.value,
            imposter_ids=sorted(room.game.imposter_ids),
            secret_word=room.game.secret_word,
            forced=forced,
        ))]
        outbound.extend(self.phase_changed(room))
        outbound.extend(self.room_updated(room))
        return outbound

    # ── Host controls ────────────────────────────────────────

    def next_round(self, room: Room) -> Outbound:
        require_transition(room, PhaseEvent.NEXT_ROUND, "advance to the next round")
        if room.game.winners is not None:
            raise InvalidPhaseError(
                "advance to the next round", room.phase.value, "an undecided game"
            )

        game = room.game
        game.reset_round_tallies()
        game.eliminated_player = None
        game.round_number += 1
        game.player_order = [p.id for p in self.rng.shuffled(room.active_players())]
        transition(room, PhaseEvent.NEXT_ROUND)
        logger.info(f"[{room.join_code}] Round {game.round_number} started "
                    f"with {len(game.player_order)} active players")

        outbound = self.phase_changed(room)
        outbound.extend(self.room_updated(room))
        for player in room.active_players():
            outbound.extend(self.role_info(room, player.id))
        return outbound

    def force_end(self, room: Room) -> Outbound:
        require_transition(room, PhaseEvent.FORCE_END, "end the game")
        self._cancel_game_timers(room)
        room.game.winners = evaluate_forced_end(room)
        transition(room, PhaseEvent.FORCE_END)
        room.status = RoomStatus.FINISHED
        logger.info(f"[{room.join_code}] Game ended by host: {room.game.winners.value} win")
        return self._game_over(room, forced=True)

    def reset_to_lobby(self, room: Room) -> Outbound:
        require_transition(room, PhaseEvent.RESET, "return to the lobby")
        self._cancel_game_timers(room)
        transition(room, PhaseEvent.RESET)
        room.game = GameState()
        room.status = RoomStatus.LOBBY
        for player in room.players:
            player.eliminated = False
        logger.info(f"[{room.join_code}] Room reset to lobby")
        return self.phase_changed(room) + self.room_updated(room)

    # ── Connection changes ───────────────────────────────────

    def recheck_progress(self, room: Room) -> Outbound:
        """
        Re-evaluate the current phase's completion threshold after the
        set of active players shrank.
        """
        if room.phase is GamePhase.CLUE:
            return self._check_clues_complete(room)
        if room.phase is GamePhase.DISCUSSION and room.game.ready_players:
            return self._check_all_ready(room)
        if room.phase is GamePhase.VOTING and room.game.votes:
            return self._check_votes_complete(room)
        return []

    def _cancel_game_timers(self, room: Room) -> None:
        self.timers.cancel(room.id, TimerKind.TIE_RESOLVE)
        self.timers.cancel(room.id, TimerKind.GAME_OVER)
