# Area: Server
"""
imposter_engine._server.dispatcher — Event Dispatcher
=====================================================

Entry point for everything that reaches a room: inbound actions from a
session, transport disconnects, and due phase timers.

For each event the dispatcher:
1. Validates the raw payload into an action variant
2. Resolves and locks the target room
3. Routes the action to its handler
4. Resolves audiences to concrete sessions

Engine errors become an ACTION_REJECTED notice for the calling session.
Deliveries are computed while the room lock is held, so notifications
of one room leave in the order the room changed.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .action_router import ActionRouter
from .handler_base import HandlerContext
from .handler_host import (
    ForceEndGameHandler,
    NextRoundHandler,
    ResetToLobbyHandler,
    RestartGameHandler,
    StartGameHandler,
    UpdateSettingsHandler,
)
from .handler_lobby import CreateRoomHandler, EnterRoomHandler, JoinRoomHandler, LeaveHandler
from .handler_round import CastVoteHandler, MarkReadyHandler, SubmitClueHandler
from .registry import RoomRegistry
from .sessions import SessionDirectory
from .._engine.enums import TimerKind
from .._engine.game_engine import GameEngine
from .._engine.phase_timers import PhaseTimer, PhaseTimerTracker
from .._engine.randomness import RandomSource
from .._engine.state import Room
from .._runner_config import resolve_config
from .._shared.protocol import ActionRejected, Leave, Outbound, parse_action
from ..errors import ImposterEngineError, NotFoundError, UnauthorizedError

logger = logging.getLogger("imposter_engine.dispatcher")

# (session_id, wire payload)
Delivery = Tuple[str, Dict[str, Any]]

# Actions a session may send before it is attached as the acting player
UNSEATED_ACTIONS = frozenset({"CREATE_ROOM", "JOIN_ROOM", "ENTER_ROOM", "LEAVE"})


class EventDispatcher:
    """
    Serializes events per room and turns them into deliveries.

    Usage:
        dispatcher = EventDispatcher(config)
        deliveries = dispatcher.dispatch("sess-1", {"type": "CREATE_ROOM", "host_name": "Ann"})
        deliveries += dispatcher.check_timers()
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.config = resolve_config(config)
        self.rng = rng or RandomSource()
        self.timers = PhaseTimerTracker()
        self.registry = RoomRegistry(self.config, self.rng)
        self.sessions = SessionDirectory()
        self.engine = GameEngine(self.config, self.rng, self.timers)
        self.router = ActionRouter()
        self._register_handlers()

    def _register_handlers(self) -> None:
        reg = self.router.register_handler
        reg("CREATE_ROOM", CreateRoomHandler())
        reg("JOIN_ROOM", JoinRoomHandler())
        reg("ENTER_ROOM", EnterRoomHandler())
        reg("LEAVE", LeaveHandler())
        reg("UPDATE_SETTINGS", UpdateSettingsHandler())
        reg("START_GAME", StartGameHandler())
        reg("SUBMIT_CLUE", SubmitClueHandler())
        reg("MARK_READY", MarkReadyHandler())
        reg("CAST_VOTE", CastVoteHandler())
        reg("NEXT_ROUND", NextRoundHandler())
        reg("FORCE_END_GAME", ForceEndGameHandler())
        reg("RESET_TO_LOBBY", ResetToLobbyHandler())
        reg("RESTART_GAME", RestartGameHandler())

    # ── Inbound ──────────────────────────────────────────────

    def dispatch(self, session_id: str, raw: Any) -> List[Delivery]:
        """Handle one raw inbound payload from a session."""
        action_type = raw.get("type") if isinstance(raw, dict) else None
        try:
            action = parse_action(raw)
            return self._run(session_id, action)
        except ImposterEngineError as e:
            return self._reject(session_id, e, action_type)

    def disconnect(self, session_id: str) -> List[Delivery]:
        """The transport lost a session. Same as LEAVE, never rejected."""
        try:
            return self._run(session_id, Leave())
        except NotFoundError:
            logger.debug(f"Disconnect of {session_id}: room already gone")
            self.sessions.unbind(session_id)
            return []

    def _run(self, session_id: str, action: Any) -> List[Delivery]:
        if action.type == "CREATE_ROOM":
            ctx = self._context(session_id, action)
            outbound = self.router.route(ctx)
            with ctx.room.lock:
                return self._resolve(ctx.room.id, session_id, outbound)

        if action.type == "ENTER_ROOM":
            left = self._leave_previous_seat(session_id, action)
            try:
                return left + self._run_in_room(session_id, action)
            except ImposterEngineError as e:
                return left + self._reject(session_id, e, action.type)

        return self._run_in_room(session_id, action)

    def _run_in_room(self, session_id: str, action: Any) -> List[Delivery]:
        room_id = self._target_room_id(session_id, action)
        if room_id is None:
            logger.debug(f"{action.type} from unattached session {session_id} ignored")
            return []

        ctx = self._context(session_id, action)
        with self.registry.locked(room_id) as room:
            ctx.room = room
            if action.type not in UNSEATED_ACTIONS:
                self._require_seat(session_id, room, action.player_id)
            logger.info(f"[{room.join_code}] Handling {action.type}")
            outbound = self.router.route(ctx)
            return self._resolve(room.id, session_id, outbound)

    def _context(self, session_id: str, action: Any) -> HandlerContext:
        return HandlerContext(
            session_id=session_id,
            action=action,
            engine=self.engine,
            registry=self.registry,
            sessions=self.sessions,
            config=self.config,
        )

    def _require_seat(self, session_id: str, room: Room, player_id: str) -> None:
        """
        Raises:
            UnauthorizedError: If the session is not attached as this player
        """
        if self.sessions.binding_for(session_id) != (room.id, player_id):
            raise UnauthorizedError("Enter the room as this player first")

    def _leave_previous_seat(self, session_id: str, action: Any) -> List[Delivery]:
        """
        A session moving to another seat first leaves the one it holds.

        Raises:
            NotFoundError: If the new seat does not exist; the old one is kept
        """
        binding = self.sessions.binding_for(session_id)
        if binding is None or binding == (action.room_id, action.player_id):
            return []
        with self.registry.locked(action.room_id) as room:
            if room.get_player(action.player_id) is None:
                raise NotFoundError("Player not found")
        logger.info(f"Session {session_id} changes seat; leaving its previous one")
        return self.disconnect(session_id)

    def _target_room_id(self, session_id: str, action: Any) -> Optional[str]:
        if action.type == "JOIN_ROOM":
            return self.registry.find_by_join_code(action.join_code).id
        if action.type == "LEAVE":
            binding = self.sessions.binding_for(session_id)
            return binding[0] if binding else None
        return action.room_id

    def _reject(
        self, session_id: str, error: ImposterEngineError, action_type: Optional[str]
    ) -> List[Delivery]:
        logger.warning(error.format_error_log(action_type))
        notice = ActionRejected(**error.to_notice(action_type))
        return [(session_id, notice.to_wire())]

    # ── Timers ───────────────────────────────────────────────

    def check_timers(self) -> List[Delivery]:
        """Fire every due phase timer. Call this on each loop iteration."""
        deliveries: List[Delivery] = []
        for timer in self.timers.due():
            deliveries.extend(self._fire(timer))
        return deliveries

    def _fire(self, timer: PhaseTimer) -> List[Delivery]:
        try:
            with self.registry.locked(timer.room_id) as room:
                if timer.kind is TimerKind.ROOM_EXPIRY:
                    self._expire(room)
                    return []
                outbound = self.engine.fire_timer(room, timer)
                return self._resolve(room.id, None, outbound)
        except NotFoundError:
            logger.debug(f"{timer.kind.value} timer for removed room {timer.room_id} ignored")
            return []

    def _expire(self, room: Room) -> None:
        """Destroy a room nobody is attached to. Caller holds room.lock."""
        if room.connected_players():
            return
        self.registry.remove(room.id)
        self.sessions.drop_room(room.id)
        self.timers.cancel(room.id)
        logger.info(f"[{room.join_code}] Empty room expired")

    # ── Delivery ─────────────────────────────────────────────

    def _resolve(
        self, room_id: str, session_id: Optional[str], outbound: Outbound
    ) -> List[Delivery]:
        """Expand audiences into (session, payload) pairs."""
        deliveries: List[Delivery] = []
        for audience, notification in outbound:
            payload = notification.to_wire()
            if audience.scope == "origin":
                targets = [session_id] if session_id else []
            elif audience.scope == "room":
                targets = list(self.sessions.sessions_in_room(room_id).values())
            else:
                target = self.sessions.session_for(room_id, audience.player_id)
                targets = [target] if target else []
            deliveries.extend((target, payload) for target in targets)
        return deliveries
