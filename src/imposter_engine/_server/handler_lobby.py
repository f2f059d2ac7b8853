# Area: Server
"""
imposter_engine._server.handler_lobby — Membership Handlers
===========================================================

Handles the actions that change who is in a room and who is attached
to it: CREATE_ROOM, JOIN_ROOM, ENTER_ROOM and LEAVE (also used for
transport disconnects).
"""

import logging

from .handler_base import BaseActionHandler, HandlerContext
from .registry import clean_name, new_player_id
from .._engine.enums import GamePhase, TimerKind
from .._engine.projector import public_player
from .._engine.state import Player, Room
from .._shared.protocol import ORIGIN, Outbound, RoomJoined
from ..errors import InvalidPhaseError, ValidationFailedError

logger = logging.getLogger("imposter_engine.handler.lobby")


def _joined(room: Room, player: Player) -> RoomJoined:
    return RoomJoined(room_id=room.id, join_code=room.join_code,
                      player=public_player(player))


class CreateRoomHandler(BaseActionHandler):
    """
    Handler for CREATE_ROOM.

    The dispatcher has no room to lock yet, so this handler creates the
    room itself and publishes it on the context. The host is not attached
    until it sends ENTER_ROOM with the returned token.
    """

    def handle(self, ctx: HandlerContext) -> Outbound:
        room, host = ctx.registry.create_room(ctx.action.host_name)
        ctx.room = room
        # Nobody is connected yet; the room expires unless the host enters
        ctx.engine.timers.schedule(
            room.id, TimerKind.ROOM_EXPIRY, room.generation,
            ctx.config["empty_room_ttl_seconds"],
        )
        return [(ORIGIN, _joined(room, host))]


class JoinRoomHandler(BaseActionHandler):
    """
    Handler for JOIN_ROOM.

    Adds a new, not yet connected player to a lobby that has room left.
    """

    def handle(self, ctx: HandlerContext) -> Outbound:
        room = ctx.room
        if room.phase is not GamePhase.LOBBY:
            raise InvalidPhaseError("join", room.phase.value, "lobby")
        if len(room.players) >= room.settings.max_players:
            raise ValidationFailedError(
                "Room is full", {"max_players": room.settings.max_players}
            )

        name = clean_name(ctx.action.player_name, ctx.config["name_max_length"])
        player = Player(id=new_player_id(), display_name=name)
        room.players.append(player)
        logger.info(f"[{room.join_code}] {name} joined "
                    f"({len(room.players)}/{room.settings.max_players})")

        outbound: Outbound = [(ORIGIN, _joined(room, player))]
        outbound.extend(ctx.engine.room_updated(room))
        return outbound


class EnterRoomHandler(BaseActionHandler):
    """
    Handler for ENTER_ROOM.

    Attaches the calling session to a player and marks it connected.
    Entering again from a new session replaces the old one, and a player
    re-entering a running game gets its role payload again.
    """

    def handle(self, ctx: HandlerContext) -> Outbound:
        room = ctx.room
        player = self.require_player(room, ctx.action.player_id)

        ctx.sessions.bind(ctx.session_id, room.id, player.id)
        player.connected = True
        ctx.engine.timers.cancel(room.id, TimerKind.ROOM_EXPIRY)
        logger.info(f"[{room.join_code}] {player.display_name} entered")

        outbound = ctx.engine.room_updated(room)
        if room.phase is not GamePhase.LOBBY:
            outbound.extend(ctx.engine.role_info(room, player.id))
        return outbound


class LeaveHandler(BaseActionHandler):
    """
    Handler for LEAVE and transport disconnects.

    Marks the session's player disconnected. The player keeps its seat
    and can re-enter; a room nobody is attached to expires after the
    configured TTL.
    """

    def handle(self, ctx: HandlerContext) -> Outbound:
        room = ctx.room
        binding = ctx.sessions.unbind(ctx.session_id)
        if binding is None or binding[0] != room.id:
            return []

        player = room.get_player(binding[1])
        if player is None or not player.connected:
            return []
        player.connected = False
        logger.info(f"[{room.join_code}] {player.display_name} disconnected")

        outbound = ctx.engine.recheck_progress(room)
        outbound.extend(ctx.engine.room_updated(room))

        if not room.connected_players():
            ctx.engine.timers.schedule(
                room.id, TimerKind.ROOM_EXPIRY, room.generation,
                ctx.config["empty_room_ttl_seconds"],
            )
        return outbound
