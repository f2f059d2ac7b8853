# Area: Server
"""
imposter_engine._server.handler_base — Base Action Handler
==========================================================

Abstract base class for inbound action handlers, plus the context
object passed to them and the shared authorization checks.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .registry import RoomRegistry
from .sessions import SessionDirectory
from .._engine.game_engine import GameEngine
from .._engine.state import Player, Room
from .._shared.protocol import Outbound
from ..errors import NotFoundError, UnauthorizedError


@dataclass
class HandlerContext:
    """Context passed to handlers. ``room`` is locked by the dispatcher."""

    session_id: str
    action: Any
    engine: GameEngine
    registry: RoomRegistry
    sessions: SessionDirectory
    config: Dict[str, Any]
    room: Optional[Room] = None


class BaseActionHandler(ABC):
    """
    Abstract base class for inbound action handlers.

    Provides helper methods for:
    - Looking up the acting player
    - Host-only checks
    - Participation checks (connected and not eliminated)
    """

    @abstractmethod
    def handle(self, ctx: HandlerContext) -> Outbound:
        """
        Handle an action.

        Args:
            ctx: The handler context

        Returns:
            (audience, notification) pairs to deliver
        """
        pass

    def require_player(self, room: Room, player_id: str) -> Player:
        """
        Raises:
            NotFoundError: If the player is not in the room
        """
        player = room.get_player(player_id)
        if player is None:
            raise NotFoundError("Player not found")
        return player

    def require_host(self, room: Room, player_id: str) -> Player:
        """
        Raises:
            NotFoundError: If the player is not in the room
            UnauthorizedError: If the player is not the host
        """
        player = self.require_player(room, player_id)
        if not player.is_host:
            raise UnauthorizedError("Only the host can do that")
        return player

    def require_participant(self, room: Room, player_id: str) -> Player:
        """
        Raises:
            NotFoundError: If the player is not in the room
            UnauthorizedError: If the player is eliminated or disconnected
        """
        player = self.require_player(room, player_id)
        if player.eliminated:
            raise UnauthorizedError("Eliminated players cannot take part in this round")
        if not player.connected:
            raise UnauthorizedError("Enter the room before taking part")
        return player

