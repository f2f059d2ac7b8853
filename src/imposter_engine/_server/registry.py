# Area: Server
"""
imposter_engine._server.registry — Room Registry
================================================

Keyed in-memory store of rooms. Join codes are unique among active
rooms only; a code is free again once its room is removed.

The registry's own lock guards the maps; each room's lock guards the
room's contents. Rooms are handed out for mutation only via locked().
"""

from __future__ import annotations

import logging
import secrets
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple

from .._engine.randomness import RandomSource
from .._engine.state import Player, Room, RoomSettings
from .._runner_config import DEFAULT_CONFIG
from ..errors import NotFoundError, ValidationFailedError

logger = logging.getLogger("imposter_engine.registry")

DEFAULT_HOST_NAME = "Host"


def new_player_id() -> str:
    """Opaque, unguessable player token."""
    return secrets.token_urlsafe(16)


def clean_name(name: str, max_length: int) -> str:
    """
    Normalise a display name.

    Raises:
        ValidationFailedError: If the name is blank or too long
    """
    cleaned = " ".join(name.split())
    if not cleaned:
        raise ValidationFailedError("Name cannot be empty")
    if len(cleaned) > max_length:
        raise ValidationFailedError(
            f"Name is limited to {max_length} characters", {"limit": max_length}
        )
    return cleaned


class RoomRegistry:
    """
    Store of active rooms.

    Usage:
        registry = RoomRegistry(config)
        room, host = registry.create_room("Alice")
        with registry.locked(room.id) as room:
            ...
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)
        self.rng = rng or RandomSource()
        self._rooms: Dict[str, Room] = {}
        self._codes: Dict[str, str] = {}     # join code -> room id
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def create_room(self, host_name: str = "") -> Tuple[Room, Player]:
        """
        Create a room with its host as the first player.

        Raises:
            ValidationFailedError: If the host name is too long, or no
                join code is available
        """
        name = host_name if host_name.strip() else DEFAULT_HOST_NAME
        host = Player(
            id=new_player_id(),
            display_name=clean_name(name, self.config["name_max_length"]),
            is_host=True,
        )
        settings = RoomSettings(max_players=self.config["default_max_players"])

        with self._lock:
            code = self._unique_join_code()
            room = Room(id=uuid.uuid4().hex, join_code=code,
                        players=[host], settings=settings)
            self._rooms[room.id] = room
            self._codes[code] = room.id

        logger.info(f"Room created - Code: {code}, Host: {host.display_name} "
                    f"(active rooms: {len(self)})")
        return room, host

    def _unique_join_code(self) -> str:
        """Draw codes until one is unused. Caller holds self._lock."""
        width = self.config["join_code_length"]
        if len(self._codes) >= 10 ** width:
            raise ValidationFailedError("No join codes available, try again later")
        while True:
            code = self.rng.digits(width)
            if code not in self._codes:
                return code

    def get(self, room_id: str) -> Room:
        """
        Raises:
            NotFoundError: If no active room has this id
        """
        with self._lock:
            room = self._rooms.get(room_id)
        if room is None:
            raise NotFoundError("Room not found")
        return room

    def find_by_join_code(self, code: str) -> Room:
        """
        Raises:
            NotFoundError: If no active room uses this join code
        """
        with self._lock:
            room_id = self._codes.get(code.strip())
            room = self._rooms.get(room_id) if room_id else None
        if room is None:
            logger.info(f"Room not found for code: {code}")
            raise NotFoundError("Game not found")
        return room

    @contextmanager
    def locked(self, room_id: str) -> Iterator[Room]:
        """
        Hold a room's lock for the duration of the block.

        Raises:
            NotFoundError: If the room is missing, or was removed while
                waiting for its lock
        """
        room = self.get(room_id)
        with room.lock:
            with self._lock:
                still_active = self._rooms.get(room_id) is room
            if not still_active:
                raise NotFoundError("Room not found")
            yield room

    def remove(self, room_id: str) -> Optional[Room]:
        """Remove a room and free its join code. No-op if absent."""
        with self._lock:
            room = self._rooms.pop(room_id, None)
            if room is not None:
                self._codes.pop(room.join_code, None)
        if room is not None:
            logger.info(f"Room removed - Code: {room.join_code} "
                        f"(active rooms: {len(self)})")
        return room
