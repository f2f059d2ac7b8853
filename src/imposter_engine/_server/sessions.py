# Area: Server
"""
imposter_engine._server.sessions — Session Directory
====================================================

Maps transport sessions to (room, player) and back. A player has at
most one live session; binding a new one replaces the old binding.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger("imposter_engine.sessions")


class SessionDirectory:
    """Who delivers to whom: session_id <-> (room_id, player_id)."""

    def __init__(self) -> None:
        self._by_session: Dict[str, Tuple[str, str]] = {}
        self._by_room: Dict[str, Dict[str, str]] = {}   # room -> player -> session
        self._lock = threading.Lock()

    def bind(self, session_id: str, room_id: str, player_id: str) -> Optional[str]:
        """
        Attach a session to a player.

        Returns:
            The session previously bound to this player, if it was replaced
        """
        with self._lock:
            self._unbind_locked(session_id)
            players = self._by_room.setdefault(room_id, {})
            replaced = players.get(player_id)
            if replaced is not None and replaced != session_id:
                self._by_session.pop(replaced, None)
            players[player_id] = session_id
            self._by_session[session_id] = (room_id, player_id)
        if replaced and replaced != session_id:
            logger.info(f"Session {replaced} replaced by {session_id} for player {player_id}")
            return replaced
        return None

    def unbind(self, session_id: str) -> Optional[Tuple[str, str]]:
        """Detach a session. Returns its former (room_id, player_id), if any."""
        with self._lock:
            return self._unbind_locked(session_id)

    def _unbind_locked(self, session_id: str) -> Optional[Tuple[str, str]]:
        binding = self._by_session.pop(session_id, None)
        if binding is None:
            return None
        room_id, player_id = binding
        players = self._by_room.get(room_id, {})
        if players.get(player_id) == session_id:
            del players[player_id]
        if not players:
            self._by_room.pop(room_id, None)
        return binding

    def binding_for(self, session_id: str) -> Optional[Tuple[str, str]]:
        with self._lock:
            return self._by_session.get(session_id)

    def session_for(self, room_id: str, player_id: str) -> Optional[str]:
        with self._lock:
            return self._by_room.get(room_id, {}).get(player_id)

    def sessions_in_room(self, room_id: str) -> Dict[str, str]:
        """player_id -> session_id for every attached player of a room."""
        with self._lock:
            return dict(self._by_room.get(room_id, {}))

    def drop_room(self, room_id: str) -> List[str]:
        """Forget every session of a room. Returns the dropped session ids."""
        with self._lock:
            players = self._by_room.pop(room_id, {})
            for session_id in players.values():
                self._by_session.pop(session_id, None)
        return list(players.values())
