# Area: Shared
"""
imposter_engine._shared.protocol_logger — Protocol message logging
==================================================================

One colored terminal line per inbound action, outbound notification
and rejection, with the session it concerns. Used by the runner.
Lines are printed only while the logger is enabled.
"""

from __future__ import annotations
import sys
from datetime import datetime
from typing import Optional

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Protocol messages
RED = "\033[31m"           # Rejections
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# MESSAGE TYPE → DISPLAY NAME MAPPINGS
# ══════════════════════════════════════════════════════════════

# Actions the engine RECEIVES
RECEIVE_DISPLAY_NAMES = {
    "CREATE_ROOM": "CREATE-ROOM",
    "JOIN_ROOM": "JOIN-ROOM",
    "UPDATE_SETTINGS": "SETTINGS",
    "ENTER_ROOM": "ENTER-ROOM",
    "START_GAME": "START-GAME",
    "SUBMIT_CLUE": "CLUE",
    "MARK_READY": "READY",
    "CAST_VOTE": "VOTE",
    "NEXT_ROUND": "NEXT-ROUND",
    "FORCE_END_GAME": "END-GAME",
    "RESET_TO_LOBBY": "RESET",
    "RESTART_GAME": "RESTART",
    "LEAVE": "LEAVE",
}

# Notifications the engine SENDS
SEND_DISPLAY_NAMES = {
    "ROOM_JOINED": "JOINED",
    "ROOM_UPDATED": "ROOM-UPDATE",
    "PHASE_CHANGED": "PHASE",
    "ROLE_INFO": "ROLE",
    "CLUE_SUBMITTED": "CLUES",
    "READY_UPDATE": "READY-COUNT",
    "VOTE_UPDATE": "VOTE-COUNT",
    "VOTE_TIE": "TIE",
    "VOTE_RESULTS": "VOTE-RESULTS",
    "GAME_OVER": "GAME-OVER",
    "ACTION_REJECTED": "REJECTED",
}


class ProtocolLogger:
    """Logger for protocol traffic of the engine."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _emit(self, line: str, stream=None) -> None:
        if self.enabled:
            print(line, file=stream or sys.stdout)

    def log_received(self, session_id: str, action_type: Optional[str]) -> None:
        """Log an inbound action."""
        display = RECEIVE_DISPLAY_NAMES.get(action_type, action_type or "?")
        self._emit(
            f"{GREEN}{self._now()} | RECEIVED | from {session_id:16} | {display:14}{RESET}"
        )

    def log_sent(self, session_id: str, notification_type: str, detail: str = "") -> None:
        """Log an outbound notification."""
        display = SEND_DISPLAY_NAMES.get(notification_type, notification_type)
        line = f"{GREEN}{self._now()} | SENT     | to   {session_id:16} | {display:14}"
        if detail:
            line += f" | {detail}"
        self._emit(line + RESET)

    def log_rejected(self, session_id: str, error_type: str, reason: str) -> None:
        """Log a rejection sent back to a session."""
        self._emit(
            f"{RED}{self._now()} | REJECTED | to   {session_id:16} | "
            f"{error_type:14} | {reason}{RESET}",
            sys.stderr,
        )


# Global singleton instance
_protocol_logger: Optional[ProtocolLogger] = None


def get_protocol_logger() -> ProtocolLogger:
    """Get or create the global protocol logger instance."""
    global _protocol_logger
    if _protocol_logger is None:
        _protocol_logger = ProtocolLogger()
    return _protocol_logger
