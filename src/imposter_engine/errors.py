"""
imposter_engine.errors — Custom exception classes
==================================================

Defines the exception hierarchy for rejected player actions.
Every error is recoverable: it is reported to the originating session
only and never mutates room state.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class ImposterEngineError(Exception):
    """Base exception for all rejected actions."""

    error_type = "ERROR"

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.details = details or {}
        super().__init__(reason)

    def to_notice(self, action: Optional[str] = None) -> Dict[str, Any]:
        """Build the payload of an ACTION_REJECTED notification."""
        return {
            "error_type": self.error_type,
            "reason": self.reason,
            "action": action,
            "details": dict(self.details),
        }

    def format_error_log(self, action: Optional[str] = None) -> str:
        return _format_error_line(self.error_type, action, self.reason, self.details)


class NotFoundError(ImposterEngineError):
    """Raised when a room or player does not exist."""

    error_type = "NOT_FOUND"


class InvalidPhaseError(ImposterEngineError):
    """Raised when an action is not legal in the room's current phase."""

    error_type = "INVALID_PHASE"

    def __init__(self, action: str, phase: str, expected: Optional[str] = None):
        self.phase = phase
        reason = f"Cannot {action} during the {phase} phase"
        if expected:
            reason += f" (expected {expected})"
        super().__init__(reason, {"phase": phase})


class UnauthorizedError(ImposterEngineError):
    """Raised for host-only actions by non-hosts, or participation by
    eliminated/disconnected players."""

    error_type = "UNAUTHORIZED"


class ValidationFailedError(ImposterEngineError):
    """Raised when an action's arguments fail validation."""

    error_type = "VALIDATION_FAILED"


def _format_error_line(
    error_type: str,
    action: Optional[str],
    reason: str,
    details: Dict[str, Any],
) -> str:
    """Format a single-line rejection record for the log."""
    line = f"REJECTED {action or '?'} [{error_type}] {reason}"
    if details:
        line += " " + _compact_json(details)
    return line


def _compact_json(data: Dict[str, Any]) -> str:
    try:
        return json.dumps(data, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(data)
