# Area: Shared
"""
Shared utilities used by the engine, the server and the runner.

This package contains:
- Logging configuration
- Wire protocol models (inbound actions, outbound notifications)
- Protocol logger for terminal traffic display
"""

from .logging_config import (
    setup_logging,
    enable_protocol_mode,
    disable_protocol_mode,
    is_protocol_mode_enabled,
)
from .protocol import (
    ACTION_TYPES,
    Audience,
    Notification,
    Outbound,
    parse_action,
)
from .protocol_logger import get_protocol_logger, ProtocolLogger

__all__ = [
    "setup_logging",
    "enable_protocol_mode",
    "disable_protocol_mode",
    "is_protocol_mode_enabled",
    "ACTION_TYPES",
    "Audience",
    "Notification",
    "Outbound",
    "parse_action",
    "get_protocol_logger",
    "ProtocolLogger",
]
