# Area: Server
"""
Room hosting: registry, sessions, action routing and dispatch.

This package contains:
- RoomRegistry for join codes and per-room locks
- SessionDirectory mapping transport sessions to players
- Action handlers and the router that selects them
- EventDispatcher, the single entry point for inbound events
"""

from .dispatcher import Delivery, EventDispatcher
from .registry import RoomRegistry
from .sessions import SessionDirectory

__all__ = [
    "Delivery",
    "EventDispatcher",
    "RoomRegistry",
    "SessionDirectory",
]
