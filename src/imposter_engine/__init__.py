"""
imposter_engine — Game-session engine for the imposter party game
=================================================================

Quick Start (no client needed):
    from imposter_engine.demo import DemoTable
    result = DemoTable(players=5, imposters=1).play()

Serving real players:
    from imposter_engine import EngineRunner, load_config
    runner = EngineRunner(config=load_config(), transport=my_transport)
    runner.run()

Embedding without a loop:
    from imposter_engine import EventDispatcher
    dispatcher = EventDispatcher()
    deliveries = dispatcher.dispatch(session_id, {"type": "CREATE_ROOM"})
    deliveries += dispatcher.check_timers()

Type Definitions
----------------
The shapes of the projected payloads are available for import:

    from imposter_engine import PublicRoomView, RolePayload
"""

from ._runner_config import DEFAULT_CONFIG, load_config, validate_config
from ._server.dispatcher import Delivery, EventDispatcher
from ._engine.enums import ClueMode, GamePhase, RoomStatus, Winners
from .runner import EngineRunner, Transport
from .errors import (
    ImposterEngineError,
    NotFoundError,
    InvalidPhaseError,
    UnauthorizedError,
    ValidationFailedError,
)
from .types import (
    PublicPlayer,
    PublicSettings,
    PublicClue,
    PublicGameState,
    PublicRoomView,
    RolePayload,
    EliminationPayload,
)

__version__ = "1.0.0"

__all__ = [
    # Main classes
    "EventDispatcher",
    "EngineRunner",
    "Transport",
    "Delivery",
    # Config
    "DEFAULT_CONFIG",
    "load_config",
    "validate_config",
    # Enums
    "ClueMode",
    "GamePhase",
    "RoomStatus",
    "Winners",
    # Errors
    "ImposterEngineError",
    "NotFoundError",
    "InvalidPhaseError",
    "UnauthorizedError",
    "ValidationFailedError",
    # Payload types
    "PublicPlayer",
    "PublicSettings",
    "PublicClue",
    "PublicGameState",
    "PublicRoomView",
    "RolePayload",
    "EliminationPayload",
]
