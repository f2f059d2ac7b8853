# Area: Server
"""
imposter_engine._server.action_router — Action Router
=====================================================

Routes validated inbound actions to their registered handlers based on
the action's ``type``.
"""

import logging
from typing import Dict, Optional, Protocol

from .._shared.protocol import Outbound

logger = logging.getLogger("imposter_engine.router")


class ActionHandler(Protocol):
    """Protocol for action handlers."""

    def handle(self, ctx) -> Outbound:
        """Handle an action and return the notifications to deliver."""
        ...


class ActionRouter:
    """
    Routes inbound actions to handlers.

    Usage:
        router = ActionRouter()
        router.register_handler("SUBMIT_CLUE", SubmitClueHandler())
        outbound = router.route(ctx)
    """

    def __init__(self):
        """Initialize router with empty handler registry."""
        self._handlers: Dict[str, ActionHandler] = {}

    def register_handler(self, action_type: str, handler: ActionHandler) -> None:
        """
        Register a handler for an action type.

        Args:
            action_type: The action type to handle
            handler: The handler instance
        """
        self._handlers[action_type] = handler
        logger.debug(f"Registered handler for {action_type}")

    def get_handler(self, action_type: str) -> Optional[ActionHandler]:
        return self._handlers.get(action_type)

    def route(self, ctx) -> Outbound:
        """
        Route the context's action to its handler.

        Returns:
            The handler's outbound notifications, or [] if none is registered
        """
        action_type = ctx.action.type
        handler = self._handlers.get(action_type)

        if handler is None:
            logger.warning(f"No handler for action type: {action_type}")
            return []

        logger.debug(f"Routing {action_type} to handler")
        return handler.handle(ctx)
