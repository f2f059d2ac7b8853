# Area: Server
"""
imposter_engine._server.handler_host — Host Control Handlers
============================================================

Handles the host-only actions: UPDATE_SETTINGS, START_GAME, NEXT_ROUND,
FORCE_END_GAME, RESET_TO_LOBBY and RESTART_GAME. The acting player must
be the room's host; the engine enforces the phase rules.
"""

import logging

from .handler_base import BaseActionHandler, HandlerContext
from .._shared.protocol import Outbound

logger = logging.getLogger("imposter_engine.handler.host")


class UpdateSettingsHandler(BaseActionHandler):
    """Handler for UPDATE_SETTINGS. Only the fields present are changed."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        self.require_host(ctx.room, ctx.action.player_id)
        patch = ctx.action.settings.model_dump(exclude_none=True)
        return ctx.engine.update_settings(ctx.room, patch)


class StartGameHandler(BaseActionHandler):
    """Handler for START_GAME."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        self.require_host(ctx.room, ctx.action.player_id)
        return ctx.engine.start_game(ctx.room)


class NextRoundHandler(BaseActionHandler):
    """Handler for NEXT_ROUND (reveal -> clue of an undecided game)."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        self.require_host(ctx.room, ctx.action.player_id)
        return ctx.engine.next_round(ctx.room)


class ForceEndGameHandler(BaseActionHandler):
    """Handler for FORCE_END_GAME."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        host = self.require_host(ctx.room, ctx.action.player_id)
        logger.info(f"[{ctx.room.join_code}] {host.display_name} is ending the game")
        return ctx.engine.force_end(ctx.room)


class ResetToLobbyHandler(BaseActionHandler):
    """Handler for RESET_TO_LOBBY."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        self.require_host(ctx.room, ctx.action.player_id)
        return ctx.engine.reset_to_lobby(ctx.room)


class RestartGameHandler(BaseActionHandler):
    """Handler for RESTART_GAME: a fresh game with the current settings."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        self.require_host(ctx.room, ctx.action.player_id)
        return ctx.engine.restart_game(ctx.room)
