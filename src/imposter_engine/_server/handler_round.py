# Area: Server
"""
imposter_engine._server.handler_round — Round Handlers
======================================================

Handles the per-player actions of a round: SUBMIT_CLUE, MARK_READY and
CAST_VOTE. Only connected, non-eliminated players may take part.
"""

import logging

from .handler_base import BaseActionHandler, HandlerContext
from .._shared.protocol import Outbound

logger = logging.getLogger("imposter_engine.handler.round")


class SubmitClueHandler(BaseActionHandler):
    """Handler for SUBMIT_CLUE."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        player = self.require_participant(ctx.room, ctx.action.player_id)
        return ctx.engine.submit_clue(ctx.room, player, ctx.action.text)


class MarkReadyHandler(BaseActionHandler):
    """Handler for MARK_READY. Repeating it is harmless."""

    def handle(self, ctx: HandlerContext) -> Outbound:
        player = self.require_participant(ctx.room, ctx.action.player_id)
        return ctx.engine.mark_ready(ctx.room, player)


class CastVoteHandler(BaseActionHandler):
    """
    Handler for CAST_VOTE.

    A later vote from the same player replaces the earlier one.
    """

    def handle(self, ctx: HandlerContext) -> Outbound:
        voter = self.require_participant(ctx.room, ctx.action.player_id)
        logger.debug(f"[{ctx.room.join_code}] Vote: {voter.id} -> {ctx.action.target_id}")
        return ctx.engine.cast_vote(ctx.room, voter, ctx.action.target_id)
