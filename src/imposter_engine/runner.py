"""
imposter_engine.runner — Main event loop
========================================

The EngineRunner connects a transport to the EventDispatcher. Each
iteration it drains the transport's inbound queue, dispatches every
action or disconnect, fires due phase timers, and sends the resulting
deliveries back through the transport.

The transport is anything with ``poll()`` and ``send()``; the engine
does not care whether sessions are websockets, HTTP long-polls, or the
in-memory queues used by the demo.
"""

from __future__ import annotations
import logging
import signal
import time
from typing import Any, Dict, List, Optional, Protocol, Tuple

from ._runner_config import resolve_config
from ._server.dispatcher import Delivery, EventDispatcher
from ._shared import enable_protocol_mode, get_protocol_logger, setup_logging

logger = logging.getLogger("imposter_engine")


class Transport(Protocol):
    """What the runner needs from a transport."""

    def poll(self) -> List[Tuple[str, Optional[Dict[str, Any]]]]:
        """
        Return pending inbound events as (session_id, payload) pairs.
        A payload of None means the session disconnected.
        """
        ...

    def send(self, session_id: str, payload: Dict[str, Any]) -> None:
        """Deliver one notification to a session."""
        ...


class EngineRunner:
    """
    Blocking event loop around one EventDispatcher.

    Usage
    -----
        from imposter_engine import EngineRunner, load_config

        runner = EngineRunner(config=load_config(), transport=my_transport)
        runner.run()
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]],
        transport: Transport,
        dispatcher: Optional[EventDispatcher] = None,
        protocol_mode: bool = False,
    ):
        self.config = resolve_config(config)
        self.transport = transport
        self._running = False

        setup_logging(log_file_path=self.config["log_file"], level=self.config["log_level"])

        self.dispatcher = dispatcher or EventDispatcher(self.config)
        self.poll_interval = self.config["poll_interval_seconds"]

        self._protocol_logger = get_protocol_logger()
        self._protocol_logger.set_enabled(protocol_mode)
        if protocol_mode:
            # Protocol lines replace standard logs on the terminal
            enable_protocol_mode()

    # ── Main loop ─────────────────────────────────────────────

    def run(self) -> None:
        """Start the event loop. Blocks until stop() or Ctrl+C."""
        self._running = True
        signal.signal(signal.SIGINT, lambda s, f: self.stop())

        logger.info("=" * 60)
        logger.info("  Imposter Engine Runner — Starting")
        logger.info(f"  Poll:  every {self.poll_interval}s")
        logger.info("=" * 60)

        while self._running:
            try:
                self.run_once()
                time.sleep(self.poll_interval)
            except KeyboardInterrupt:
                break
            except Exception as e:
                logger.error(f"Loop error: {e}", exc_info=True)
                time.sleep(self.poll_interval)

        logger.info("Runner stopped.")

    def stop(self) -> None:
        logger.info("Shutting down gracefully...")
        self._running = False

    def run_once(self) -> List[Delivery]:
        """Single iteration: poll → dispatch → fire timers → send."""
        sent: List[Delivery] = []

        for session_id, payload in self.transport.poll():
            if payload is None:
                self._protocol_logger.log_received(session_id, "LEAVE")
                deliveries = self.dispatcher.disconnect(session_id)
            else:
                action_type = payload.get("type") if isinstance(payload, dict) else None
                self._protocol_logger.log_received(session_id, action_type)
                deliveries = self.dispatcher.dispatch(session_id, payload)
            sent.extend(self._send(deliveries))

        sent.extend(self._send(self.dispatcher.check_timers()))
        return sent

    def _send(self, deliveries: List[Delivery]) -> List[Delivery]:
        for session_id, payload in deliveries:
            note_type = payload.get("type", "")
            if note_type == "ACTION_REJECTED":
                self._protocol_logger.log_rejected(
                    session_id, payload.get("error_type", ""), payload.get("reason", "")
                )
            else:
                self._protocol_logger.log_sent(session_id, note_type, _summary(payload))
            self.transport.send(session_id, payload)
        return deliveries


def _summary(payload: Dict[str, Any]) -> str:
    """Short, role-safe detail for a protocol line."""
    note_type = payload.get("type")
    if note_type == "PHASE_CHANGED":
        return f"{payload['phase']} (round {payload['round_number']})"
    if note_type == "READY_UPDATE":
        return f"{payload['ready_count']}/{payload['total_players']}"
    if note_type == "VOTE_UPDATE":
        return f"{payload['votes_received']}/{payload['total_votes']}"
    if note_type == "GAME_OVER":
        return f"{payload['winners']} win"
    return ""
