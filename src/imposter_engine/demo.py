"""
imposter_engine.demo — Demo table with bot players
==================================================

A ready-to-run table that plays one complete game through the real
dispatcher and runner, with bots standing in for human players.
Works out of the box; no transport or client is needed.

Usage:
    from imposter_engine.demo import DemoTable

    result = DemoTable(players=5, imposters=1).play()
    print(result["winners"])
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional, Tuple

from ._engine.randomness import RandomSource
from ._server.dispatcher import EventDispatcher
from .runner import EngineRunner

logger = logging.getLogger("imposter_engine.demo")

BOT_NAMES = ["Ada", "Boris", "Chen", "Dana", "Emeka", "Farah", "Gus", "Hana",
             "Ivo", "Jules", "Kira", "Luis", "Mina", "Noor", "Otto", "Pia",
             "Quinn", "Rui", "Sana", "Tomas"]

# Vague enough for any secret word, so imposters blend in too
CLUE_FILLERS = ["common", "bigger than a cat", "you see it daily", "colourful",
                "found outdoors", "makes a sound", "kids like it", "heavy",
                "old-fashioned", "expensive", "soft", "round"]

# Upper bound on bot turns before the demo gives up
MAX_TURNS = 500


class InMemoryTransport:
    """
    Queue-backed transport: inbound events are pushed by the caller,
    outbound payloads collect per session until drained.
    """

    def __init__(self) -> None:
        self._inbox: Deque[Tuple[str, Optional[Dict[str, Any]]]] = deque()
        self._outbox: Dict[str, List[Dict[str, Any]]] = {}

    def push(self, session_id: str, payload: Dict[str, Any]) -> None:
        self._inbox.append((session_id, payload))

    def disconnect(self, session_id: str) -> None:
        self._inbox.append((session_id, None))

    def poll(self) -> List[Tuple[str, Optional[Dict[str, Any]]]]:
        events = list(self._inbox)
        self._inbox.clear()
        return events

    def send(self, session_id: str, payload: Dict[str, Any]) -> None:
        self._outbox.setdefault(session_id, []).append(payload)

    def drain(self, session_id: str) -> List[Dict[str, Any]]:
        """Return and forget everything sent to a session so far."""
        return self._outbox.pop(session_id, [])


@dataclass
class DemoBot:
    name: str
    session_id: str
    player_id: Optional[str] = None
    role: Optional[str] = None
    word: Optional[str] = None
    inbox: List[Dict[str, Any]] = field(default_factory=list)


class DemoTable:
    """
    Plays one game with bot players.

    Tie and game-over delays are zeroed so the game runs straight
    through; every other setting comes from the config.
    """

    def __init__(
        self,
        players: int = 4,
        imposters: int = 1,
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[RandomSource] = None,
        protocol_mode: bool = False,
    ):
        if not 1 <= players <= len(BOT_NAMES):
            raise ValueError(f"players must be between 1 and {len(BOT_NAMES)}")
        self.imposters = imposters
        self.rng = rng or RandomSource()

        config = dict(config or {})
        config.update(tie_display_seconds=0, game_over_delay_seconds=0)
        config.setdefault("log_file", "")
        self.transport = InMemoryTransport()
        self.runner = EngineRunner(
            config,
            self.transport,
            dispatcher=EventDispatcher(config, self.rng),
            protocol_mode=protocol_mode,
        )

        self.bots = [DemoBot(name=BOT_NAMES[i], session_id=f"bot-{i + 1}")
                     for i in range(players)]
        self.host = self.bots[0]
        self.room_id: Optional[str] = None
        self.join_code: Optional[str] = None
        self.phase = "lobby"
        self.view: Dict[str, Any] = {}
        self.result: Optional[Dict[str, Any]] = None
        self.rejections: List[Dict[str, Any]] = []

    # ── Public API ───────────────────────────────────────────

    def play(self) -> Dict[str, Any]:
        """
        Seat the bots, start the game and play until it is over.

        Returns:
            The GAME_OVER payload

        Raises:
            RuntimeError: If the game cannot start or never finishes
        """
        self._seat_players()
        self._host_action("UPDATE_SETTINGS", settings={"imposter_count": self.imposters})
        self._host_action("START_GAME")
        self._pump()
        if self.phase == "lobby":
            reasons = "; ".join(r["reason"] for r in self.rejections)
            raise RuntimeError(f"Demo game could not start: {reasons}")

        for _ in range(MAX_TURNS):
            if self.result is not None:
                return self.result
            self._take_turn()
            self._pump()
        raise RuntimeError("Demo game did not finish")

    def bot_name(self, player_id: str) -> str:
        for bot in self.bots:
            if bot.player_id == player_id:
                return bot.name
        return player_id

    # ── Seating ──────────────────────────────────────────────

    def _seat_players(self) -> None:
        self.transport.push(self.host.session_id,
                            {"type": "CREATE_ROOM", "host_name": self.host.name})
        self._pump()
        self._host_action("ENTER_ROOM")
        if len(self.bots) > self.runner.config["default_max_players"]:
            self._host_action("UPDATE_SETTINGS", settings={"max_players": len(self.bots)})
        for bot in self.bots[1:]:
            self.transport.push(bot.session_id, {"type": "JOIN_ROOM",
                                                 "join_code": self.join_code,
                                                 "player_name": bot.name})
        self._pump()
        for bot in self.bots[1:]:
            self._action(bot, "ENTER_ROOM")
        self._pump()

    # ── Turns ────────────────────────────────────────────────

    def _take_turn(self) -> None:
        active = self._active_bots()
        if self.phase == "clue":
            for bot in active:
                self._action(bot, "SUBMIT_CLUE", text=self.rng.choice(CLUE_FILLERS))
        elif self.phase == "discussion":
            for bot in active:
                self._action(bot, "MARK_READY")
        elif self.phase == "voting":
            for bot in active:
                targets = [b.player_id for b in active if b is not bot]
                self._action(bot, "CAST_VOTE", target_id=self.rng.choice(targets))
        elif self.phase == "reveal":
            self._host_action("NEXT_ROUND")
        # Tie resolves on its own once the timer fires

    def _active_bots(self) -> List[DemoBot]:
        eliminated = {p["player_id"] for p in self.view.get("players", [])
                      if p["eliminated"] or not p["connected"]}
        return [b for b in self.bots if b.player_id and b.player_id not in eliminated]

    def _action(self, bot: DemoBot, action_type: str, **fields: Any) -> None:
        payload = {"type": action_type, "room_id": self.room_id, "player_id": bot.player_id}
        payload.update(fields)
        self.transport.push(bot.session_id, payload)

    def _host_action(self, action_type: str, **fields: Any) -> None:
        self._action(self.host, action_type, **fields)

    # ── Inbound notifications ────────────────────────────────

    def _pump(self) -> None:
        self.runner.run_once()
        for bot in self.bots:
            for payload in self.transport.drain(bot.session_id):
                bot.inbox.append(payload)
                self._observe(bot, payload)

    def _observe(self, bot: DemoBot, payload: Dict[str, Any]) -> None:
        note_type = payload["type"]
        if note_type == "ROOM_JOINED":
            bot.player_id = payload["player"]["player_id"]
            self.room_id = payload["room_id"]
            self.join_code = payload["join_code"]
        elif note_type == "ROOM_UPDATED":
            self.view = payload["room"]
        elif note_type == "PHASE_CHANGED":
            self.phase = payload["phase"]
        elif note_type == "ROLE_INFO":
            bot.role = payload["role"]
            bot.word = payload["word"]
        elif note_type == "GAME_OVER":
            self.result = payload
        elif note_type == "ACTION_REJECTED":
            logger.warning(f"{bot.name}: {payload['action']} rejected: {payload['reason']}")
            self.rejections.append(payload)
