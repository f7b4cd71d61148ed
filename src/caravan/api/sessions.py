"""
Session manager for trade worlds.

Each session wraps a World, its TradeEngine, and the MessageLog that
collects player notifications. Sessions live in memory only.

FastAPI runs sync endpoints on a threadpool, so every mutation of a
session's world happens while holding that session's lock.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from caravan.core.config import TradeConfig
from caravan.core.engine import TradeEngine
from caravan.core.notify import MessageLog
from caravan.core.world import World
from caravan.experiment.presets import build_world, get_preset

logger = logging.getLogger(__name__)


@dataclass
class WorldSession:
    """A hosted trade world."""

    id: str
    name: str
    world: World
    engine: TradeEngine
    messages: MessageLog
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cycle": self.world.cycle,
            "settlement_count": len(self.world.settlements),
            "trade_count": len(self.world.trade_log),
        }


class SessionManager:
    """Manages multiple in-memory trade worlds.

    Parameters
    ----------
    default_config : TradeConfig | None
        Config used when a session is created without a preset or explicit
        config. ``None`` falls back to the baseline preset.
    """

    def __init__(self, default_config: TradeConfig | None = None):
        self.sessions: dict[str, WorldSession] = {}
        self.default_config = default_config
        self._lock = threading.Lock()

    def create_session(
        self,
        preset: str | None = None,
        config: dict[str, Any] | None = None,
        name: str | None = None,
        seed: int | None = None,
    ) -> WorldSession:
        """Create a sample world from a preset, a config dict, or the default.

        Raises KeyError for an unknown preset and ValueError for an
        invalid config.
        """
        if config is not None:
            try:
                trade_config = TradeConfig.from_dict(config)
            except TypeError as e:
                raise ValueError(f"Invalid trade config: {e}") from e
        elif preset is not None:
            trade_config = get_preset(preset)
        elif self.default_config is not None:
            trade_config = TradeConfig.from_dict(self.default_config.to_dict())
        else:
            trade_config = get_preset("baseline")

        world = build_world(config=trade_config, seed=seed)
        messages = MessageLog()
        world.sink = messages

        session_id = uuid.uuid4().hex[:12]
        session = WorldSession(
            id=session_id,
            name=name or trade_config.world_name,
            world=world,
            engine=TradeEngine(world, started=True),
            messages=messages,
        )
        with self._lock:
            self.sessions[session_id] = session
        logger.info("Created world session %s (%s)", session_id, session.name)
        return session

    def get_session(self, session_id: str) -> WorldSession:
        """Get a session by ID. Raises KeyError if not found."""
        try:
            return self.sessions[session_id]
        except KeyError:
            raise KeyError(f"Session '{session_id}' not found") from None

    def list_sessions(self) -> list[WorldSession]:
        with self._lock:
            return list(self.sessions.values())

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            if session_id not in self.sessions:
                raise KeyError(f"Session '{session_id}' not found")
            del self.sessions[session_id]

    def step(self, session_id: str, n: int = 1) -> list[dict[str, Any]]:
        """Advance a session by N trade cycles; returns their metrics."""
        session = self.get_session(session_id)
        with session.lock:
            return [m.to_dict() for m in session.engine.run(n)]
