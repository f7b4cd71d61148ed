"""
Notification sinks for player-facing trade messages.

The trade core only ever writes to a sink; it never reads anything back.
The base class is a silent no-op so headless simulations need no setup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class NotificationSink:
    """Receives player notifications and errors. No-op by default."""

    def notify(self, message: str, category: str) -> None:
        """Called after a successful player action."""

    def error(self, message: str) -> None:
        """Called when a player action fails."""


@dataclass
class Message:
    level: str  # "notify" | "error"
    text: str
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "text": self.text, "category": self.category}


class MessageLog(NotificationSink):
    """Records messages in memory and mirrors them to the logger."""

    def __init__(self) -> None:
        self.messages: list[Message] = []

    def notify(self, message: str, category: str) -> None:
        self.messages.append(Message(level="notify", text=message, category=category))
        logger.info("[%s] %s", category, message)

    def error(self, message: str) -> None:
        self.messages.append(Message(level="error", text=message))
        logger.warning("%s", message)

    def drain(self) -> list[Message]:
        drained = self.messages
        self.messages = []
        return drained
