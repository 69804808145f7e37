"""Conversation models for the console chatbot."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MessageDirection(str, Enum):
    """Who sent a message: the user (inbound) or the chatbot (outbound)."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


@dataclass
class ConversationTurn:
    """A single message in the conversation."""

    direction: MessageDirection
    text: str
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def speaker(self) -> str:
        """Speaker prefix used when rendering the turn into a prompt."""
        return "Human" if self.direction == MessageDirection.INBOUND else "AI"
