"""Relay events: the inbound request, one of four kinds."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventKind(Enum):
    REGISTER = "register"
    UNREGISTER = "unregister"
    MESSAGE = "message"
    TOPIC = "topic"


@dataclass(frozen=True)
class RelayEvent:
    """A single relay request. Constructed per request, never persisted.

    ``kind`` stays a plain string so unknown kinds reach the dispatcher and
    are rejected there.
    """

    kind: str
    token: str | None = None
    user_id: str | None = None
    topic_name: str | None = None
    fields: dict[str, Any] | None = None

    def to_payload(self) -> dict:
        """Wire form echoed back in success responses."""
        return {
            "event": self.kind,
            "token": self.token,
            "userId": self.user_id,
            "topic": self.topic_name,
            "fields": self.fields,
        }
