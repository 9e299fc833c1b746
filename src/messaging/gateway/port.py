"""Push gateway port: abstract interface for the third-party push service."""

from abc import ABC, abstractmethod


class PushGatewayPort(ABC):
    """Abstract interface for push gateway adapters.

    Every operation returns a dict with keys: status ("sent" or "failed"),
    message_id (optional), response (optional), error (on failure).
    """

    @abstractmethod
    async def send_to_token(self, token: str, payload: dict | None) -> dict:
        """Send a message to a single device token."""
        ...

    @abstractmethod
    async def send_to_topic(self, topic: str, payload: dict | None) -> dict:
        """Broadcast a message to every device subscribed to ``topic``."""
        ...

    @abstractmethod
    async def subscribe_token_to_topic(self, token: str, topic: str) -> dict:
        """Subscribe a device token to ``topic``."""
        ...


def build_data(fields: dict | None) -> dict:
    """Shape message data: the fields plus a ``message`` key, defaulting to "No message"."""
    data = dict(fields) if fields else {"empty": True}
    data["message"] = fields["message"] if fields and fields.get("message") else "No message"
    return data
