"""Fake push gateway: records sends and subscriptions for testing."""

from uuid import uuid4

from messaging.gateway.port import PushGatewayPort, build_data


class FakePushGateway(PushGatewayPort):
    """Push gateway that records every call in memory for test assertions."""

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.topic_broadcasts: list[dict] = []
        self.subscriptions: list[dict] = []
        self.failing_operations: set[str] = set()
        self.failure_reason = "Push delivery failed"

    def configure(self, fail_on=(), failure_reason: str = "Push delivery failed"):
        """Make the named operations return a failed result.

        Operation names: "send_to_token", "send_to_topic", "subscribe_token_to_topic".
        """
        self.failing_operations = set(fail_on)
        self.failure_reason = failure_reason

    def _failed(self, operation: str) -> dict | None:
        if operation in self.failing_operations:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}
        return None

    def call_count(self) -> int:
        return len(self.sent_messages) + len(self.topic_broadcasts) + len(self.subscriptions)

    async def send_to_token(self, token: str, payload: dict | None) -> dict:
        failed = self._failed("send_to_token")
        if failed:
            return failed

        message_id = f"push-{uuid4().hex[:12]}"
        self.sent_messages.append({"message_id": message_id, "token": token, "data": build_data(payload)})
        return {"message_id": message_id, "status": "sent"}

    async def send_to_topic(self, topic: str, payload: dict | None) -> dict:
        failed = self._failed("send_to_topic")
        if failed:
            return failed

        message_id = f"topic-{uuid4().hex[:12]}"
        self.topic_broadcasts.append({"message_id": message_id, "topic": topic, "data": build_data(payload)})
        return {"message_id": message_id, "status": "sent"}

    async def subscribe_token_to_topic(self, token: str, topic: str) -> dict:
        failed = self._failed("subscribe_token_to_topic")
        if failed:
            return failed

        self.subscriptions.append({"token": token, "topic": topic})
        return {"message_id": None, "status": "sent"}

    def reset(self):
        """Clear recorded calls (useful between tests)."""
        self.sent_messages.clear()
        self.topic_broadcasts.clear()
        self.subscriptions.clear()
        self.failing_operations = set()
        self.failure_reason = "Push delivery failed"
