"""Fake session store: keeps records in memory for testing."""

import copy

from messaging.store.port import SessionStorePort


class FakeSessionStore(SessionStorePort):
    """Session store backed by a dict, with per-operation failure injection."""

    def __init__(self):
        self.records: dict[str, dict] = {}
        self.calls: list[tuple[str, str]] = []
        self.failing_operations: set[str] = set()
        self.failure_reason = "Session store unavailable"

    def configure(self, fail_on=(), failure_reason: str = "Session store unavailable"):
        """Make the named operations ("get_by_token", "get_by_id", "put", "delete") raise."""
        self.failing_operations = set(fail_on)
        self.failure_reason = failure_reason

    def _record_call(self, operation: str, key: str) -> None:
        self.calls.append((operation, key))
        if operation in self.failing_operations:
            raise RuntimeError(self.failure_reason)

    async def get_by_token(self, token: str) -> dict | None:
        self._record_call("get_by_token", token)
        for record in self.records.values():
            if record.get("token") == token:
                return copy.deepcopy(record)
        return None

    async def get_by_id(self, session_id: str) -> dict | None:
        self._record_call("get_by_id", session_id)
        record = self.records.get(session_id)
        return copy.deepcopy(record) if record is not None else None

    async def put(self, record: dict) -> None:
        self._record_call("put", record["id"])
        self.records[record["id"]] = copy.deepcopy(record)

    async def delete(self, session_id: str) -> None:
        self._record_call("delete", session_id)
        self.records.pop(session_id, None)

    def reset(self):
        """Clear records and failure settings (useful between tests)."""
        self.records.clear()
        self.calls.clear()
        self.failing_operations = set()
        self.failure_reason = "Session store unavailable"
