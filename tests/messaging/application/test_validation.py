"""Application tests for input validation: rejected before any I/O."""

import pytest
from messaging.dispatch.dispatcher import EventDispatcher, validate_event
from messaging.dispatch.errors import InvalidInput
from messaging.dispatch.event import EventKind, RelayEvent
from messaging.dispatch.result import DispatchFailure
from messaging.gateway.fake_push import FakePushGateway
from messaging.store.fake_store import FakeSessionStore


class TestValidateEvent:
    def test_returns_kind(self):
        assert validate_event(RelayEvent(kind="register", token="T1")) == EventKind.REGISTER

    def test_unknown_kind(self):
        with pytest.raises(InvalidInput, match="Invalid event type: messages"):
            validate_event(RelayEvent(kind="messages", user_id="U1"))

    @pytest.mark.parametrize(
        "event, message",
        [
            (RelayEvent(kind="register"), "No token specified"),
            (RelayEvent(kind="register", token=""), "No token specified"),
            (RelayEvent(kind="unregister", token="T1"), "No userId specified"),
            (RelayEvent(kind="message", fields={"a": 1}), "No userId specified"),
            (RelayEvent(kind="topic", fields={"a": 1}), "No topic specified"),
        ],
    )
    def test_missing_required_field(self, event, message):
        with pytest.raises(InvalidInput, match=message):
            validate_event(event)


class TestDispatchRejectsInvalidInput:
    def setup_method(self):
        self.store = FakeSessionStore()
        self.gateway = FakePushGateway()
        self.dispatcher = EventDispatcher(store=self.store, gateway=self.gateway, profile_topic="profile-update")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "event",
        [
            RelayEvent(kind="messages", user_id="U1"),
            RelayEvent(kind="register"),
            RelayEvent(kind="unregister"),
            RelayEvent(kind="message"),
            RelayEvent(kind="topic"),
        ],
    )
    async def test_fails_with_400_and_no_io(self, event):
        result = await self.dispatcher.dispatch(event)

        assert isinstance(result, DispatchFailure)
        assert result.status_code == 400
        assert self.store.calls == []
        assert self.gateway.call_count() == 0
