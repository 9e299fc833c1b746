"""Event dispatcher: maps a relay event to store and gateway calls.

Each dispatch is one linear sequence of dependent awaits. A failure at any
step short-circuits the rest and yields exactly one ``DispatchFailure``.
Nothing is retried and completed steps are not rolled back: a registration
can leave a stored session whose topic subscription failed.

    register    get_by_token → [put] → subscribe → broadcast
    unregister  get_by_id → delete
    message     get_by_id → send_to_token
    topic       send_to_topic
"""

from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from messaging.dispatch.errors import (
    Conflict,
    InvalidInput,
    NotFound,
    RelayError,
    UpstreamFailure,
)
from messaging.dispatch.event import EventKind, RelayEvent
from messaging.dispatch.result import DispatchFailure, DispatchResult, DispatchSuccess
from messaging.gateway.port import PushGatewayPort
from messaging.store.port import SessionStorePort

logger = structlog.get_logger(__name__)

NEW_USER = "new-user"
USER_ONLINE = "user-online"

_REQUIRED_FIELDS = {
    EventKind.REGISTER: ("token", "No token specified"),
    EventKind.UNREGISTER: ("user_id", "No userId specified"),
    EventKind.MESSAGE: ("user_id", "No userId specified"),
    EventKind.TOPIC: ("topic_name", "No topic specified"),
}


def validate_event(event: RelayEvent) -> EventKind:
    """Check the event kind and its required field. Raises ``InvalidInput``."""
    try:
        kind = EventKind(event.kind)
    except ValueError:
        raise InvalidInput(f"Invalid event type: {event.kind}") from None

    attribute, message = _REQUIRED_FIELDS[kind]
    if not getattr(event, attribute):
        raise InvalidInput(message)
    return kind


class EventDispatcher:
    """Orchestrates session store lookups/writes and push gateway calls."""

    def __init__(self, store: SessionStorePort, gateway: PushGatewayPort, profile_topic: str):
        self.store = store
        self.gateway = gateway
        self.profile_topic = profile_topic

    async def dispatch(self, event: RelayEvent) -> DispatchResult:
        try:
            kind = validate_event(event)
            handler = {
                EventKind.REGISTER: self._register,
                EventKind.UNREGISTER: self._unregister,
                EventKind.MESSAGE: self._message,
                EventKind.TOPIC: self._topic,
            }[kind]
            payload = await handler(event)
        except RelayError as e:
            logger.warning(
                "Dispatch failed",
                event_kind=event.kind,
                error_type=type(e).__name__,
                error=e.message,
                status_code=e.status_code,
            )
            return DispatchFailure(message=e.message, status_code=e.status_code)

        return DispatchSuccess(payload=payload)

    # -------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------
    async def _store_call(self, prefix: str, operation, *args):
        try:
            return await operation(*args)
        except ValidationError as e:
            raise InvalidInput(f"{prefix}: {e.messages}") from e
        except Exception as e:
            raise UpstreamFailure(f"{prefix}: {e}") from e

    async def _gateway_call(self, prefix: str, operation, *args) -> dict:
        try:
            result = await operation(*args)
        except Exception as e:
            raise UpstreamFailure(f"{prefix}: {e}") from e
        if result.get("status") != "sent":
            raise UpstreamFailure(f"{prefix}: {result.get('error', 'Unknown gateway error')}")
        return result

    async def _announce(self, token: str, code: str, user_id: str) -> None:
        """Subscribe ``token`` to the profile topic, then broadcast ``code`` for ``user_id``."""
        subscribed = await self._gateway_call(
            "Failed to subscribe to topic",
            self.gateway.subscribe_token_to_topic,
            token,
            self.profile_topic,
        )
        logger.info("Subscribed to topic", topic=self.profile_topic, user_id=user_id, result=subscribed)

        sent = await self._gateway_call(
            "Failed to send to topic",
            self.gateway.send_to_topic,
            self.profile_topic,
            {"code": code, "userId": user_id},
        )
        logger.info("Sent to topic", topic=self.profile_topic, code=code, result=sent)

    # -------------------------------------------------------------------
    # Event kinds
    # -------------------------------------------------------------------
    async def _register(self, event: RelayEvent) -> dict:
        token = event.token
        logger.info("Looking for user token", token=token)
        existing = await self._store_call("Failed to query", self.store.get_by_token, token)

        if existing is None:
            user_id = str(uuid4())
            logger.info("Creating user by token", user_id=user_id, token=token)
            record = {**(event.fields or {}), "id": user_id, "token": token}
            await self._store_call("Failed to register", self.store.put, record)

            await self._announce(token, NEW_USER, user_id)
            return {**event.to_payload(), "userId": user_id, "ok": True, "existing": False}

        user_id = existing["id"]
        logger.info("Found existing user by token", user_id=user_id, token=token)
        await self._announce(token, USER_ONLINE, user_id)
        return {
            **event.to_payload(),
            "userId": user_id,
            "fields": existing,
            "ok": True,
            "existing": True,
        }

    async def _unregister(self, event: RelayEvent) -> dict:
        session = await self._store_call("Failed to unregister", self.store.get_by_id, event.user_id)

        if session is None:
            logger.info("Session already absent", user_id=event.user_id)
            return {**event.to_payload(), "ok": True, "existing": False}

        if session.get("token") != event.token:
            raise Conflict("To unregister specify both userId and token")

        await self._store_call("Failed to unregister", self.store.delete, event.user_id)
        logger.info("Session unregistered", user_id=event.user_id)
        return {**event.to_payload(), "ok": True, "existing": True}

    async def _message(self, event: RelayEvent) -> dict:
        logger.info("Looking for session", user_id=event.user_id)
        session = await self._store_call("Failed to find session", self.store.get_by_id, event.user_id)

        if session is None:
            raise NotFound(f"Cant find session: {event.user_id}")

        result = await self._gateway_call(
            "Failed to send message",
            self.gateway.send_to_token,
            session["token"],
            event.fields,
        )
        logger.info("Sent message", user_id=event.user_id, message_id=result.get("message_id"))
        return {**event.to_payload(), "ok": True}

    async def _topic(self, event: RelayEvent) -> dict:
        logger.info("Sending message to topic", topic=event.topic_name)
        result = await self._gateway_call(
            "Failed to send to topic",
            self.gateway.send_to_topic,
            event.topic_name,
            event.fields,
        )
        logger.info("Sent to topic", topic=event.topic_name, message_id=result.get("message_id"))
        return {**event.to_payload(), "ok": True}


def build_dispatcher(store=None, gateway=None, profile_topic=None) -> EventDispatcher:
    """Build a dispatcher, filling unspecified collaborators from the registries and settings."""
    from messaging.config import get_settings
    from messaging.gateway import get_push_gateway
    from messaging.store import get_session_store

    return EventDispatcher(
        store=store if store is not None else get_session_store(),
        gateway=gateway if gateway is not None else get_push_gateway(),
        profile_topic=profile_topic or get_settings().profile_topic,
    )
