"""Messaging bounded context: push session registry and relay.

Registers device push tokens against user sessions, relays messages to a
single user or broadcasts them to a topic, and keeps every registered token
subscribed to the shared profile-update topic.
"""

from protean.domain import Domain

from messaging.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
messaging = Domain(name="messaging")
