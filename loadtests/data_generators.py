"""Faker-based data generators for Locust load test scenarios.

Payload keys match the wire names the ``/messaging`` endpoint accepts
(``event``, ``token``, ``userId``, ``topic``, ``fields``).
"""

import random
import uuid

from faker import Faker

fake = Faker()

PROFILE_TOPIC = "profile-update"


def device_token() -> str:
    """Generate a unique FCM-shaped device token like 'lt-a1b2c3d4:APA91b...'."""
    return f"lt-{uuid.uuid4().hex[:8]}:APA91b{uuid.uuid4().hex}{uuid.uuid4().hex[:16]}"


def profile_fields() -> dict:
    """Extra registration fields stored on the session."""
    return {
        "name": fake.name(),
        "platform": random.choice(["android", "ios", "web"]),
        "locale": fake.locale(),
    }


def message_fields() -> dict:
    return {"message": fake.sentence(nb_words=6), "sentAt": fake.iso8601()}


def register_payload(token: str) -> dict:
    return {"event": "register", "token": token, "fields": profile_fields()}


def message_payload(user_id: str) -> dict:
    return {"event": "message", "userId": user_id, "fields": message_fields()}


def topic_payload(topic: str = PROFILE_TOPIC) -> dict:
    return {"event": "topic", "topic": topic, "fields": {"code": "user-online", "message": "Load test"}}


def unregister_payload(user_id: str, token: str) -> dict:
    return {"event": "unregister", "userId": user_id, "token": token}
