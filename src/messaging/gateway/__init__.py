"""Push gateway registry: pluggable push service adapter.

Uses the fake gateway by default; ``PUSH_GATEWAY=fcm`` selects Firebase
Cloud Messaging with the configured server key.
"""

import structlog

from messaging.config import get_settings

logger = structlog.get_logger(__name__)

_gateway_instance = None


def get_push_gateway():
    """Return the configured push gateway adapter (singleton)."""
    global _gateway_instance
    if _gateway_instance is None:
        settings = get_settings()
        adapter = settings.push_gateway.lower()
        if adapter == "fake":
            from messaging.gateway.fake_push import FakePushGateway

            _gateway_instance = FakePushGateway()
            if not settings.is_local():
                logger.warning(
                    "Fake push gateway selected; pushes are recorded, not sent",
                    environment=settings.environment,
                )
        elif adapter == "fcm":
            from messaging.gateway.fcm_push import FcmPushGateway

            _gateway_instance = FcmPushGateway(
                server_key=settings.fcm_server_key.get_secret_value(),
                send_url=settings.fcm_send_url,
                iid_url=settings.fcm_iid_url,
                timeout=settings.http_timeout,
            )
        else:
            raise ValueError(f"Unknown push gateway: {adapter}")
    return _gateway_instance


def reset_push_gateway():
    """Reset the gateway singleton (useful for testing)."""
    global _gateway_instance
    _gateway_instance = None
