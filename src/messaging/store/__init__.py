"""Session store registry: pluggable session persistence.

Provides singleton access to the configured store. Uses the Protean
repository by default; ``SESSION_STORE=dynamodb`` selects the DynamoDB
table used by the deployed relay.
"""

import structlog

from messaging.config import get_settings

logger = structlog.get_logger(__name__)

_store_instance = None


def _default_provider():
    from messaging.domain import messaging

    return messaging.config["databases"]["default"]["provider"]


def get_session_store():
    """Return the configured session store adapter (singleton)."""
    global _store_instance
    if _store_instance is None:
        settings = get_settings()
        adapter = settings.session_store.lower()
        if adapter == "repository":
            from messaging.store.repository_store import RepositorySessionStore

            _store_instance = RepositorySessionStore()
            if not settings.is_local() and _default_provider() == "memory":
                logger.warning(
                    "Session store uses the in-memory provider; sessions are lost on restart",
                    environment=settings.environment,
                )
        elif adapter == "dynamodb":
            from messaging.store.dynamodb_store import DynamoDBSessionStore

            _store_instance = DynamoDBSessionStore(
                settings.table_name,
                token_index_name=settings.token_index_name,
                region_name=settings.aws_region,
                endpoint_url=settings.aws_endpoint_url,
            )
        elif adapter == "fake":
            from messaging.store.fake_store import FakeSessionStore

            _store_instance = FakeSessionStore()
            if not settings.is_local():
                logger.warning(
                    "Fake session store selected; sessions are lost on restart",
                    environment=settings.environment,
                )
        else:
            raise ValueError(f"Unknown session store: {adapter}")
    return _store_instance


def reset_session_store():
    """Reset the store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
