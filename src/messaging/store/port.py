"""Session store port: abstract interface for session persistence."""

from abc import ABC, abstractmethod


class SessionStorePort(ABC):
    """Key-value session table keyed by id, with a secondary lookup by push token.

    Records are flat mappings holding ``id``, ``token`` and any extra
    registration fields. Adapters raise on storage failures.
    """

    @abstractmethod
    async def get_by_token(self, token: str) -> dict | None:
        """Return the first session registered with ``token``, if any."""
        ...

    @abstractmethod
    async def get_by_id(self, session_id: str) -> dict | None:
        """Return the session stored under ``session_id``, if any."""
        ...

    @abstractmethod
    async def put(self, record: dict) -> None:
        """Persist a new session record."""
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Remove the session stored under ``session_id``."""
        ...
