"""Session store backed by the domain's Protean repository.

Uses whichever database provider the active domain configures (in-memory
by default, PostgreSQL under the production overlay). Must be called inside
an active domain context.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from messaging.session.session import Session
from messaging.store.port import SessionStorePort

logger = structlog.get_logger(__name__)


class RepositorySessionStore(SessionStorePort):
    def _repo(self):
        return current_domain.repository_for(Session)

    async def get_by_token(self, token: str) -> dict | None:
        sessions = self._repo()._dao.query.filter(token=token).limit(1).all().items
        return sessions[0].to_record() if sessions else None

    async def get_by_id(self, session_id: str) -> dict | None:
        try:
            session = self._repo().get(session_id)
        except ObjectNotFoundError:
            return None
        return session.to_record()

    async def put(self, record: dict) -> None:
        session = Session.register(
            session_id=record["id"],
            token=record["token"],
            fields=record,
        )
        self._repo().add(session)
        logger.debug("Session stored", session_id=record["id"])

    async def delete(self, session_id: str) -> None:
        repo = self._repo()
        try:
            session = repo.get(session_id)
        except ObjectNotFoundError:
            return

        # Committing the raised event goes through add before the row is removed
        session.unregister()
        repo.add(session)
        repo._dao.delete(session)
        logger.debug("Session deleted", session_id=session_id)
