"""Session aggregate: a device push token registered under a user id.

A session is created the first time an unseen token registers and is never
updated afterwards: re-registering the same token returns the stored record
unchanged. Extra fields supplied at registration are kept verbatim in
``profile`` and flattened back into the record shape by ``to_record``.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Dict, Text

from messaging.domain import messaging
from messaging.session.events import SessionRegistered, SessionUnregistered

# Keys owned by the session itself; profile fields never override them
RESERVED_KEYS = ("id", "token")


@messaging.aggregate
class Session:
    token: Text(required=True)
    profile: Dict()
    registered_at: DateTime()

    @classmethod
    def register(cls, session_id, token, fields=None):
        """Create a new session for ``token`` and raise ``SessionRegistered``."""
        now = datetime.now(UTC)
        profile = {k: v for k, v in (fields or {}).items() if k not in RESERVED_KEYS}

        session = cls(
            id=session_id,
            token=token,
            profile=profile,
            registered_at=now,
        )
        session.raise_(
            SessionRegistered(
                session_id=str(session.id),
                token=token,
                registered_at=now,
            )
        )
        return session

    def unregister(self):
        """Raise ``SessionUnregistered``. The store removes the record afterwards."""
        self.raise_(
            SessionUnregistered(
                session_id=str(self.id),
                token=self.token,
                unregistered_at=datetime.now(UTC),
            )
        )

    def to_record(self) -> dict:
        """Flatten to the store record shape: profile fields plus ``id`` and ``token``."""
        return {**(self.profile or {}), "id": str(self.id), "token": self.token}
