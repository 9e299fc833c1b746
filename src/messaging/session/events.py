"""Domain events for the Session aggregate."""

from protean.fields import DateTime, Identifier, Text

from messaging.domain import messaging


@messaging.event(part_of="Session")
class SessionRegistered:
    """A device token was registered under a new session."""

    __version__ = 1

    session_id: Identifier(required=True)
    token: Text(required=True)
    registered_at: DateTime(required=True)


@messaging.event(part_of="Session")
class SessionUnregistered:
    """A session was removed by its owner."""

    __version__ = 1

    session_id: Identifier(required=True)
    token: Text(required=True)
    unregistered_at: DateTime(required=True)
