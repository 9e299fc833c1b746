"""Dispatch error taxonomy.

Each error carries the HTTP-equivalent status code the relay responds with.
"""


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(RelayError):
    """Missing required field or unknown event kind. Raised before any I/O."""

    status_code = 400


class NotFound(RelayError):
    """The target session does not exist."""

    status_code = 404


class Conflict(RelayError):
    """Unregister token does not match the stored session."""

    status_code = 409


class UpstreamFailure(RelayError):
    """A session store or push gateway call failed."""

    status_code = 500
