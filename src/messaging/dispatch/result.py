"""Dispatch results: a success payload or a failure message with a status code."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DispatchSuccess:
    payload: dict = field(default_factory=dict)
    status_code: int = 200
    ok = True


@dataclass(frozen=True)
class DispatchFailure:
    message: str
    status_code: int = 500
    ok = False


DispatchResult = DispatchSuccess | DispatchFailure
