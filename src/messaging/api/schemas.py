"""Pydantic request/response models for the Messaging API.

API schemas are separate from the dispatcher's ``RelayEvent`` (anti-corruption pattern).
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from messaging.dispatch.event import RelayEvent


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class RelayRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event: str = Field(..., examples=["register"], description="register | unregister | message | topic")
    token: str | None = None
    user_id: str | None = Field(default=None, validation_alias=AliasChoices("userId", "user_id"))
    topic: str | None = Field(default=None, validation_alias=AliasChoices("topic", "topicName"))
    fields: dict[str, Any] | None = None

    def to_event(self) -> RelayEvent:
        return RelayEvent(
            kind=self.event,
            token=self.token,
            user_id=self.user_id,
            topic_name=self.topic,
            fields=self.fields,
        )


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
