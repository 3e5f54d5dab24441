"""Notification Schemas — subscribe, block and recipient-list payloads.

Invariants:
    - requestor / target / sender must be well-formed emails
    - text is optional free text of any length (null and absent mean empty);
      mentions are extracted by the engine
"""

from pydantic import BaseModel, field_validator

from friendgraph.schemas.friend import check_email_format


class RelationshipRequest(BaseModel):
    """Directed request: requestor acts on target."""
    requestor: str
    target: str

    @field_validator("requestor", "target")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email_format(v)


class SubscribeRequest(RelationshipRequest):
    pass


class BlockRequest(RelationshipRequest):
    pass


class RecipientsRequest(BaseModel):
    sender: str
    text: str | None = None

    @field_validator("sender")
    @classmethod
    def validate_sender(cls, v: str) -> str:
        return check_email_format(v)


class RecipientsResponse(BaseModel):
    success: bool = True
    recipients: list[str] = []
