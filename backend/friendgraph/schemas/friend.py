"""Friend Schemas — request/response models for the friend endpoints.

Invariants:
    - ConnectRequest / CommonFriendsRequest.friends: exactly 2 well-formed emails
    - FriendListResponse.count always equals len(friends)

Design Decisions:
    - Distinctness left to the engine: it raises InvalidRequestError with a stable
      code, whether called over HTTP or directly
"""

from pydantic import BaseModel, Field, field_validator

from friendgraph.core.email_address import is_valid_email


def check_email_format(v: str) -> str:
    if not is_valid_email(v):
        raise ValueError(f"{v} is an invalid email format")
    return v.strip()


class ConnectRequest(BaseModel):
    """Two users to connect as friends."""
    friends: list[str] = Field(min_length=2, max_length=2)

    @field_validator("friends")
    @classmethod
    def validate_emails(cls, v: list[str]) -> list[str]:
        return [check_email_format(email) for email in v]


class CommonFriendsRequest(ConnectRequest):
    """Two users whose common friends are requested."""


class FriendListRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email_format(v)


class SuccessResponse(BaseModel):
    success: bool = True


class FriendListResponse(BaseModel):
    success: bool = True
    friends: list[str] = []
    count: int = 0
