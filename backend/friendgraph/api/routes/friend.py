"""Friend Routes — connect, friend list and common friends.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Handlers only translate between schemas and RelationshipEngine / QueryEngine
    - Engine errors propagate to the global FriendGraphError handler

Design Decisions:
    - POST for the read endpoints: request carries email addresses in the body,
      keeping them out of access logs and URLs
"""

from fastapi import APIRouter, Depends

from friendgraph.api.dependencies import (
    get_query_engine, get_relationship_engine, run_with_timeout,
)
from friendgraph.core.domain_types import Operation
from friendgraph.schemas.friend import (
    CommonFriendsRequest, ConnectRequest, FriendListRequest,
    FriendListResponse, SuccessResponse,
)
from friendgraph.services.query_engine import QueryEngine
from friendgraph.services.relationship_engine import RelationshipEngine

router = APIRouter(prefix="/api/friend", tags=["friend"])


@router.post("/connect", response_model=SuccessResponse)
async def connect(
    body: ConnectRequest,
    engine: RelationshipEngine = Depends(get_relationship_engine),
):
    """Create a friend connection between two email addresses."""
    await run_with_timeout(
        Operation.CONNECT.value, engine.connect(body.friends[0], body.friends[1]),
    )
    return SuccessResponse()


@router.post("/list", response_model=FriendListResponse)
async def get_friends(
    body: FriendListRequest,
    engine: QueryEngine = Depends(get_query_engine),
):
    """Friend list for one email address."""
    result = await run_with_timeout(
        Operation.GET_FRIENDS.value, engine.get_friends(body.email),
    )
    return FriendListResponse(friends=result.friends, count=result.count)


@router.post("/common", response_model=FriendListResponse)
async def get_common_friends(
    body: CommonFriendsRequest,
    engine: QueryEngine = Depends(get_query_engine),
):
    """Friends shared by two email addresses."""
    result = await run_with_timeout(
        Operation.GET_COMMON_FRIENDS.value,
        engine.get_common_friends(body.friends[0], body.friends[1]),
    )
    return FriendListResponse(friends=result.friends, count=result.count)
