"""Notification Routes — subscribe, block and recipient resolution.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Handlers only translate between schemas and the engines
"""

from fastapi import APIRouter, Depends

from friendgraph.api.dependencies import (
    get_query_engine, get_relationship_engine, run_with_timeout,
)
from friendgraph.core.domain_types import Operation
from friendgraph.schemas.friend import SuccessResponse
from friendgraph.schemas.notification import (
    BlockRequest, RecipientsRequest, RecipientsResponse, SubscribeRequest,
)
from friendgraph.services.query_engine import QueryEngine
from friendgraph.services.relationship_engine import RelationshipEngine

router = APIRouter(prefix="/api/notification", tags=["notification"])


@router.post("/subscribe", response_model=SuccessResponse)
async def subscribe(
    body: SubscribeRequest,
    engine: RelationshipEngine = Depends(get_relationship_engine),
):
    """Subscribe requestor to updates from target."""
    await run_with_timeout(
        Operation.SUBSCRIBE.value, engine.subscribe(body.requestor, body.target),
    )
    return SuccessResponse()


@router.post("/block", response_model=SuccessResponse)
async def block(
    body: BlockRequest,
    engine: RelationshipEngine = Depends(get_relationship_engine),
):
    """Block updates from target and prevent new friend connections."""
    await run_with_timeout(
        Operation.BLOCK.value, engine.block(body.requestor, body.target),
    )
    return SuccessResponse()


@router.post("/list", response_model=RecipientsResponse)
async def get_recipients(
    body: RecipientsRequest,
    engine: QueryEngine = Depends(get_query_engine),
):
    """Emails eligible to receive an update from sender."""
    recipients = await run_with_timeout(
        Operation.GET_RECIPIENTS.value,
        engine.get_notification_recipients(body.sender, body.text),
    )
    return RecipientsResponse(recipients=recipients)
