"""Endpoint for background pushes delivered by the push network."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from ntfy_client.schemas.notification import PollTriggerResponse
from ntfy_client.services.pipeline import get_poll_dispatcher
from ntfy_client.services.poll_dispatcher import PollDispatcher

router = APIRouter(prefix="/api/v1/push", tags=["push"])


@router.post("/poll", response_model=PollTriggerResponse)
async def handle_background_push(
    payload: Annotated[dict[str, Any], Body()],
    dispatcher: Annotated[PollDispatcher, Depends(get_poll_dispatcher)],
) -> PollTriggerResponse:
    """Handle a background push.

    Pushes for the poll topic poll all subscriptions and show new messages
    as notifications. Other pushes are acknowledged without doing anything.
    """
    result = await dispatcher.on_poll_trigger(payload)
    return PollTriggerResponse(result=result)
