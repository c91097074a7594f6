"""Notification API endpoints for taps and topic navigation."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ntfy_client.schemas.notification import (
    InteractionCreate,
    InteractionResult,
    SelectedTopicResponse,
)
from ntfy_client.services.navigation import NavigationChannel
from ntfy_client.services.pipeline import get_navigation_channel, get_tap_router
from ntfy_client.services.tap_router import TapRouter

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.post("/interaction", response_model=InteractionResult)
async def handle_interaction(
    interaction: InteractionCreate,
    tap_router: Annotated[TapRouter, Depends(get_tap_router)],
) -> InteractionResult:
    """Handle a tap on a notification or one of its action buttons."""
    outcome = await tap_router.on_notification_interaction(
        interaction.metadata, interaction.action_id
    )
    return InteractionResult(outcome=outcome)


@router.get("/selected", response_model=SelectedTopicResponse | None)
async def get_selected_topic(
    navigation: Annotated[NavigationChannel, Depends(get_navigation_channel)],
) -> SelectedTopicResponse | None:
    """Get the topic selected by the last notification tap."""
    selected = navigation.current
    if selected is None:
        return None
    return SelectedTopicResponse(base_url=selected.base_url, topic=selected.topic, url=selected.url)
