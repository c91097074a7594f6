"""Subscription API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ntfy_client.models.subscription import topic_short_url
from ntfy_client.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionRef,
    SubscriptionResponse,
)
from ntfy_client.services.pipeline import get_subscription_store
from ntfy_client.services.subscription_store import SubscriptionStore

router = APIRouter(prefix="/api/v1/subscriptions", tags=["subscriptions"])


@router.get("", response_model=list[SubscriptionResponse])
async def list_subscriptions(
    store: Annotated[SubscriptionStore, Depends(get_subscription_store)],
) -> list[SubscriptionResponse]:
    """List subscriptions with their notification counts."""
    return [_to_response(store, subscription) for subscription in store.list_subscriptions()]


@router.post("", response_model=SubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(
    data: SubscriptionCreate,
    store: Annotated[SubscriptionStore, Depends(get_subscription_store)],
) -> SubscriptionResponse:
    """Subscribe to a topic. Subscribing twice returns the existing subscription."""
    return _to_response(store, store.add_subscription(data.base_url, data.topic))


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    subscription_id: int,
    store: Annotated[SubscriptionStore, Depends(get_subscription_store)],
) -> None:
    """Unsubscribe from a topic and delete its notifications."""
    if not store.remove_subscription(subscription_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")


def _to_response(store: SubscriptionStore, subscription: SubscriptionRef) -> SubscriptionResponse:
    count, last_notification_at = store.notification_stats(subscription.id)
    return SubscriptionResponse(
        id=subscription.id,
        base_url=subscription.base_url,
        topic=subscription.topic,
        url=subscription.url,
        display_name=topic_short_url(subscription.base_url, subscription.topic),
        notification_count=count,
        last_notification_at=last_notification_at,
    )
