"""Turns received messages into notification requests."""

from ntfy_client.schemas.message import Message
from ntfy_client.schemas.notification import NotificationRequest
from ntfy_client.schemas.subscription import SubscriptionRef

MAX_BODY_LENGTH = 4000


def build_notification(subscription: SubscriptionRef, message: Message) -> NotificationRequest:
    """Build a notification request for a message received on a subscription.

    The request id is the message id, so a message that is polled twice
    replaces its earlier notification. The metadata carries the full message
    plus the subscription's base URL and topic, which is everything the tap
    router needs later.
    """
    metadata = message.to_metadata()
    metadata["base_url"] = subscription.base_url
    metadata["topic"] = subscription.topic

    body = message.message
    if len(body) > MAX_BODY_LENGTH:
        body = body[: MAX_BODY_LENGTH - 1] + "…"

    return NotificationRequest(
        id=message.id,
        title=message.title or "",
        body=body,
        metadata=metadata,
    )
