"""Pydantic schemas for messages, actions and API requests and responses."""

from ntfy_client.schemas.action import ActionKind, HttpAction, ViewAction, find_action, parse_actions
from ntfy_client.schemas.message import Message
from ntfy_client.schemas.notification import (
    InteractionCreate,
    InteractionResult,
    NotificationRequest,
    PollTriggerResponse,
    SelectedTopicResponse,
)
from ntfy_client.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionRef,
    SubscriptionResponse,
)

__all__ = [
    "ActionKind",
    "ViewAction",
    "HttpAction",
    "parse_actions",
    "find_action",
    "Message",
    "NotificationRequest",
    "PollTriggerResponse",
    "InteractionCreate",
    "InteractionResult",
    "SelectedTopicResponse",
    "SubscriptionCreate",
    "SubscriptionResponse",
    "SubscriptionRef",
]
