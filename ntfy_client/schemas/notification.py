"""Notification-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from ntfy_client.models.enums import PollResult, TapOutcome


class NotificationRequest(BaseModel):
    """A locally presentable notification, handed to the display layer.

    ``id`` is the message id, so presenting the same message twice replaces
    the earlier notification. ``metadata`` is enough to rebuild the message
    and its subscription when the notification is tapped.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    body: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)


class PollTriggerResponse(BaseModel):
    """Schema for poll trigger processing result."""

    result: PollResult


class InteractionCreate(BaseModel):
    """Schema for a tap on a notification or one of its buttons."""

    metadata: dict[str, str]
    action_id: str | None = None


class InteractionResult(BaseModel):
    """Schema for interaction processing result."""

    outcome: TapOutcome


class SelectedTopicResponse(BaseModel):
    """Schema for the topic currently selected for in-app navigation."""

    base_url: str
    topic: str
    url: str
