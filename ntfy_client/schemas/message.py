"""Message schema and its flat key-value envelope.

A message arrives as a flat map (the push envelope or one line of the poll
API), is embedded into a displayed notification as flat string metadata, and
is rebuilt from that metadata when the user taps the notification. The raw
actions string is carried through untouched and parsed only when needed.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ntfy_client.errors import CannotReconstructMessageError, MissingRequiredFieldError, ParseError
from ntfy_client.schemas.action import HttpAction, ViewAction, parse_actions

logger = logging.getLogger(__name__)

MESSAGE_EVENT = "message"


class Message(BaseModel):
    """A message published to a topic."""

    model_config = ConfigDict(frozen=True)

    id: str
    topic: str
    time: int = 0
    event: str = MESSAGE_EVENT
    title: str | None = None
    message: str = ""
    priority: int | None = None
    tags: list[str] = Field(default_factory=list)
    click: str | None = None
    actions: str | None = None  # raw JSON array
    base_url: str | None = None

    @classmethod
    def parse(cls, payload: Mapping[str, Any]) -> "Message":
        """Parse a raw payload field by field.

        Only ``id`` and ``topic`` are required. Every other field falls back
        to its default when missing or unusable.
        """
        if not isinstance(payload, Mapping):
            raise ParseError(f"Message payload must be a mapping, got {type(payload).__name__}")

        message_id = _as_text(payload.get("id"))
        if not message_id:
            raise MissingRequiredFieldError("id")
        topic = _as_text(payload.get("topic"))
        if not topic:
            raise MissingRequiredFieldError("topic")

        return cls(
            id=message_id,
            topic=topic,
            time=_as_int(payload.get("time")) or 0,
            event=_as_text(payload.get("event")) or MESSAGE_EVENT,
            title=_as_text(payload.get("title")),
            message=_as_text(payload.get("message")) or "",
            priority=_as_int(payload.get("priority")),
            tags=_as_tags(payload.get("tags")),
            click=_as_text(payload.get("click")),
            actions=_raw_actions(message_id, payload.get("actions")),
            base_url=_as_text(payload.get("base_url")),
        )

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> "Message":
        """Rebuild a message from notification metadata."""
        try:
            return cls.parse(metadata)
        except ParseError as e:
            raise CannotReconstructMessageError(f"Cannot reconstruct message: {e}") from e

    def to_metadata(self) -> dict[str, str]:
        """Serialize to a flat string map suitable for notification metadata."""
        metadata = {
            "id": self.id,
            "topic": self.topic,
            "time": str(self.time),
            "event": self.event,
            "message": self.message,
        }
        if self.title is not None:
            metadata["title"] = self.title
        if self.priority is not None:
            metadata["priority"] = str(self.priority)
        if self.tags:
            metadata["tags"] = ",".join(self.tags)
        if self.click is not None:
            metadata["click"] = self.click
        if self.actions is not None:
            metadata["actions"] = self.actions
        if self.base_url is not None:
            metadata["base_url"] = self.base_url
        return metadata

    def parsed_actions(self) -> list[ViewAction | HttpAction]:
        """Parse the raw actions string, degrading to no actions."""
        if not self.actions:
            return []
        try:
            return parse_actions(self.actions)
        except ParseError as e:
            logger.warning(f"Ignoring actions of message {self.id}: {e}")
            return []


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_tags(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return []
    return [str(tag).strip() for tag in value if str(tag).strip()]


def _raw_actions(message_id: str, value: Any) -> str | None:
    """Normalize the actions field to a raw JSON array string.

    The poll API delivers actions as a nested list while the push envelope
    carries them pre-encoded. A value that cannot be parsed as an action
    array is dropped.
    """
    if value is None or value == "":
        return None
    raw = json.dumps(value) if isinstance(value, list) else str(value)
    try:
        parse_actions(raw)
    except ParseError as e:
        logger.warning(f"Dropping malformed actions of message {message_id}: {e}")
        return None
    return raw
