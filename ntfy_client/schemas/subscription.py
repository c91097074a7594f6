"""Subscription schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ntfy_client.models.subscription import topic_url


class SubscriptionCreate(BaseModel):
    """Subscribe to a topic."""

    base_url: str = Field(..., max_length=500)
    topic: str = Field(..., min_length=1, max_length=64, pattern=r"^[-_A-Za-z0-9]+$")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Require an http(s) base URL without trailing slash."""
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return value.rstrip("/")


class SubscriptionResponse(BaseModel):
    """Subscription response."""

    id: int
    base_url: str
    topic: str
    url: str
    display_name: str
    notification_count: int = 0
    last_notification_at: datetime | None = None


class SubscriptionRef(BaseModel):
    """Detached view of a stored subscription used by the poll pipeline."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    base_url: str
    topic: str

    @property
    def url(self) -> str:
        """Full topic URL."""
        return topic_url(self.base_url, self.topic)
