"""Subscription model for topics the user listens on."""

from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ntfy_client.database import Base
from ntfy_client.models.mixins import TimestampMixin


class Subscription(Base, TimestampMixin):
    """A (base URL, topic) pair the user has subscribed to."""

    __tablename__ = "subscriptions"
    __table_args__ = (UniqueConstraint("base_url", "topic", name="uq_base_url_topic"),)

    id = Column(Integer, primary_key=True, index=True)
    base_url = Column(String(500), nullable=False)
    topic = Column(String(64), nullable=False, index=True)

    # Relationships
    notifications = relationship(
        "Notification",
        back_populates="subscription",
        cascade="all, delete-orphan",
        order_by="Notification.time",
    )

    def url(self) -> str:
        """Full topic URL, e.g. https://ntfy.sh/mytopic."""
        return topic_url(self.base_url, self.topic)


def topic_url(base_url: str, topic: str) -> str:
    """Join a base URL and topic into a topic URL."""
    return f"{base_url.rstrip('/')}/{topic}"


def topic_short_url(base_url: str, topic: str) -> str:
    """Topic URL without the scheme."""
    return topic_url(base_url, topic).replace("https://", "").replace("http://", "")
