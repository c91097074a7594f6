"""Notification history model for messages already received."""

from sqlalchemy import BigInteger, Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from ntfy_client.database import Base
from ntfy_client.models.mixins import TimestampMixin


class Notification(Base, TimestampMixin):
    """A message received on a subscription."""

    __tablename__ = "notifications"
    __table_args__ = (
        UniqueConstraint("subscription_id", "message_id", name="uq_subscription_message"),
    )

    id = Column(Integer, primary_key=True, index=True)
    subscription_id = Column(
        Integer, ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    message_id = Column(String(64), nullable=False)
    time = Column(BigInteger, nullable=False, default=0)  # unix seconds, set by the server
    title = Column(String(250), nullable=True)
    message = Column(Text, nullable=False, default="")
    priority = Column(Integer, nullable=True)
    tags = Column(String(500), nullable=True)  # comma separated
    click = Column(String(2000), nullable=True)
    actions = Column(Text, nullable=True)  # raw JSON array

    # Relationships
    subscription = relationship("Subscription", back_populates="notifications")
