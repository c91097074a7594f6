"""Storage for subscriptions and the notification history."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from ntfy_client.database import SessionLocal
from ntfy_client.models import Notification, Subscription
from ntfy_client.schemas.message import Message
from ntfy_client.schemas.subscription import SubscriptionRef

logger = logging.getLogger(__name__)


class SubscriptionStore:
    """Reads and writes subscriptions and the messages received on them.

    Every call opens its own short-lived session, so a store can be shared
    between concurrent poll tasks.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    def list_subscriptions(self) -> list[SubscriptionRef]:
        """Get all subscriptions, oldest first."""
        with self._session_factory() as db:
            rows = db.query(Subscription).order_by(Subscription.id).all()
            return [SubscriptionRef.model_validate(row) for row in rows]

    def get_subscription(self, base_url: str, topic: str) -> SubscriptionRef | None:
        """Get a subscription by base URL and topic."""
        with self._session_factory() as db:
            row = (
                db.query(Subscription)
                .filter(Subscription.base_url == base_url, Subscription.topic == topic)
                .first()
            )
            return SubscriptionRef.model_validate(row) if row else None

    def add_subscription(self, base_url: str, topic: str) -> SubscriptionRef:
        """Subscribe to a topic, returning the existing subscription if present."""
        existing = self.get_subscription(base_url, topic)
        if existing:
            return existing

        with self._session_factory() as db:
            row = Subscription(base_url=base_url, topic=topic)
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info(f"Subscribed to {row.url()}")
            return SubscriptionRef.model_validate(row)

    def remove_subscription(self, subscription_id: int) -> bool:
        """Delete a subscription and its history. Returns False if not found."""
        with self._session_factory() as db:
            row = db.query(Subscription).filter(Subscription.id == subscription_id).first()
            if not row:
                return False
            url = row.url()
            db.delete(row)
            db.commit()
            logger.info(f"Unsubscribed from {url}")
            return True

    def last_message_id(self, subscription_id: int) -> str | None:
        """Get the id of the newest message received on a subscription."""
        with self._session_factory() as db:
            row = (
                db.query(Notification.message_id)
                .filter(Notification.subscription_id == subscription_id)
                .order_by(Notification.time.desc(), Notification.id.desc())
                .first()
            )
            return row[0] if row else None

    def save_messages(self, subscription_id: int, messages: list[Message]) -> list[Message]:
        """Store messages not seen before and return them in their original order."""
        if not messages:
            return []

        with self._session_factory() as db:
            known = {
                message_id
                for (message_id,) in db.query(Notification.message_id)
                .filter(
                    Notification.subscription_id == subscription_id,
                    Notification.message_id.in_([m.id for m in messages]),
                )
                .all()
            }

            new_messages = []
            for message in messages:
                if message.id in known:
                    continue
                known.add(message.id)
                db.add(
                    Notification(
                        subscription_id=subscription_id,
                        message_id=message.id,
                        time=message.time,
                        title=message.title,
                        message=message.message,
                        priority=message.priority,
                        tags=",".join(message.tags) or None,
                        click=message.click,
                        actions=message.actions,
                    )
                )
                new_messages.append(message)
            db.commit()

        if len(new_messages) < len(messages):
            logger.debug(
                f"Skipped {len(messages) - len(new_messages)} known messages "
                f"for subscription {subscription_id}"
            )
        return new_messages

    def notification_stats(self, subscription_id: int) -> tuple[int, datetime | None]:
        """Get the notification count and the time of the latest notification."""
        with self._session_factory() as db:
            count, latest = (
                db.query(func.count(Notification.id), func.max(Notification.time))
                .filter(Notification.subscription_id == subscription_id)
                .one()
            )
            return count, datetime.fromtimestamp(latest, UTC) if latest else None
