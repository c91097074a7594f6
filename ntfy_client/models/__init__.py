"""SQLAlchemy models."""

from ntfy_client.models.notification import Notification
from ntfy_client.models.subscription import Subscription

__all__ = [
    "Subscription",
    "Notification",
]
