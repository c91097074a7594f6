"""Display layer for prepared notifications.

The pipeline only decides what a notification says; presenting it is up to
whoever listens on the display channel.
"""

import logging
from typing import Protocol

import redis.asyncio as aioredis

from ntfy_client.config import get_settings
from ntfy_client.schemas.notification import NotificationRequest

logger = logging.getLogger(__name__)


class NotificationCenter(Protocol):
    """Accepts notification requests for display."""

    async def add(self, request: NotificationRequest) -> None: ...


class RedisNotificationCenter:
    """Publishes notification requests to a Redis pub/sub channel."""

    def __init__(self, redis_url: str | None = None, channel: str | None = None) -> None:
        settings = get_settings()
        self.redis_url = redis_url or settings.redis_url
        self.channel = channel or settings.notification_channel
        self._redis: aioredis.Redis | None = None

    async def _get_redis(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(self.redis_url)
        return self._redis

    async def add(self, request: NotificationRequest) -> None:
        """Publish a notification request. Raises on Redis errors."""
        redis_conn = await self._get_redis()
        await redis_conn.publish(self.channel, request.model_dump_json())
        logger.debug(f"Published notification {request.id} to {self.channel}")

    async def cleanup(self) -> None:
        """Clean up Redis connections."""
        if self._redis:
            await self._redis.close()
            self._redis = None


class InMemoryNotificationCenter:
    """Keeps displayed notifications in memory, keyed by id."""

    def __init__(self) -> None:
        self.delivered: dict[str, NotificationRequest] = {}
        self.history: list[NotificationRequest] = []

    async def add(self, request: NotificationRequest) -> None:
        """Show a notification, replacing any with the same id."""
        self.delivered[request.id] = request
        self.history.append(request)


def get_notification_center() -> NotificationCenter:
    """Get the configured notification center."""
    settings = get_settings()
    if settings.redis_url:
        return RedisNotificationCenter()
    logger.info("REDIS_URL not configured, keeping notifications in memory")
    return InMemoryNotificationCenter()
