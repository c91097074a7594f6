"""Celery tasks for polling subscriptions outside the request cycle."""

import asyncio
import logging
from typing import Any

from ntfy_client.celery_app import app as celery_app
from ntfy_client.config import get_settings
from ntfy_client.models.enums import PollResult
from ntfy_client.services.notification_center import get_notification_center
from ntfy_client.services.pipeline import create_poll_dispatcher

logger = logging.getLogger(__name__)


@celery_app.task
def process_poll_trigger(payload: dict[str, Any]) -> str:
    """Handle a background push payload.

    Returns the poll result value.
    """
    return asyncio.run(_run(payload)).value


@celery_app.task
def poll_subscriptions() -> str:
    """Poll all subscriptions, as if a poll trigger had arrived.

    This task runs every poll_interval_minutes via celery-beat.
    """
    return asyncio.run(_run({"topic": get_settings().poll_topic})).value


async def _run(payload: dict[str, Any]) -> PollResult:
    # Redis clients are bound to the event loop that created them
    notification_center = get_notification_center()
    dispatcher = create_poll_dispatcher(notification_center)
    try:
        result = await dispatcher.on_poll_trigger(payload)
    finally:
        cleanup = getattr(notification_center, "cleanup", None)
        if cleanup is not None:
            await cleanup()
    logger.info(f"Poll task finished: {result.value}")
    return result
