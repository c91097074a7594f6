"""Poll dispatcher for background poll triggers.

The server periodically publishes a silent message to a reserved topic. When
one arrives, every local subscription is polled for messages that were not
delivered yet, and each of them is handed to the display layer as a
notification.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ntfy_client.config import get_settings
from ntfy_client.errors import FetchError
from ntfy_client.models.enums import PollResult
from ntfy_client.schemas.message import Message
from ntfy_client.schemas.subscription import SubscriptionRef
from ntfy_client.services.notification_builder import build_notification
from ntfy_client.services.notification_center import NotificationCenter
from ntfy_client.services.subscription_store import SubscriptionStore

logger = logging.getLogger(__name__)

Fetcher = Callable[[SubscriptionRef], Awaitable[list[Message]]]


class PollDispatcher:
    """Fetches pending messages for all subscriptions and displays them."""

    def __init__(
        self,
        store: SubscriptionStore,
        fetch: Fetcher,
        notification_center: NotificationCenter,
        poll_topic: str | None = None,
        deadline: float | None = None,
    ) -> None:
        settings = get_settings()
        self.store = store
        self.fetch = fetch
        self.notification_center = notification_center
        self.poll_topic = poll_topic or settings.poll_topic
        self.deadline = deadline if deadline is not None else settings.poll_deadline_seconds

    async def on_poll_trigger(
        self,
        payload: Mapping[str, Any],
        completion: Callable[[PollResult], None] | None = None,
    ) -> PollResult:
        """Handle a background push.

        ``completion`` is called exactly once with the result, after all
        fetches have settled or been abandoned at the deadline.
        """
        result = PollResult.FAILED
        try:
            result = await self._handle(payload)
        except Exception as e:
            logger.error(f"Error processing poll trigger: {e}", exc_info=True)
        finally:
            if completion is not None:
                completion(result)
        return result

    async def _handle(self, payload: Mapping[str, Any]) -> PollResult:
        topic = payload.get("topic") if isinstance(payload, Mapping) else None
        if topic != self.poll_topic:
            # The same push channel carries other messages too
            logger.debug(f"Ignoring background push for topic {topic!r}")
            return PollResult.NO_DATA

        subscriptions = await asyncio.to_thread(self.store.list_subscriptions)
        if not subscriptions:
            logger.info("Poll trigger received, but there are no subscriptions")
            return PollResult.NO_DATA

        logger.info(f"Poll trigger received, polling {len(subscriptions)} subscription(s)")
        tasks = [
            asyncio.create_task(self._poll_subscription(subscription), name=subscription.url)
            for subscription in subscriptions
        ]
        done, pending = await asyncio.wait(tasks, timeout=self.deadline)

        for task in pending:
            logger.warning(f"Abandoning poll of {task.get_name()}: deadline of {self.deadline}s")
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        counts = [task.result() for task in done]
        displayed = sum(count for count in counts if count)
        failed = len(pending) + sum(1 for count in counts if count is None)

        logger.info(
            f"Poll complete: {displayed} notification(s) shown, "
            f"{failed}/{len(subscriptions)} subscription(s) failed"
        )
        if displayed:
            return PollResult.NEW_DATA
        if failed == len(subscriptions):
            return PollResult.FAILED
        return PollResult.NO_DATA

    async def _poll_subscription(self, subscription: SubscriptionRef) -> int | None:
        """Fetch and display one subscription's messages in server order.

        Returns the number of notifications shown, or None if the fetch
        failed.
        """
        try:
            messages = await self.fetch(subscription)
        except FetchError as e:
            logger.warning(str(e))
            return None
        except Exception as e:
            logger.error(f"Unexpected error polling {subscription.url}: {e}", exc_info=True)
            return None

        displayed = 0
        for message in messages:
            request = build_notification(subscription, message)
            try:
                await self.notification_center.add(request)
                displayed += 1
            except Exception as e:
                logger.error(f"Unable to create notification {request.id}: {e}")
        return displayed
