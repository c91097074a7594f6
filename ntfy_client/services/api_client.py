"""HTTP client for the ntfy poll API."""

import asyncio
import json
import logging

import httpx

from ntfy_client.config import get_settings
from ntfy_client.errors import FetchError, ParseError
from ntfy_client.schemas.message import MESSAGE_EVENT, Message
from ntfy_client.schemas.subscription import SubscriptionRef
from ntfy_client.services.subscription_store import SubscriptionStore

logger = logging.getLogger(__name__)


class NtfyApiClient:
    """Fetches cached messages from an ntfy server."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = get_settings()
        self.timeout = timeout if timeout is not None else self.settings.fetch_timeout_seconds
        self._transport = transport

    async def poll(self, base_url: str, topic: str, since: str | None = None) -> list[Message]:
        """Poll a topic for messages, optionally only those after ``since``.

        Lines that are not message events or fail to parse are skipped; the
        server's oldest-first order is kept.
        """
        url = f"{base_url.rstrip('/')}/{topic}/json"
        params = {"poll": "1"}
        if since:
            params["since"] = since

        logger.debug(f"Polling {url} since={since or 'all'}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

        messages = []
        for line in response.text.splitlines():
            if not line.strip():
                continue
            try:
                payload = json.loads(line)
                if not isinstance(payload, dict):
                    raise ParseError("line is not an object")
                if payload.get("event", MESSAGE_EVENT) != MESSAGE_EVENT:
                    continue
                messages.append(Message.parse({**payload, "base_url": base_url}))
            except (json.JSONDecodeError, ParseError) as e:
                logger.warning(f"Skipping unparseable line from {url}: {e}")

        return messages


class SubscriptionManager:
    """Polls subscriptions and records what was received."""

    def __init__(self, store: SubscriptionStore, api_client: NtfyApiClient | None = None) -> None:
        self.store = store
        self.api_client = api_client or NtfyApiClient()

    async def poll(self, subscription: SubscriptionRef) -> list[Message]:
        """Fetch messages not seen before on a subscription.

        Raises FetchError if the server cannot be reached.
        """
        # Storage is synchronous, keep it off the event loop
        since = await asyncio.to_thread(self.store.last_message_id, subscription.id)
        messages = await self.api_client.poll(subscription.base_url, subscription.topic, since)
        new_messages = await asyncio.to_thread(self.store.save_messages, subscription.id, messages)
        logger.info(f"Polled {subscription.url}: {len(new_messages)} new message(s)")
        return new_messages
