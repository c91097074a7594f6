"""Executes user actions attached to notifications."""

import asyncio
import logging
from typing import assert_never
from urllib.parse import urljoin, urlsplit

import httpx

from ntfy_client.config import get_settings
from ntfy_client.errors import HttpActionFailedError, InvalidUrlError
from ntfy_client.schemas.action import HttpAction, ViewAction
from ntfy_client.services.url_opener import UrlOpener

logger = logging.getLogger(__name__)

HTTP_SCHEMES = ("http", "https")


def resolve_url(url: str | None, base_url: str | None = None) -> str:
    """Resolve a possibly relative URL against a subscription's base URL.

    Absolute URLs of any scheme pass through (e.g. mailto: or app links).
    Raises InvalidUrlError if the URL is empty or cannot be made absolute.
    """
    if not url or not url.strip():
        raise InvalidUrlError(url)
    url = url.strip()

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidUrlError(url) from e
    if parts.scheme:
        if parts.scheme in HTTP_SCHEMES and not parts.netloc:
            raise InvalidUrlError(url)
        return url

    if not base_url:
        raise InvalidUrlError(url)
    resolved = urljoin(base_url.rstrip("/") + "/", url)
    resolved_parts = urlsplit(resolved)
    if resolved_parts.scheme not in HTTP_SCHEMES or not resolved_parts.netloc:
        raise InvalidUrlError(url)
    return resolved


class ActionExecutor:
    """Runs view and http actions without blocking the caller.

    View actions open a URL right away. Http actions are sent from a
    background task whose failures are logged and never raised, since the
    user has already moved on by the time they complete.
    """

    def __init__(
        self,
        url_opener: UrlOpener,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url_opener = url_opener
        self.timeout = (
            timeout if timeout is not None else get_settings().http_action_timeout_seconds
        )
        self._transport = transport
        self._tasks: set[asyncio.Task] = set()

    def execute(
        self, action: ViewAction | HttpAction, base_url: str | None = None
    ) -> asyncio.Task | None:
        """Execute an action.

        Returns the background task for http actions, None for view actions.
        Raises InvalidUrlError if the action URL cannot be resolved.
        """
        logger.info(f"Executing {action.action} action {action.id}")
        if isinstance(action, ViewAction):
            self.url_opener.open(resolve_url(action.url, base_url))
            return None
        elif isinstance(action, HttpAction):
            url = resolve_url(action.url, base_url)
            if urlsplit(url).scheme not in HTTP_SCHEMES:
                raise InvalidUrlError(action.url)
            task = asyncio.get_running_loop().create_task(self._send(action, url))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return task
        else:
            assert_never(action)

    async def _send(self, action: HttpAction, url: str) -> HttpActionFailedError | None:
        """Send the request of an http action and log the outcome."""
        method = action.method.upper()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=action.headers,
                    content=action.body,
                )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # ValueError covers header values that do not encode to ASCII
            error = HttpActionFailedError(url, cause=str(e) or type(e).__name__)
            logger.warning(f"Action {action.id}: {error}")
            return error

        if not response.is_success:
            error = HttpActionFailedError(url, status=response.status_code)
            logger.warning(f"Action {action.id}: {error}")
            return error

        logger.info(f"Action {action.id}: {method} {url} returned {response.status_code}")
        return None

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for all in-flight http actions to settle."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
