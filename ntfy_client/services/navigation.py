"""Navigation intent channel for the currently selected topic.

The tap router is the only writer and the UI layer the only reader. The
latest selection wins and nothing is persisted across restarts.
"""

import asyncio
import logging

from pydantic import BaseModel, ConfigDict

from ntfy_client.models.subscription import topic_url

logger = logging.getLogger(__name__)


class SelectedTopic(BaseModel):
    """A topic the UI should navigate to."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    topic: str

    @property
    def url(self) -> str:
        return topic_url(self.base_url, self.topic)


class NavigationChannel:
    """Holds the last selected topic and wakes up a waiting reader."""

    def __init__(self) -> None:
        self._current: SelectedTopic | None = None
        self._changed = asyncio.Event()

    @property
    def current(self) -> SelectedTopic | None:
        return self._current

    def select(self, base_url: str, topic: str) -> SelectedTopic:
        """Record a new selection, replacing the previous one."""
        self._current = SelectedTopic(base_url=base_url, topic=topic)
        self._changed.set()
        logger.debug(f"Selected topic {self._current.url}")
        return self._current

    async def wait_for_selection(self) -> SelectedTopic:
        """Wait until a topic is selected and consume the change."""
        await self._changed.wait()
        self._changed.clear()
        assert self._current is not None
        return self._current

    def clear(self) -> None:
        self._current = None
        self._changed.clear()
