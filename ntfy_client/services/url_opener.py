"""URL opening for view actions and notification clicks."""

import logging
import webbrowser
from typing import Protocol

logger = logging.getLogger(__name__)


class UrlOpener(Protocol):
    """Opens a URL. Fire and forget."""

    def open(self, url: str) -> None: ...


class BrowserUrlOpener:
    """Opens URLs with the system's default browser."""

    def open(self, url: str) -> None:
        logger.debug(f"Opening URL {url}")
        if not webbrowser.open(url):
            logger.warning(f"No browser available to open {url}")


class RecordingUrlOpener:
    """Records URLs instead of opening them, for headless hosts."""

    def __init__(self) -> None:
        self.opened: list[str] = []

    def open(self, url: str) -> None:
        logger.debug(f"Opening URL {url}")
        self.opened.append(url)
