"""Routes taps on displayed notifications."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ntfy_client.config import get_settings
from ntfy_client.errors import ActionError, CannotReconstructMessageError
from ntfy_client.models.enums import TapOutcome
from ntfy_client.schemas.action import find_action
from ntfy_client.schemas.message import Message
from ntfy_client.services.action_executor import ActionExecutor, resolve_url
from ntfy_client.services.navigation import NavigationChannel
from ntfy_client.services.url_opener import UrlOpener

logger = logging.getLogger(__name__)

# Identifier the host reports when the notification body itself was tapped
DEFAULT_ACTION_ID = "com.apple.UNNotificationDefaultActionIdentifier"


class TapRouter:
    """Rebuilds the tapped message and runs its action or click URL."""

    def __init__(
        self,
        executor: ActionExecutor,
        url_opener: UrlOpener,
        navigation: NavigationChannel,
    ) -> None:
        self.executor = executor
        self.url_opener = url_opener
        self.navigation = navigation
        self.default_base_url = get_settings().app_base_url

    async def on_notification_interaction(
        self,
        metadata: Mapping[str, Any],
        action_id: str | None = None,
        completion: Callable[[], None] | None = None,
    ) -> TapOutcome:
        """Handle a tap on a notification or one of its action buttons.

        At most one of the tapped action or the click URL is executed. The
        topic is selected for in-app navigation either way. ``completion``
        is called exactly once.
        """
        try:
            return self._route(metadata, action_id)
        except Exception as e:
            logger.error(f"Error handling notification interaction: {e}", exc_info=True)
            return TapOutcome.FAILED
        finally:
            if completion is not None:
                completion()

    def _route(self, metadata: Mapping[str, Any], action_id: str | None) -> TapOutcome:
        try:
            message = Message.from_metadata(metadata)
        except CannotReconstructMessageError as e:
            logger.warning(f"Ignoring notification interaction: {e}")
            return TapOutcome.FAILED

        base_url = message.base_url or self.default_base_url
        if message.topic:
            self.navigation.select(base_url, message.topic)

        if action_id == DEFAULT_ACTION_ID:
            action_id = None
        action = find_action(message.parsed_actions(), action_id)
        if action_id and action is None:
            logger.info(f"Action {action_id} not found in message {message.id}, using click URL")

        try:
            if action is not None:
                self.executor.execute(action, base_url)
                return TapOutcome.ACTION
            if message.click:
                self.url_opener.open(resolve_url(message.click, base_url))
                return TapOutcome.CLICK
        except ActionError as e:
            logger.warning(f"Unable to handle interaction with message {message.id}: {e}")
            return TapOutcome.FAILED

        return TapOutcome.NONE
