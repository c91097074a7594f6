"""Factories wiring the poll and tap pipelines to their collaborators."""

from functools import lru_cache

from ntfy_client.services.action_executor import ActionExecutor
from ntfy_client.services.api_client import SubscriptionManager
from ntfy_client.services.navigation import NavigationChannel
from ntfy_client.services.notification_center import NotificationCenter, get_notification_center
from ntfy_client.services.poll_dispatcher import PollDispatcher
from ntfy_client.services.subscription_store import SubscriptionStore
from ntfy_client.services.tap_router import TapRouter
from ntfy_client.services.url_opener import BrowserUrlOpener, UrlOpener


@lru_cache
def get_subscription_store() -> SubscriptionStore:
    """Get the shared subscription store."""
    return SubscriptionStore()


@lru_cache
def get_navigation_channel() -> NavigationChannel:
    """Get the process-wide navigation channel."""
    return NavigationChannel()


@lru_cache
def get_url_opener() -> UrlOpener:
    """Get the URL opener."""
    return BrowserUrlOpener()


@lru_cache
def get_action_executor() -> ActionExecutor:
    """Get the shared action executor."""
    return ActionExecutor(get_url_opener())


@lru_cache
def get_shared_notification_center() -> NotificationCenter:
    """Get the notification center shared by API requests."""
    return get_notification_center()


def get_tap_router() -> TapRouter:
    """Get a tap router bound to the shared executor and navigation channel."""
    return TapRouter(get_action_executor(), get_url_opener(), get_navigation_channel())


def create_poll_dispatcher(notification_center: NotificationCenter) -> PollDispatcher:
    """Create a poll dispatcher displaying through the given notification center.

    Use a fresh notification center when running outside the API's event
    loop, e.g. from a Celery worker.
    """
    store = get_subscription_store()
    manager = SubscriptionManager(store)
    return PollDispatcher(store=store, fetch=manager.poll, notification_center=notification_center)


def get_poll_dispatcher() -> PollDispatcher:
    """Get a poll dispatcher for API requests."""
    return create_poll_dispatcher(get_shared_notification_center())
