"""Pytest configuration and fixtures."""

import os

# Must be set before ntfy_client is imported
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["REDIS_URL"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from ntfy_client.database import Base, SessionLocal, engine  # noqa: E402
from ntfy_client.main import app  # noqa: E402
from ntfy_client.schemas.subscription import SubscriptionRef  # noqa: E402
from ntfy_client.services.action_executor import ActionExecutor  # noqa: E402
from ntfy_client.services.navigation import NavigationChannel  # noqa: E402
from ntfy_client.services.notification_center import InMemoryNotificationCenter  # noqa: E402
from ntfy_client.services.pipeline import (  # noqa: E402
    get_navigation_channel,
    get_poll_dispatcher,
    get_subscription_store,
    get_tap_router,
)
from ntfy_client.services.poll_dispatcher import PollDispatcher  # noqa: E402
from ntfy_client.services.subscription_store import SubscriptionStore  # noqa: E402
from ntfy_client.services.tap_router import TapRouter  # noqa: E402
from ntfy_client.services.url_opener import RecordingUrlOpener  # noqa: E402


class FakeFetcher:
    """Fetch collaborator returning canned messages or raising per topic."""

    def __init__(self, results: dict | None = None) -> None:
        self.results = results or {}
        self.calls: list[str] = []

    async def __call__(self, subscription: SubscriptionRef):
        self.calls.append(subscription.topic)
        result = self.results.get(subscription.topic, [])
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Provide a database session and clean up all data after the test."""
    session = SessionLocal()

    yield session

    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def store():
    """Subscription store on the test database."""
    return SubscriptionStore(SessionLocal)


@pytest.fixture
def notification_center():
    return InMemoryNotificationCenter()


@pytest.fixture
def url_opener():
    return RecordingUrlOpener()


@pytest.fixture
def navigation():
    return NavigationChannel()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def client(store, notification_center, url_opener, navigation, fetcher):
    """Create a test client with the pipeline wired to fakes."""
    executor = ActionExecutor(url_opener)

    app.dependency_overrides[get_subscription_store] = lambda: store
    app.dependency_overrides[get_navigation_channel] = lambda: navigation
    app.dependency_overrides[get_tap_router] = lambda: TapRouter(executor, url_opener, navigation)
    app.dependency_overrides[get_poll_dispatcher] = lambda: PollDispatcher(
        store=store,
        fetch=fetcher,
        notification_center=notification_center,
        poll_topic="~poll",
        deadline=5.0,
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
