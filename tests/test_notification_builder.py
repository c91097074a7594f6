"""Tests for building notification requests."""

from ntfy_client.schemas.message import Message
from ntfy_client.schemas.subscription import SubscriptionRef
from ntfy_client.services.notification_builder import MAX_BODY_LENGTH, build_notification

SUBSCRIPTION = SubscriptionRef(id=1, base_url="https://ntfy.example.com", topic="alerts")


def test_uses_message_id_as_identifier():
    """Test that the request id is the message id."""
    message = Message.parse({"id": "m1", "topic": "alerts", "title": "Hi", "message": "There"})

    request = build_notification(SUBSCRIPTION, message)

    assert request.id == "m1"
    assert request.title == "Hi"
    assert request.body == "There"


def test_rebuilding_same_message_keeps_identifier():
    """Test that re-polling a message yields the same identifier."""
    first = build_notification(SUBSCRIPTION, Message.parse({"id": "m1", "topic": "alerts"}))
    second = build_notification(
        SUBSCRIPTION, Message.parse({"id": "m1", "topic": "alerts", "message": "edited"})
    )

    assert first.id == second.id == "m1"


def test_build_is_deterministic():
    message = Message.parse({"id": "m1", "topic": "alerts", "message": "x", "click": "/a"})
    assert build_notification(SUBSCRIPTION, message) == build_notification(SUBSCRIPTION, message)


def test_title_and_body_default_to_empty():
    """Test that title and body are never absent."""
    request = build_notification(SUBSCRIPTION, Message.parse({"id": "m1", "topic": "alerts"}))

    assert request.title == ""
    assert request.body == ""


def test_metadata_carries_subscription():
    """Test that the subscription's base URL and topic are embedded."""
    message = Message.parse(
        {
            "id": "m1",
            "topic": "alerts",
            "click": "/somewhere",
            "actions": '[{"id": "a1", "action": "view", "url": "/x"}]',
        }
    )

    request = build_notification(SUBSCRIPTION, message)

    assert request.metadata["base_url"] == "https://ntfy.example.com"
    assert request.metadata["topic"] == "alerts"
    assert request.metadata["click"] == "/somewhere"
    assert request.metadata["actions"] == '[{"id": "a1", "action": "view", "url": "/x"}]'


def test_metadata_reconstructs_message():
    """Test that the message can be rebuilt from the request metadata."""
    message = Message.parse(
        {"id": "m1", "topic": "alerts", "title": "T", "message": "B", "tags": ["a"], "priority": 2}
    )

    request = build_notification(SUBSCRIPTION, message)
    restored = Message.from_metadata(request.metadata)

    assert restored.id == message.id
    assert restored.title == message.title
    assert restored.message == message.message
    assert restored.tags == message.tags
    assert restored.priority == message.priority
    assert restored.base_url == SUBSCRIPTION.base_url


def test_long_body_is_truncated():
    """Test that very long bodies are shortened for display but kept in metadata."""
    body = "x" * (MAX_BODY_LENGTH + 100)
    message = Message.parse({"id": "m1", "topic": "alerts", "message": body})

    request = build_notification(SUBSCRIPTION, message)

    assert len(request.body) == MAX_BODY_LENGTH
    assert request.body.endswith("…")
    assert request.metadata["message"] == body
