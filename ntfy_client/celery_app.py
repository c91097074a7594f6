"""Celery application configuration."""

from celery import Celery

from ntfy_client.config import get_settings

settings = get_settings()

app = Celery(
    "ntfy_client",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["ntfy_client.tasks.polling"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=60,
    task_soft_time_limit=settings.poll_deadline_seconds + 5,
    beat_schedule={
        # Fallback for when the push network does not deliver poll triggers
        "poll-subscriptions": {
            "task": "ntfy_client.tasks.polling.poll_subscriptions",
            "schedule": settings.poll_interval_minutes * 60.0,
        },
    },
)
