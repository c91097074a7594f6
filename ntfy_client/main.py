"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ntfy_client.api import notifications, push, subscriptions
from ntfy_client.config import get_settings
from ntfy_client.database import init_db
from ntfy_client.services.pipeline import get_action_executor, get_shared_notification_center

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    yield
    # Let in-flight http actions finish before the loop goes away
    await get_action_executor().drain()

    cleanup = getattr(get_shared_notification_center(), "cleanup", None)
    if cleanup is not None:
        await cleanup()


app = FastAPI(
    title="ntfy client",
    description="Background poll and notification action pipeline for ntfy topics",
    version="0.1.0",
    lifespan=lifespan,
)

# Register routers
app.include_router(push.router)
app.include_router(notifications.router)
app.include_router(subscriptions.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
