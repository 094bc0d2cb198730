from fastapi import FastAPI

from .auth import router as auth_router
from .cron import router as cron_router
from .notifications import router as notifications_router
from .push_subscriptions import router as push_subscriptions_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(notifications_router)
    app.include_router(push_subscriptions_router)
    app.include_router(cron_router)
