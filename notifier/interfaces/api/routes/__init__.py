from fastapi import FastAPI

from .auth import router as auth_router
from .email_providers import router as email_providers_router
from .notifications import router as notifications_router
from .preferences import router as preferences_router
from .triggers import router as triggers_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(preferences_router)
    app.include_router(triggers_router)
    app.include_router(email_providers_router)
    app.include_router(notifications_router)
