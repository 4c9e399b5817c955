import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notifier.application.notifications import run_scheduler_forever
from notifier.config import get_settings
from notifier.infrastructure.database import SessionLocal, engine, initialize_database
from notifier.interfaces.api.errors import register_exception_handlers
from notifier.interfaces.api.routes import register_routes
from notifier.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the delayed dispatch poller, release them on shutdown."""

    configure_logging()
    initialize_database()
    settings = get_settings()

    poller: asyncio.Task | None = None
    if settings.scheduler_enabled:
        poller = asyncio.create_task(
            run_scheduler_forever(SessionLocal, settings.scheduler_poll_seconds)
        )

    yield

    if poller is not None:
        poller.cancel()
        with suppress(asyncio.CancelledError):
            await poller
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Notifier", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()
