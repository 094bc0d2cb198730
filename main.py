import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from life_agent.config import DEFAULT_SECRET_KEY, Settings, get_settings
from life_agent.infrastructure.database import Database
from life_agent.infrastructure.notifications import (
    RealtimeConnectionManager,
    WebPushTransport,
    WebSocketRealtimePublisher,
)
from life_agent.interfaces.api.errors import register_error_handlers
from life_agent.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release the engine on shutdown."""

    settings: Settings = app.state.settings
    if not settings.debug and settings.secret_key == DEFAULT_SECRET_KEY:
        raise RuntimeError(
            "SECRET_KEY is still the default value. "
            "Set a strong SECRET_KEY env var before running in production."
        )
    app.state.database.initialize()
    yield
    app.state.database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="Life Agent", lifespan=lifespan)

    realtime_manager = RealtimeConnectionManager()
    app.state.settings = settings
    app.state.database = Database.from_settings(settings)
    app.state.realtime_manager = realtime_manager
    app.state.realtime_publisher = WebSocketRealtimePublisher(realtime_manager)
    app.state.push_transport = WebPushTransport.from_settings(settings)
    app.state.on_endpoint_gone = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app)
    return app


app = create_app()
