from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from delivery_admin.config import get_settings
from delivery_admin.interfaces.api.routes import register_routes
from delivery_admin.infrastructure.database import initialize_database, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the admin API application."""

    app = FastAPI(title="Delivery admin API", lifespan=lifespan)

    # Admin panel origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
