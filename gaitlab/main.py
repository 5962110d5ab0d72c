"""
GaitLab Backend - FastAPI Application
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from gaitlab.api.errors import register_exception_handlers
from gaitlab.api.routes import ingest, sessions, query
from gaitlab.config import Settings, settings as default_settings
from gaitlab.core.timeutils import Clock, utc_now
from gaitlab.logger import logger
from gaitlab.models import build_engine, build_session_factory, init_db, close_db
from gaitlab.services.container import build_services


def create_app(
    config: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    clock: Clock = utc_now
) -> FastAPI:
    """
    Build the application

    Args:
        config: Settings (CORS allow-list, database, ingestion options)
        engine: Engine to use instead of one built from config.DATABASE
        clock: Source of "now" for session start/end

    Returns:
        FastAPI app
    """
    config = config or default_settings
    engine = engine or build_engine(config.DATABASE.url, echo=config.DATABASE.echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION}")
        logger.info(f"Allowed origins: {', '.join(config.CORS.allow_origins)}")

        await asyncio.to_thread(init_db, engine)
        logger.success("Application startup complete")

        yield

        logger.info("Shutting down application...")
        await asyncio.to_thread(close_db, engine)
        logger.success("Application shutdown complete")

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="Session-scoped gait sensor ingestion and retrieval",
        lifespan=lifespan,
    )

    app.state.services = build_services(build_session_factory(engine), config, clock=clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS.allow_origins,
        allow_methods=config.CORS.allow_methods,
        allow_headers=config.CORS.allow_headers,
        max_age=config.CORS.max_age,
    )

    register_exception_handlers(app)

    app.include_router(ingest.router)
    app.include_router(sessions.router)
    app.include_router(query.router)

    @app.get("/")
    async def root():
        """Service info"""
        return {
            "app": config.APP_NAME,
            "version": config.APP_VERSION,
            "routes": [
                "POST /api/ingest",
                "POST /api/session/start",
                "POST /api/session/end",
                "GET /api/sessions",
                "GET /api/data/experiment?name=...",
            ],
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "app": config.APP_NAME,
            "version": config.APP_VERSION
        }

    return app


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server at {default_settings.API.host}:{default_settings.API.port}")

    uvicorn.run(
        "gaitlab.main:create_app",
        factory=True,
        host=default_settings.API.host,
        port=default_settings.API.port,
        reload=default_settings.DEBUG,
    )
