"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from rule_engine.core.config import get_settings
from rule_engine.core.logging import configure_logging, get_logger
from rule_engine.rules import rules_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        "starting",
        app=settings.app_name,
        rules_file=settings.rules_file,
        node_mode=settings.node_mode,
    )
    yield
    logger.info("shutting_down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Declarative JSON rule evaluation",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(rules_router)  # /rules

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
