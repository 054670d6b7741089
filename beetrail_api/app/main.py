"""
Main entrypoint for the BeeTrail API.

This module assembles the FastAPI application: logging, the
application context (settings and database), exception handlers, the
access-log middleware and the routers.  ``create_app`` builds a fresh
instance; the module-level ``app`` is what ASGI servers load::

    uvicorn beetrail_api.app.main:app --reload

Interactive documentation is served at ``/api-docs``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.router import router
from .core.config import Settings
from .core.context import AppContext
from .core.errors import register_exception_handlers
from .core.logging_config import log_requests, setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    ctx: AppContext = app.state.ctx
    # Creates the database file on first start and brings the schema up to date.
    ctx.db.init()
    if ctx.settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; tokens are signed with the default secret")
    logger.info("%s %s started, database at %s", ctx.settings.project_name, ctx.settings.api_version, ctx.db.path)
    yield
    logger.info("%s shutting down", ctx.settings.project_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use.  When omitted they are read from the
        environment (and a ``.env`` file, if present).

    Returns
    -------
    FastAPI
        A configured application whose ``state.ctx`` holds the
        ``AppContext``.
    """
    settings = settings or Settings.from_env()
    # Logging first so everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description="API for beekeeping field logistics: hive placements, crop flowering calendar and exports.",
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )
    app.state.ctx = AppContext.from_settings(settings)

    register_exception_handlers(app)
    app.middleware("http")(log_requests)
    app.include_router(router)

    return app


app = create_app()
