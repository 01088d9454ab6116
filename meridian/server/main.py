"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers, includes all API routers
and mounts the token-authenticated issues API. It serves as the root of the
web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meridian import __version__
from meridian.core.database import init_db
from meridian.core.logging_config import get_logger, setup_logging
from meridian.core.monitoring import initialize_logfire

from .api.external import issues_api
from .api.v1 import (
    ai,
    api_tokens,
    archive,
    comments,
    exports,
    health,
    imports,
    issues,
    meetings,
    objects,
    pins,
    recurring_meetings,
    reports,
    schedule,
    search,
    views,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing database tables on startup.
    """
    try:
        logger.info("Starting up Meridian Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Meridian Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Meridian Server API

    Backend of the Meridian S&OP tracker. It tracks data-migration objects through their
    lifecycle, the issues raised against them, meetings and their minutes, recurring meeting
    schedules, and produces dashboards, reports and Excel exports.
    """,
    version=__version__,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
    expose_headers=["X-Invalidate"],
)
app.add_middleware(LogfireMiddleware)

initialize_logfire(app)
setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(objects.router, prefix=f"{constant.API_V1_STR}/objects", tags=["objects"])
app.include_router(issues.router, prefix=f"{constant.API_V1_STR}/issues", tags=["issues"])
app.include_router(comments.router, prefix=f"{constant.API_V1_STR}/comments", tags=["comments"])
app.include_router(meetings.router, prefix=f"{constant.API_V1_STR}/meetings", tags=["meetings"])
app.include_router(
    recurring_meetings.router, prefix=f"{constant.API_V1_STR}/recurring-meetings", tags=["recurring-meetings"]
)
app.include_router(schedule.router, prefix=f"{constant.API_V1_STR}/schedule", tags=["schedule"])
app.include_router(pins.router, prefix=f"{constant.API_V1_STR}/pins", tags=["pins"])
app.include_router(api_tokens.router, prefix=f"{constant.API_V1_STR}/api-tokens", tags=["api-tokens"])
app.include_router(imports.router, prefix=f"{constant.API_V1_STR}/import", tags=["import"])
app.include_router(exports.router, prefix=f"{constant.API_V1_STR}/export", tags=["export"])
app.include_router(reports.router, prefix=constant.API_V1_STR, tags=["reports"])
app.include_router(search.router, prefix=constant.API_V1_STR, tags=["search"])
app.include_router(archive.router, prefix=f"{constant.API_V1_STR}/archive", tags=["archive"])
app.include_router(ai.router, prefix=f"{constant.API_V1_STR}/ai", tags=["ai"])
app.include_router(views.router, prefix=f"{constant.API_V1_STR}/views", tags=["views"])

app.mount(constant.ISSUES_API_PREFIX, issues_api)


def run() -> None:
    """Run the server with uvicorn using the configured host and port."""
    uvicorn.run(
        "meridian.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
