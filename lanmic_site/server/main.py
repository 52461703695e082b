"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, security headers, request timing), registers the exception handlers,
mounts the uploads directory and includes all API routers.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from lanmic_site.core.database import async_session_maker, check_connection, engine, init_db
from lanmic_site.core.logging_config import get_logger, setup_logging
from lanmic_site.core.monitoring import initialize_logfire

from .api.v1 import auth, blog, contact, events, executive, health, team, testimonials, upload
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestTimingMiddleware, SecurityHeadersMiddleware
from .services.token_cleanup import TokenCleanupService, start_cleanup_task

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Startup creates tables when enabled, checks database connectivity and
    starts the refresh token cleanup task; shutdown cancels it.
    """
    logger.info(f"Starting up {constant.PROJECT_NAME} ({settings.environment})...")
    try:
        await init_db()
        if await check_connection(engine):
            logger.info("Database connection established")
        else:
            logger.error("Database connection check failed")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    cleanup_task = start_cleanup_task(
        TokenCleanupService(async_session_maker),
        settings.auth.token_cleanup_interval_seconds,
    )

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME}...")
    if cleanup_task is not None:
        cleanup_task.cancel()
        try:
            await cleanup_task
        except asyncio.CancelledError:
            pass


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    LANMIC Site API

    Backend for the LANMIC corporate website and its admin dashboard: account
    management, blog, team, executive leadership and testimonial content,
    image uploads, the contact form and a live notification stream.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app=app, engine=engine)

# Middleware runs in reverse order of registration; CORS is outermost.
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)

setup_exception_handlers(app)

upload_root = Path(settings.upload.directory)
upload_root.mkdir(parents=True, exist_ok=True)
app.mount(constant.UPLOADS_URL_PATH, StaticFiles(directory=upload_root), name="uploads")

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(blog.router, prefix=f"{constant.API_V1_STR}/blog", tags=["blog"])
app.include_router(team.router, prefix=f"{constant.API_V1_STR}/team", tags=["team"])
app.include_router(executive.router, prefix=f"{constant.API_V1_STR}/executive", tags=["executive"])
app.include_router(testimonials.router, prefix=f"{constant.API_V1_STR}/testimonials", tags=["testimonials"])
app.include_router(upload.router, prefix=f"{constant.API_V1_STR}/upload", tags=["upload"])
app.include_router(contact.router, prefix=f"{constant.API_V1_STR}/contact", tags=["contact"])
app.include_router(events.router, prefix=f"{constant.API_V1_STR}/events", tags=["events"])
