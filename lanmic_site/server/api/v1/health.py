"""
Health Check Endpoints.

This module provides basic system status endpoints (welcome, health, version,
database connectivity) used for monitoring and deployment verification.
"""

from fastapi import APIRouter
from sqlalchemy import text

from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.misc import DatabaseStatus
from lanmic_site.server.core import constant
from lanmic_site.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", summary="Welcome", description="Greeting used to check the API is reachable.")
async def root():
    return {"message": f"Welcome to the {constant.PROJECT_NAME}"}


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    return {"version": constant.VERSION, "schema_version": "v1"}


@router.get(
    "/db-connection",
    response_model=DatabaseStatus,
    summary="Database Connectivity",
    description="Run a trivial query against the database and report whether it succeeded.",
)
async def db_connection(session: SessionDep) -> DatabaseStatus:
    try:
        await session.execute(text("SELECT 1"))
        return DatabaseStatus(connected=True)
    except Exception as e:
        logger.error(f"Database connectivity check failed: {e}")
        return DatabaseStatus(connected=False)
