"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch import __version__
from skillmatch.database import get_db

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    backend: str
    timestamp: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.
    Returns server status and database connectivity.
    """
    # Test database connectivity
    db_status = "connected"
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = f"error: {str(e)}"

    return HealthResponse(
        status="ok",
        version=__version__,
        backend="python-fastapi",
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=db_status,
    )


@router.get("/api/health")
async def api_health_check(db: AsyncSession = Depends(get_db)):
    """
    API prefixed health check (for consistency with /api/* routes).
    """
    return await health_check(db)
