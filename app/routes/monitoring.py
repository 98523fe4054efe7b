"""
Monitoring Routes

Health and readiness checks.
"""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db

router = APIRouter(tags=["Monitoring"])

# Application start time for uptime calculation
APP_START_TIME = time.time()


class HealthStatus(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    version: str
    uptime_seconds: float


class ReadinessStatus(BaseModel):
    """Readiness check response model."""

    status: str
    timestamp: str
    checks: dict[str, dict[str, Any]]


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Liveness probe; never touches the database."""
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        uptime_seconds=round(time.time() - APP_START_TIME, 2),
    )


@router.get("/health/ready", response_model=ReadinessStatus)
async def readiness_check(db: AsyncSession = Depends(get_db)) -> ReadinessStatus:
    """Readiness probe: the content store must answer a trivial query."""
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "healthy", "latency_ms": round((time.perf_counter() - start) * 1000, 2)}
    except SQLAlchemyError as e:
        database = {"status": "unhealthy", "error": str(e)}

    overall = "ready" if database["status"] == "healthy" else "not_ready"
    return ReadinessStatus(
        status=overall,
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks={"database": database},
    )
