"""Health check endpoints."""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.database import get_async_session

router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Liveness check. Returns 200 if the service is running."""
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": settings.app_version,
    }


@router.get("/health/ready")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> Dict[str, Any]:
    """Readiness check: verifies the database answers."""
    checks = {"database": {"status": "ok"}}
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        checks["database"] = {"status": "error", "message": str(e)}

    ready = all(c["status"] == "ok" for c in checks.values())
    return {
        "status": "ready" if ready else "degraded",
        "checks": checks,
        "version": settings.app_version,
    }
