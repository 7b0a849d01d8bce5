"""
Health check endpoints
"""
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import DatabaseDep
from app.core.config import settings
from app.core.logging import log
from app.schemas.common import HealthCheckResponse


router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Liveness probe"""
    return HealthCheckResponse(
        status="ok",
        service=settings.SERVICE_NAME,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.VERSION,
    )


@router.get("/health/ready")
async def readiness_probe(db: DatabaseDep) -> ORJSONResponse:
    """
    Readiness probe - checks the database
    """
    try:
        database_ok = await db.ping()
    except (SQLAlchemyError, OSError) as e:
        log.error("Database health check failed", error=str(e))
        database_ok = False

    return ORJSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if database_ok else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"database": database_ok},
        },
    )
