"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from tables_service.api.http.deps import get_database_service
from tables_service.core.services import DbSessionService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "tables"}


@router.get("/ready", response_model=None)
def readiness(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    db_healthy = database_service.health_check()
    checks = {"database": {"status": "healthy" if db_healthy else "unhealthy"}}

    if not db_healthy:
        return JSONResponse(
            status_code=503, content={"status": "not_ready", "checks": checks}
        )
    return {"status": "ready", "checks": checks}
