"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.users_api.api.http.deps import get_database_service
from src.users_api.core.services import DbSessionService
from src.users_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


def _database_type(url: str) -> str:
    return url.split("+", 1)[0].split(":", 1)[0]


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe; does not check dependencies."""
    return {"status": "healthy", "service": "users-api"}


@router.get("/ready", response_model=None)
async def readiness(
    database: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe. Returns 503 when the database is unreachable."""
    config = get_config()
    db_healthy = database.health_check()
    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": _database_type(config.database.url),
            }
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response


@router.get("/database", response_model=None)
async def health_database(
    database: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    config = get_config()
    try:
        healthy = database.health_check()
        return {
            "status": "healthy" if healthy else "unhealthy",
            "type": _database_type(config.database.url),
            "pool": database.get_pool_status(),
        }
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
