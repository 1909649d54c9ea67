"""Health — liveness and readiness probes.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process serves requests
    - GET /api/v1/health/ready answers 503 until the database answers a ping,
      and reports the paging limits the listing endpoints will apply
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pagequery.config import Settings, get_settings
from pagequery.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "pagequery-api"}


@router.get("/ready")
async def readiness(settings: Settings = Depends(get_settings)):
    """Ready once the database is reachable."""
    manager = database.db_manager
    if manager is None or not await manager.ping():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "paging": {
            "default_page_size": settings.default_page_size,
            "max_page_size": settings.max_page_size,
        },
    }
