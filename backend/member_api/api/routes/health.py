"""Health & Readiness Probes: banner at / and a database readiness check.

Invariants:
    - GET / always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - db_manager read through the module at request time: it is created in lifespan,
      after this module is imported
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import member_api.infrastructure.database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

BANNER = "Member API is running"


@router.get("/", status_code=status.HTTP_200_OK)
async def root():
    """Liveness probe and service banner."""
    return {"message": BANNER}


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
