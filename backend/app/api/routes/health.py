"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health always returns 200 {"status": "ok"} if the process is up (liveness)
    - GET /health/ready returns 503 if the SQL backend's database is unreachable (readiness)
    - The in-memory backend is always ready

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Probes return plain JSON, not the module envelope (orchestrators parse status only)
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity for the SQL backend."""
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None:
        return {"status": "ready", "checks": {"storage": "memory"}}
    if not await db_manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
