"""Health & Readiness Probes — is the player API up, and can it serve players.

Invariants:
    - GET /health/ returns 200 whenever the process is up (liveness)
    - GET /health/ready returns 503 until the database answers AND the player
      table exists; the body names which check failed

Design Decisions:
    - db_manager read through the module at call time (assigned during lifespan)
    - A missing player table is "not ready", not "unhealthy": the process is fine,
      migrations have not run yet
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "player-registry-api"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": "1.0.0"}


def _not_ready(reason: str) -> JSONResponse:
    logger.warning(f"Readiness check failed: {reason}", extra={"operation": "ready"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return _not_ready("database_unavailable")
    if not await manager.player_table_ready():
        return _not_ready("player_table_missing")
    return {
        "status": "ready",
        "checks": {"database": "healthy", "player_table": "present"},
    }
