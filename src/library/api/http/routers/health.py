"""Liveness and readiness endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.library.api.http.deps import get_database_service
from src.library.core.services import DbSessionService

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
def readiness(
    database_service: DbSessionService = Depends(get_database_service),
):
    """Readiness check endpoint; verifies the database is reachable."""
    if not database_service.health_check():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
