# resident_directory/api/routers/health.py

from fastapi import APIRouter, Request

from resident_directory.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Liveness check. Also used by the mobile client to wake the service before a sync."""
    settings = get_settings()
    return {
        "status": "ok",
        "correlation_id": getattr(request.state, "correlation_id", None),
        "environment": settings.environment,
        "version": settings.version,
    }
