"""Health check endpoint."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ftptube.api.dependencies import get_service_registry
from ftptube.services.registry import ServiceRegistry

router = APIRouter()


@router.get("/health", summary="Health probe")
async def health_check(registry: ServiceRegistry = Depends(get_service_registry)) -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "active_sessions": len(registry.session_store),
        "youtube_configured": registry.youtube_service is not None,
    }
