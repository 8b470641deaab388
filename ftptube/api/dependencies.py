"""FastAPI dependency providers."""
from fastapi import Depends, Request

from ftptube.core.config import Settings
from ftptube.core.exceptions import InternalError
from ftptube.services.ftp_service import FTPService
from ftptube.services.registry import ServiceRegistry
from ftptube.services.youtube_service import YouTubeService


def get_service_registry(request: Request) -> ServiceRegistry:
    """Return the service registry stored on the FastAPI application state."""

    registry = getattr(request.app.state, "services", None)
    if not isinstance(registry, ServiceRegistry):
        raise RuntimeError("Service registry not initialised")
    return registry


def get_app_settings(registry: ServiceRegistry = Depends(get_service_registry)) -> Settings:
    return registry.settings


def get_ftp_service(registry: ServiceRegistry = Depends(get_service_registry)) -> FTPService:
    return registry.ftp_service


def get_youtube_service(registry: ServiceRegistry = Depends(get_service_registry)) -> YouTubeService:
    service = registry.youtube_service
    if service is None:
        raise InternalError("YouTube API key is not configured")
    return service
