"""Root API router that aggregates all endpoint modules."""
from fastapi import APIRouter

from ftptube.api.routes import ftp, health, youtube

api_router = APIRouter(prefix="/api")
api_router.include_router(ftp.router, prefix="/ftp", tags=["ftp"])
api_router.include_router(youtube.router, tags=["youtube"])
api_router.include_router(health.router, tags=["health"])
