"""Service registry that wires all application services together."""
import asyncio
import logging
from typing import Optional

from ftptube.core.config import Settings
from ftptube.core.request_context import request_context
from ftptube.core.tasks import PeriodicTask
from ftptube.services.ftp_service import FTPService
from ftptube.services.session_store import SessionStore
from ftptube.services.youtube_client import YouTubeClient
from ftptube.services.youtube_service import YouTubeService

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Container object for dependency injection."""

    def __init__(
        self,
        settings: Settings,
        *,
        session_store: Optional[SessionStore] = None,
        ftp_service: Optional[FTPService] = None,
        youtube_service: Optional[YouTubeService] = None,
    ) -> None:
        self.settings = settings
        self.session_store = session_store if session_store is not None else SessionStore(settings.session_ttl)
        if ftp_service is None:
            ftp_service = FTPService(self.session_store, timeout=settings.ftp_timeout)
        self.ftp_service = ftp_service
        if youtube_service is None:
            youtube_service = self._build_youtube_service(settings)
        self.youtube_service = youtube_service
        self._sweeper = PeriodicTask(
            self.session_store.sweep,
            interval=settings.session_sweep_interval,
            name="session-sweeper",
            logger=logger,
        )
        self._lifecycle_lock = asyncio.Lock()

    @staticmethod
    def _build_youtube_service(settings: Settings) -> Optional[YouTubeService]:
        if not settings.youtube_configured:
            logger.warning("YOUTUBE_API_KEY not set; YouTube endpoints are disabled")
            return None
        client = YouTubeClient(
            settings.youtube_api_key,
            base_url=settings.youtube_base_url,
            timeout=settings.youtube_timeout,
        )
        return YouTubeService(client)

    async def startup(self) -> None:
        async with self._lifecycle_lock:
            with request_context("bg:registry"):
                logger.info("Starting background services")
                self._sweeper.start()

    async def shutdown(self) -> None:
        async with self._lifecycle_lock:
            with request_context("bg:registry"):
                logger.info("Stopping background services")
                await self._sweeper.stop()
