"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.datastructures import MutableHeaders
from starlette.requests import Request

from ftptube import __version__
from ftptube.api.error_handlers import register_exception_handlers
from ftptube.api.router import api_router
from ftptube.core.config import SESSION_COOKIE_NAME, Settings, get_settings
from ftptube.core.logging import configure_logging
from ftptube.core.request_context import clear_request_id, new_request_id, set_request_id
from ftptube.services import ServiceRegistry
from ftptube.web.routes import router as web_router

logger = logging.getLogger(__name__)

FILE_BROWSER_PREFIX = "/files/"
CONNECT_FORM_PATH = "/ftp"
SLOW_REQUEST_MS = 2000


class RequestIdMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        set_request_id(request_id)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            if duration_ms >= SLOW_REQUEST_MS:
                logger.warning("Slow request %s %s took %d ms", scope.get("method"), scope.get("path"), duration_ms)
            else:
                logger.debug(
                    "%s %s -> %s (%d ms)",
                    scope.get("method"),
                    scope.get("path"),
                    status_code,
                    duration_ms,
                )
            clear_request_id()


class FileBrowserGate:
    """Redirect file-browser page requests without a session cookie to the connect form.

    Only the cookie's presence is checked; the API calls made by the page
    validate the token itself.
    """

    def __init__(self, app, *, prefix: str = FILE_BROWSER_PREFIX, redirect_to: str = CONNECT_FORM_PATH):
        self.app = app
        self.prefix = prefix
        self.redirect_to = redirect_to

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path") or ""
        if path.startswith(self.prefix):
            request = Request(scope, receive=receive)
            if not request.cookies.get(SESSION_COOKIE_NAME):
                logger.info("No session cookie for %s, redirecting to %s", path, self.redirect_to)
                await RedirectResponse(self.redirect_to)(scope, receive, send)
                return

        await self.app(scope, receive, send)


def create_app(
    settings: Optional[Settings] = None,
    *,
    registry: Optional[ServiceRegistry] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    registry = registry or ServiceRegistry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage startup and shutdown of background services."""

        await registry.startup()
        try:
            yield
        finally:
            await registry.shutdown()

    app = FastAPI(
        title="ftptube",
        description="FTP browser and YouTube comment scraper API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = registry

    app.add_middleware(FileBrowserGate)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(web_router)
    app.include_router(api_router)
    register_exception_handlers(app)
    return app


app = create_app()
