"""Routes serving the HTML pages."""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES = Jinja2Templates(directory=str(BASE_DIR / "templates"))

router = APIRouter()


def _render(request: Request, name: str, context: dict | None = None) -> HTMLResponse:
    response = TEMPLATES.TemplateResponse(request, name, context or {})
    response.headers["Cache-Control"] = "no-store"
    return response


@router.get("/", include_in_schema=False)
async def index() -> RedirectResponse:
    return RedirectResponse("/ftp")


@router.get("/ftp", response_class=HTMLResponse)
async def connect_form(request: Request) -> HTMLResponse:
    """Render the FTP connection form."""

    return _render(request, "ftp.html", {"default_port": 21})


@router.get("/files/{session_id}", response_class=HTMLResponse)
async def file_browser(request: Request, session_id: str) -> HTMLResponse:
    """Render the file browser for a session snapshot."""

    return _render(request, "files.html", {"session_id": session_id})


@router.get("/search", response_class=HTMLResponse)
async def search_comments_view(request: Request) -> HTMLResponse:
    """Render the YouTube comment search and deep-scrape page."""

    return _render(request, "search.html")
