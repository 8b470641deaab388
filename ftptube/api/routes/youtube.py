"""YouTube comment scraping endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ftptube.api.dependencies import get_youtube_service
from ftptube.core.exceptions import BadRequestError, DomainError
from ftptube.schemas import DeepScrapeResponse, SearchCommentsResponse, ShortCommentsResponse
from ftptube.services.utils.errors import normalize_youtube_error
from ftptube.services.youtube_client import YouTubeAPIError
from ftptube.services.youtube_service import YouTubeService

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_SEARCH_COUNT = 5
MAX_SEARCH_COUNT = 50


def _parse_count(raw: Optional[str]) -> int:
    try:
        count = int(raw) if raw else 0
    except ValueError:
        count = 0
    if count == 0:
        return DEFAULT_SEARCH_COUNT
    if count < 0 or count > MAX_SEARCH_COUNT:
        raise BadRequestError(f"count must be between 1 and {MAX_SEARCH_COUNT}")
    return count


@router.get("/search-comments", response_model=SearchCommentsResponse, summary="Search videos with comments")
async def search_comments(
    query: str = Query("", description="Search query"),
    count: Optional[str] = Query(None, description="Number of videos to fetch"),
    youtube: YouTubeService = Depends(get_youtube_service),
):
    if not query:
        raise BadRequestError("Missing query")
    max_results = _parse_count(count)
    try:
        videos = await youtube.search_with_comments(query, max_results)
    except (YouTubeAPIError, OSError) as exc:
        logger.warning("Search comments error: %s", exc)
        raise normalize_youtube_error(exc) from exc
    return {"videos": videos}


@router.get("/deep-scrape", response_model=DeepScrapeResponse, summary="Latest video and comments of a channel")
async def deep_scrape(
    channel_id: str = Query("", alias="channelId"),
    youtube: YouTubeService = Depends(get_youtube_service),
):
    if not channel_id:
        raise BadRequestError("Missing channelId")
    try:
        return await youtube.deep_scrape(channel_id)
    except DomainError:
        raise
    except (YouTubeAPIError, OSError) as exc:
        logger.error("Deep scrape error: %s", exc)
        raise normalize_youtube_error(exc) from exc


@router.get("/short-comments", response_model=ShortCommentsResponse, summary="Comments on channels' latest shorts")
async def short_comments(
    channel_ids: Optional[List[str]] = Query(None, alias="channelId"),
    youtube: YouTubeService = Depends(get_youtube_service),
):
    ids = [channel_id for channel_id in channel_ids or [] if channel_id]
    if not ids:
        raise BadRequestError("Missing channelId[] params")
    try:
        data = await youtube.short_comments(ids)
    except (YouTubeAPIError, OSError) as exc:
        logger.warning("Short comments error: %s", exc)
        raise normalize_youtube_error(exc) from exc
    return {"data": data}
