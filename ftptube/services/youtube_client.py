"""Thin async wrapper around the YouTube Data API v3."""
from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Optional

from ftptube.core.config import DEFAULT_YOUTUBE_BASE_URL
from ftptube.services.utils.types import CommentRecord, VideoRecord

logger = logging.getLogger(__name__)

Transport = Callable[[str, dict[str, Any]], dict[str, Any]]

COMMENTS_DISABLED_REASON = "commentsDisabled"


class YouTubeAPIError(Exception):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status: int, message: str, reason: str | None = None) -> None:
        super().__init__(f"{status} {message}")
        self.status = status
        self.message = message
        self.reason = reason

    @property
    def comments_disabled(self) -> bool:
        return self.reason == COMMENTS_DISABLED_REASON or "disabled comments" in self.message

    @classmethod
    def from_body(cls, status: int, body: bytes) -> "YouTubeAPIError":
        message = f"HTTP {status}"
        reason = None
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return cls(status, message)
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            message = error.get("message") or message
            details = error.get("errors") or []
            if details and isinstance(details[0], dict):
                reason = details[0].get("reason")
        return cls(status, message, reason)


class YouTubeClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_YOUTUBE_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[Transport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport or self._urllib_transport

    def _urllib_transport(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        query = urllib.parse.urlencode(params)
        url = f"{self._base_url}/{endpoint}?{query}"
        request = urllib.request.Request(url, headers={"Accept": "application/json"})
        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                return json.loads(response.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            raise YouTubeAPIError.from_body(exc.code, exc.read()) from exc

    async def _get(self, endpoint: str, **params: Any) -> dict[str, Any]:
        params["key"] = self._api_key
        logger.debug("GET %s %s", endpoint, {k: v for k, v in params.items() if k != "key"})
        return await asyncio.to_thread(self._transport, endpoint, params)

    async def search_videos(self, query: str, max_results: int) -> list[dict[str, Any]]:
        data = await self._get(
            "search",
            part="snippet",
            q=query,
            maxResults=max_results,
            type="video",
            order="relevance",
        )
        videos = []
        for item in data.get("items") or []:
            video_id = (item.get("id") or {}).get("videoId")
            if not video_id:
                continue
            snippet = item.get("snippet") or {}
            videos.append(
                {
                    "videoId": video_id,
                    "channelId": snippet.get("channelId"),
                    "title": snippet.get("title"),
                    "channelTitle": snippet.get("channelTitle"),
                    "publishTime": snippet.get("publishTime"),
                    "comments": [],
                }
            )
        return videos

    async def get_channel(self, channel_id: str) -> Optional[dict[str, Any]]:
        data = await self._get("channels", part="snippet", id=channel_id)
        items = data.get("items") or []
        if not items:
            return None
        snippet = items[0].get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        return {
            "channelId": channel_id,
            "title": snippet.get("title"),
            "avatar": (thumbnails.get("default") or {}).get("url"),
        }

    async def get_latest_video(self, channel_id: str) -> Optional[VideoRecord]:
        data = await self._get(
            "search",
            part="snippet",
            channelId=channel_id,
            maxResults=1,
            order="date",
            type="video",
        )
        items = data.get("items") or []
        if not items:
            return None
        item = items[0]
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            return None
        snippet = item.get("snippet") or {}
        return {
            "videoId": video_id,
            "title": snippet.get("title"),
            "publishedAt": snippet.get("publishedAt"),
        }

    async def get_video_duration(self, video_id: str) -> Optional[str]:
        data = await self._get("videos", part="contentDetails", id=video_id)
        items = data.get("items") or []
        if not items:
            return None
        return (items[0].get("contentDetails") or {}).get("duration")

    async def get_comments(self, video_id: str, max_results: int = 50) -> list[CommentRecord]:
        """Top-level comments of a video; empty when comments are disabled."""
        try:
            data = await self._get(
                "commentThreads",
                part="snippet",
                videoId=video_id,
                maxResults=max_results,
            )
        except YouTubeAPIError as exc:
            if exc.comments_disabled:
                logger.info("Comments disabled for video %s", video_id)
                return []
            raise

        comments: list[CommentRecord] = []
        for item in data.get("items") or []:
            top = ((item.get("snippet") or {}).get("topLevelComment") or {}).get("snippet") or {}
            comments.append(
                {
                    "author": top.get("authorDisplayName"),
                    "text": top.get("textDisplay"),
                    "publishedAt": top.get("publishedAt"),
                }
            )
        return comments
