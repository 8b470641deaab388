"""Composite YouTube lookups backing the comment scraping endpoints."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Optional, Sequence, TypeVar

from ftptube.core.exceptions import NotFoundError
from ftptube.services.utils.durations import is_short_duration
from ftptube.services.youtube_client import YouTubeClient

logger = logging.getLogger(__name__)

COMMENTS_PER_VIDEO = 20

T = TypeVar("T")


async def gather_or_cancel(aws: Sequence[Awaitable[T]]) -> list[T]:
    """Run ``aws`` concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class YouTubeService:
    """Chains client calls into the records the search UI renders."""

    def __init__(self, client: YouTubeClient, *, comments_per_video: int = COMMENTS_PER_VIDEO) -> None:
        self._client = client
        self._comments_per_video = comments_per_video

    async def search_with_comments(self, query: str, count: int) -> list[dict[str, Any]]:
        videos = await self._client.search_videos(query, count)
        comment_lists = await gather_or_cancel(
            [self._client.get_comments(video["videoId"], self._comments_per_video) for video in videos]
        )
        return [
            {**video, "comments": comments}
            for video, comments in zip(videos, comment_lists)
        ]

    async def deep_scrape(self, channel_id: str) -> dict[str, Any]:
        channel = await self._client.get_channel(channel_id)
        if channel is None:
            raise NotFoundError("Channel not found")

        video = await self._client.get_latest_video(channel_id)
        if video is None:
            raise NotFoundError("No videos found for this channel")

        comments = await self._client.get_comments(video["videoId"], self._comments_per_video)
        return {
            "channelId": channel_id,
            "channelTitle": channel["title"],
            "channelAvatar": channel["avatar"],
            "videoId": video["videoId"],
            "videoTitle": video["title"],
            "publishedAt": video["publishedAt"],
            "comments": [{"author": c.get("author"), "text": c.get("text")} for c in comments],
        }

    async def is_short_video(self, video_id: str) -> bool:
        duration = await self._client.get_video_duration(video_id)
        return is_short_duration(duration)

    async def _latest_short_with_comments(self, channel_id: str) -> Optional[dict[str, Any]]:
        video = await self._client.get_latest_video(channel_id)
        if video is None:
            logger.debug("Channel %s has no videos, skipping", channel_id)
            return None
        if not await self.is_short_video(video["videoId"]):
            logger.debug("Latest video %s of %s is not a short, skipping", video["videoId"], channel_id)
            return None
        comments = await self._client.get_comments(video["videoId"], self._comments_per_video)
        return {
            "channelId": channel_id,
            "videoTitle": video["title"],
            "videoId": video["videoId"],
            "publishedAt": video["publishedAt"],
            "comments": comments,
        }

    async def short_comments(self, channel_ids: Sequence[str]) -> list[dict[str, Any]]:
        results = await gather_or_cancel(
            [self._latest_short_with_comments(channel_id) for channel_id in channel_ids]
        )
        return [result for result in results if result is not None]
