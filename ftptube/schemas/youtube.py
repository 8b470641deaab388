"""Schemas for the YouTube scraping endpoints."""
from typing import List, Optional

from pydantic import BaseModel


class Comment(BaseModel):
    author: Optional[str] = None
    text: Optional[str] = None
    publishedAt: Optional[str] = None


class SearchVideo(BaseModel):
    videoId: str
    channelId: Optional[str] = None
    title: Optional[str] = None
    channelTitle: Optional[str] = None
    publishTime: Optional[str] = None
    comments: List[Comment]


class SearchCommentsResponse(BaseModel):
    videos: List[SearchVideo]


class DeepScrapeComment(BaseModel):
    author: Optional[str] = None
    text: Optional[str] = None


class DeepScrapeResponse(BaseModel):
    channelId: str
    channelTitle: Optional[str] = None
    channelAvatar: Optional[str] = None
    videoId: str
    videoTitle: Optional[str] = None
    publishedAt: Optional[str] = None
    comments: List[DeepScrapeComment]


class ShortComments(BaseModel):
    channelId: str
    videoTitle: Optional[str] = None
    videoId: str
    publishedAt: Optional[str] = None
    comments: List[Comment]


class ShortCommentsResponse(BaseModel):
    data: List[ShortComments]
