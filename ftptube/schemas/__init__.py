"""Pydantic schemas exposed by the application API."""
from .ftp import (
    ConnectRequest,
    FileEntry,
    FileListingResponse,
    FileNameRequest,
    ListFolderRequest,
    SessionRequest,
    SessionResponse,
)
from .youtube import (
    Comment,
    DeepScrapeComment,
    DeepScrapeResponse,
    SearchCommentsResponse,
    SearchVideo,
    ShortComments,
    ShortCommentsResponse,
)

__all__ = [
    "ConnectRequest",
    "FileEntry",
    "FileListingResponse",
    "FileNameRequest",
    "ListFolderRequest",
    "SessionRequest",
    "SessionResponse",
    "Comment",
    "DeepScrapeComment",
    "DeepScrapeResponse",
    "SearchCommentsResponse",
    "SearchVideo",
    "ShortComments",
    "ShortCommentsResponse",
]
