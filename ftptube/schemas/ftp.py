"""Schemas for FTP browser endpoints."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    """Single file/folder entry representation (type 1 = file, 2 = directory)."""

    name: str
    size: int = 0
    type: Literal[1, 2]


class ConnectRequest(BaseModel):
    host: str = Field(..., min_length=1)
    user: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    port: int = Field(..., ge=1, le=65535)
    path: Optional[str] = "/"


class SessionRequest(BaseModel):
    """Base for requests scoped to an existing session token."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId", min_length=1)


class ListFolderRequest(SessionRequest):
    path: str = Field(..., min_length=1)


class FileNameRequest(SessionRequest):
    file_name: str = Field(..., alias="fileName", min_length=1)


class SessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., serialization_alias="sessionId")


class FileListingResponse(BaseModel):
    files: List[FileEntry]
