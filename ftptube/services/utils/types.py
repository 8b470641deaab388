# ftptube/services/utils/types.py
from dataclasses import dataclass
from typing import Literal, TypedDict

FILE_TYPE_FILE: Literal[1] = 1
FILE_TYPE_DIRECTORY: Literal[2] = 2


class FileEntry(TypedDict):
    name: str
    size: int
    type: Literal[1, 2]


@dataclass(frozen=True)
class FtpCredentials:
    host: str
    user: str
    password: str
    port: int


class CommentRecord(TypedDict, total=False):
    author: str
    text: str
    publishedAt: str


class VideoRecord(TypedDict):
    videoId: str
    title: str
    publishedAt: str
