import ftplib

import pytest
from fastapi.testclient import TestClient

from ftptube.core.config import Settings
from ftptube.main import create_app
from ftptube.services.ftp_service import FTPService
from ftptube.services.registry import ServiceRegistry
from ftptube.services.session_store import SessionStore
from ftptube.services.utils.types import FtpCredentials
from ftptube.services.youtube_client import YouTubeAPIError, YouTubeClient
from ftptube.services.youtube_service import YouTubeService


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFtpServer:
    """In-memory directory tree standing in for a remote FTP server."""

    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.dirs: set[str] = {""}
        self.calls: list[tuple] = []
        self.connections: list["FakeFtpConnection"] = []
        self.fail_on: dict[str, Exception] = {}

    def add_file(self, path: str, data: bytes) -> None:
        self.files[path] = data

    def add_dir(self, path: str) -> None:
        self.dirs.add(path)

    def factory(self, credentials: FtpCredentials) -> "FakeFtpConnection":
        connection = FakeFtpConnection(self, credentials)
        self.connections.append(connection)
        return connection


class FakeFtpConnection:
    def __init__(self, server: FakeFtpServer, credentials: FtpCredentials):
        self.server = server
        self.credentials = credentials
        self.closed = False

    def _maybe_fail(self, op: str) -> None:
        exc = self.server.fail_on.get(op)
        if exc is not None:
            raise exc

    def open(self) -> str:
        self.server.calls.append(("open", self.credentials.host))
        self._maybe_fail("open")
        return "220 ready"

    def list(self, path: str):
        self.server.calls.append(("list", path))
        self._maybe_fail("list")
        base = path.rstrip("/")
        entries = []
        for file_path, data in sorted(self.server.files.items()):
            parent, _, name = file_path.rpartition("/")
            if parent == base:
                entries.append({"name": name, "size": len(data), "type": 1})
        for dir_path in sorted(self.server.dirs):
            parent, _, name = dir_path.rpartition("/")
            if dir_path and parent == base:
                entries.append({"name": name, "size": 0, "type": 2})
        return entries

    def remove(self, path: str) -> None:
        self.server.calls.append(("remove", path))
        self._maybe_fail("remove")
        if path not in self.server.files:
            raise ftplib.error_perm("550 No such file")
        del self.server.files[path]

    def download(self, path: str) -> bytes:
        self.server.calls.append(("download", path))
        self._maybe_fail("download")
        if path not in self.server.files:
            raise ftplib.error_perm("550 No such file")
        return self.server.files[path]

    def upload(self, path: str, data: bytes) -> None:
        self.server.calls.append(("upload", path))
        self._maybe_fail("upload")
        self.server.files[path] = data

    def close(self) -> None:
        self.closed = True


class FakeYouTubeTransport:
    """Route (endpoint, params) pairs to canned JSON payloads."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.channels: dict[str, dict] = {}
        self.latest: dict[str, dict] = {}
        self.durations: dict[str, str] = {}
        self.comments: dict[str, list] = {}
        self.disabled_comments: set[str] = set()
        self.search_items: list[dict] = []
        self.errors: dict[str, YouTubeAPIError] = {}

    def __call__(self, endpoint: str, params: dict) -> dict:
        self.calls.append((endpoint, dict(params)))
        if endpoint in self.errors:
            raise self.errors[endpoint]
        if endpoint == "channels":
            channel = self.channels.get(params["id"])
            return {"items": [channel] if channel else []}
        if endpoint == "search" and "channelId" in params:
            video = self.latest.get(params["channelId"])
            return {"items": [video] if video else []}
        if endpoint == "search":
            return {"items": self.search_items[: params["maxResults"]]}
        if endpoint == "videos":
            duration = self.durations.get(params["id"])
            if duration is None:
                return {"items": []}
            return {"items": [{"contentDetails": {"duration": duration}}]}
        if endpoint == "commentThreads":
            if params["videoId"] in self.disabled_comments:
                raise YouTubeAPIError(
                    403,
                    "The video identified by the <code>videoId</code> parameter has disabled comments.",
                    "commentsDisabled",
                )
            return {"items": self.comments.get(params["videoId"], [])}
        raise AssertionError(f"unexpected endpoint {endpoint}")

    def add_channel(self, channel_id: str, title: str, avatar: str = "https://img/avatar.jpg") -> None:
        self.channels[channel_id] = {
            "id": channel_id,
            "snippet": {"title": title, "thumbnails": {"default": {"url": avatar}}},
        }

    def add_latest_video(self, channel_id: str, video_id: str, title: str, duration: str | None = None) -> None:
        self.latest[channel_id] = {
            "id": {"kind": "youtube#video", "videoId": video_id},
            "snippet": {"title": title, "publishedAt": "2024-05-01T10:00:00Z", "channelId": channel_id},
        }
        if duration is not None:
            self.durations[video_id] = duration

    def add_comment(self, video_id: str, author: str, text: str) -> None:
        self.comments.setdefault(video_id, []).append(
            {
                "snippet": {
                    "topLevelComment": {
                        "snippet": {
                            "authorDisplayName": author,
                            "textDisplay": text,
                            "publishedAt": "2024-05-02T08:00:00Z",
                        }
                    }
                }
            }
        )

    def add_search_result(self, video_id: str | None, channel_id: str, title: str) -> None:
        item_id = {"kind": "youtube#video"}
        if video_id:
            item_id["videoId"] = video_id
        self.search_items.append(
            {
                "id": item_id,
                "snippet": {
                    "channelId": channel_id,
                    "title": title,
                    "channelTitle": f"{channel_id} channel",
                    "publishTime": "2024-05-01T10:00:00Z",
                },
            }
        )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        youtube_api_key="test-key",
        session_sweep_interval=0,
        log_level="WARNING",
    )


@pytest.fixture
def session_store(clock):
    return SessionStore(3600, clock=clock)


@pytest.fixture
def ftp_server():
    return FakeFtpServer()


@pytest.fixture
def ftp_service(session_store, ftp_server):
    return FTPService(session_store, connection_factory=ftp_server.factory)


@pytest.fixture
def youtube_transport():
    return FakeYouTubeTransport()


@pytest.fixture
def youtube_client(youtube_transport):
    return YouTubeClient("test-key", transport=youtube_transport)


@pytest.fixture
def youtube_service(youtube_client):
    return YouTubeService(youtube_client)


@pytest.fixture
def registry(settings, session_store, ftp_service, youtube_service):
    return ServiceRegistry(
        settings,
        session_store=session_store,
        ftp_service=ftp_service,
        youtube_service=youtube_service,
    )


@pytest.fixture
def app(settings, registry):
    return create_app(settings, registry=registry)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def credentials():
    return FtpCredentials(host="ftp.example.com", user="alice", password="secret", port=21)
