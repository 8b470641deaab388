"""In-memory store mapping opaque tokens to FTP file sessions."""
from __future__ import annotations

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

from ftptube.core.config import DEFAULT_SESSION_TTL
from ftptube.services.utils.types import FileEntry, FtpCredentials

logger = logging.getLogger(__name__)


@dataclass
class FileSession:
    """Snapshot of one directory listing plus what is needed to refresh it."""

    files: list[FileEntry]
    credentials: Optional[FtpCredentials]
    current_path: str
    expires: float = field(default=0.0)


class SessionStore:
    """Process-wide token -> FileSession map with lazy expiry.

    Sessions are never updated in place. Every successful listing mints a new
    token; superseded tokens stay readable until they expire.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_SESSION_TTL,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._sessions: dict[str, FileSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(
        self,
        files: list[FileEntry],
        credentials: Optional[FtpCredentials],
        path: str,
        ttl: Optional[float] = None,
    ) -> str:
        token = str(uuid.uuid4())
        lifetime = self._default_ttl if ttl is None else ttl
        session = FileSession(
            files=list(files),
            credentials=credentials,
            current_path=path,
            expires=self._clock() + lifetime,
        )
        with self._lock:
            self._sessions[token] = session
        logger.debug("Created session %s for %s (%d entries)", token, path, len(session.files))
        return token

    def get(self, token: str) -> Optional[FileSession]:
        with self._lock:
            session = self._sessions.get(token)
            if session is None or self._clock() > session.expires:
                self._sessions.pop(token, None)
                return None
            return session

    def sweep(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [token for token, session in self._sessions.items() if now > session.expires]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.info("Swept %d expired session(s)", len(expired))
        return len(expired)
