"""
FTP browser service
- Every operation opens its own short-lived connection from stored credentials
- Listing-affecting operations re-list and mint a fresh session token
- ftplib calls run in a worker thread so the event loop stays free
"""

import asyncio
import ftplib
import logging
from typing import Callable, Optional, TypeVar

from ftptube.core.exceptions import BadRequestError, UnauthorizedError
from ftptube.services.session_store import FileSession, SessionStore
from ftptube.services.utils.errors import normalize_ftp_error
from ftptube.services.utils.ftp_client import ConnectionFactory, FtpConnection
from ftptube.services.utils.ftp_helpers import (
	collapse_slashes,
	display_path,
	join_remote_path,
	resolve_folder,
	session_base,
	validate_file_name,
)
from ftptube.services.utils.types import FileEntry, FtpCredentials

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FTPService:
	def __init__(
		self,
		store: SessionStore,
		*,
		timeout: float = 30.0,
		connection_factory: Optional[ConnectionFactory] = None,
	):
		self._store = store
		self._timeout = timeout
		self._connection_factory = connection_factory or self._default_connection

	def _default_connection(self, credentials: FtpCredentials) -> FtpConnection:
		return FtpConnection(credentials, timeout=self._timeout)

	# -------------------------
	# helpers
	# -------------------------
	def require_session(self, token: str) -> FileSession:
		session = self._store.get(token) if token else None
		if session is None or session.credentials is None:
			raise UnauthorizedError("Invalid or expired session")
		return session

	@staticmethod
	def _checked_name(file_name: str) -> str:
		try:
			return validate_file_name(file_name)
		except ValueError as exc:
			raise BadRequestError(str(exc)) from exc

	def _with_connection(self, credentials: FtpCredentials, operation: Callable[[FtpConnection], T]) -> T:
		connection = self._connection_factory(credentials)
		try:
			connection.open()
			return operation(connection)
		finally:
			connection.close()

	async def _run(
		self,
		credentials: FtpCredentials,
		operation: Callable[[FtpConnection], T],
		*,
		failure: str,
	) -> T:
		try:
			return await asyncio.to_thread(self._with_connection, credentials, operation)
		except (ftplib.Error, OSError, EOFError) as exc:
			logger.warning("%s on %s:%s: %s", failure, credentials.host, credentials.port, exc)
			raise normalize_ftp_error(exc, fallback=failure) from exc

	# -------------------------
	# operations
	# -------------------------
	async def connect(self, credentials: FtpCredentials, path: str = "/") -> str:
		target = collapse_slashes(path or "/")
		files = await self._run(
			credentials,
			lambda conn: conn.list(target),
			failure="Failed to fetch files from FTP server",
		)
		return self._store.create(files, credentials, target)

	async def list_folder(self, token: str, path: str) -> str:
		session = self.require_session(token)
		target = resolve_folder(session.current_path, path)
		logger.info("Listing path: %s", target)
		files = await self._run(
			session.credentials,
			lambda conn: conn.list(target),
			failure="Failed to fetch folder contents",
		)
		return self._store.create(files, session.credentials, target)

	async def delete(self, token: str, file_name: str) -> str:
		name = self._checked_name(file_name)
		session = self.require_session(token)
		base = session_base(session.current_path)
		remote_path = join_remote_path(session.current_path, name)

		def _delete_and_list(conn: FtpConnection) -> list[FileEntry]:
			logger.info("Deleting file: %s", remote_path)
			conn.remove(remote_path)
			return conn.list(base)

		files = await self._run(session.credentials, _delete_and_list, failure="Failed to delete file")
		return self._store.create(files, session.credentials, display_path(base))

	async def read(self, token: str, file_name: str) -> bytes:
		name = self._checked_name(file_name)
		session = self.require_session(token)
		remote_path = join_remote_path(session.current_path, name)

		def _download(conn: FtpConnection) -> bytes:
			logger.info("Reading file: %s", remote_path)
			data = conn.download(remote_path)
			logger.debug("Downloaded %d bytes from %s", len(data), remote_path)
			return data

		return await self._run(session.credentials, _download, failure="Failed to read file")

	async def upload(self, token: str, file_name: str, data: bytes) -> str:
		name = self._checked_name(file_name)
		session = self.require_session(token)
		base = session_base(session.current_path)
		remote_path = join_remote_path(session.current_path, name)

		def _upload_and_list(conn: FtpConnection) -> list[FileEntry]:
			logger.info("Uploading %d bytes to: %s", len(data), remote_path)
			conn.upload(remote_path, data)
			return conn.list(base)

		files = await self._run(session.credentials, _upload_and_list, failure="Failed to upload file")
		return self._store.create(files, session.credentials, display_path(base))

	def files(self, token: str) -> list[FileEntry]:
		session = self._store.get(token) if token else None
		if session is None:
			raise UnauthorizedError("Invalid or expired session")
		return session.files
