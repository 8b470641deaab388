import contextlib
import ftplib
import io
import logging
import re
from typing import Callable, Optional

from ftptube.services.utils.types import (
	FILE_TYPE_DIRECTORY,
	FILE_TYPE_FILE,
	FileEntry,
	FtpCredentials,
)

logger = logging.getLogger(__name__)

_DOS_LINE = re.compile(
	r"^(\d{2})-(\d{2})-(\d{2,4})\s+(\d{1,2}:\d{2})\s*(AM|PM)?\s+(<DIR>|[\d,]+)\s+(.+)$",
	re.IGNORECASE,
)

_UNIX_PERMS = re.compile(r"^[-dlbcps][-rwxsStT]{9}[+@.]?$")
# size, then "Mon DD HH:MM" or "Mon DD YYYY", then the name; the group column may be absent
_UNIX_TAIL = re.compile(
	r"\s(?P<size>\d+)\s+(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d{1,2}\s+(?:\d{1,2}:\d{2}|\d{4})\s+(?P<name>.+)$",
	re.IGNORECASE,
)


def parse_list_line(line: str) -> Optional[FileEntry]:
	"""Parse one line of LIST output (Unix or DOS flavour)."""
	line = line.strip()
	if not line:
		return None

	dos_match = _DOS_LINE.match(line)
	if dos_match:
		size_or_dir, name = dos_match.group(6), dos_match.group(7)
		if size_or_dir.upper() == "<DIR>":
			return _entry(name, 0, FILE_TYPE_DIRECTORY)
		try:
			size_value = int(size_or_dir.replace(",", ""))
		except ValueError:
			size_value = 0
		return _entry(name, size_value, FILE_TYPE_FILE)

	parts = line.split()
	if len(parts) == 2 and parts[0].lower() == "total":
		return None
	unix_match = _UNIX_TAIL.search(line) if _UNIX_PERMS.match(parts[0]) else None
	if unix_match:
		perms = parts[0]
		name = unix_match.group("name")
		if perms.startswith("l") and " -> " in name:
			name = name.split(" -> ", 1)[0]
		size_value = int(unix_match.group("size"))
		if perms.startswith("-"):
			return _entry(name, size_value, FILE_TYPE_FILE)
		return _entry(name, 0, FILE_TYPE_DIRECTORY)

	return _entry(line, 0, FILE_TYPE_FILE)


def _entry(name: str, size: int, kind) -> Optional[FileEntry]:
	if name in {".", ".."}:
		return None
	return {"name": name, "size": size, "type": kind}


class FtpConnection:
	"""One short-lived plain FTP session: open, a few commands, close."""

	def __init__(self, credentials: FtpCredentials, *, timeout: float = 30.0) -> None:
		self._credentials = credentials
		self._timeout = timeout
		self._ftp = ftplib.FTP()

	def open(self) -> str:
		creds = self._credentials
		greeting = self._ftp.connect(host=creds.host, port=creds.port, timeout=self._timeout)
		self._ftp.login(creds.user, creds.password)
		logger.info("Connected to FTP server %s:%s", creds.host, creds.port)
		return greeting

	def list(self, path: str) -> list[FileEntry]:
		lines: list[str] = []
		command = f"LIST {path}" if path else "LIST"
		self._ftp.retrlines(command, lines.append)
		entries = [entry for entry in (parse_list_line(line) for line in lines) if entry]
		logger.debug("Listed %s: %d entries", path or "/", len(entries))
		return entries

	def remove(self, path: str) -> None:
		self._ftp.delete(path)

	def download(self, path: str) -> bytes:
		buffer = io.BytesIO()
		self._ftp.retrbinary(f"RETR {path}", buffer.write)
		return buffer.getvalue()

	def upload(self, path: str, data: bytes) -> None:
		self._ftp.storbinary(f"STOR {path}", io.BytesIO(data))

	def close(self) -> None:
		if self._ftp.sock is None:
			return
		try:
			self._ftp.quit()
		except ftplib.all_errors:
			with contextlib.suppress(OSError):
				self._ftp.close()


ConnectionFactory = Callable[[FtpCredentials], FtpConnection]
