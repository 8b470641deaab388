"""Service error normalization helpers."""
from __future__ import annotations

from ftptube.core.exceptions import DomainError, InternalError


def normalize_ftp_error(exc: Exception, *, fallback: str = "FTP operation failed") -> DomainError:
    """Map an ftplib/socket failure onto a generic 500 chained to its cause."""
    if isinstance(exc, DomainError):
        return exc
    error = InternalError(fallback)
    error.__cause__ = exc
    return error


def normalize_youtube_error(exc: Exception, *, fallback: str = "Internal Server Error") -> DomainError:
    if isinstance(exc, DomainError):
        return exc
    error = InternalError(fallback)
    error.__cause__ = exc
    return error
