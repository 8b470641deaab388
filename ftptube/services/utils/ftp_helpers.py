"""Helper functions for composing FTP paths and classifying files."""
import re

TEXT_EXTENSIONS = frozenset({"txt", "md", "js", "ts", "html", "css", "json"})

_FORBIDDEN_NAME_PARTS = ("..", "/", "\\")


def validate_file_name(file_name: str) -> str:
    """Return ``file_name`` unchanged or raise ValueError for unsafe names."""
    if not file_name or not file_name.strip():
        raise ValueError("Missing file name")
    if any(part in file_name for part in _FORBIDDEN_NAME_PARTS):
        raise ValueError("Invalid file name")
    return file_name


def collapse_slashes(path: str) -> str:
    return re.sub(r"/+", "/", path)


def session_base(current_path: str) -> str:
    """Directory prefix used when joining names onto the session path."""
    return "" if current_path in {"", "/"} else current_path


def join_remote_path(current_path: str, name: str) -> str:
    return collapse_slashes(f"{session_base(current_path)}/{name}")


def resolve_folder(current_path: str, path: str) -> str:
    if path.startswith("/"):
        return path
    return join_remote_path(current_path, path)


def display_path(path: str) -> str:
    return path or "/"


def is_text_file(file_name: str) -> bool:
    _, dot, ext = file_name.rpartition(".")
    return bool(dot) and ext.lower() in TEXT_EXTENSIONS
