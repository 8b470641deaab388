"""ISO-8601 duration helpers for the short-video filter."""
import re
from typing import Optional

SHORT_VIDEO_MAX_SECONDS = 60

_DURATION = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$")


def parse_duration(value: Optional[str]) -> Optional[int]:
    """Return the total seconds of ``PT#H#M#S`` style strings, or None."""
    if not value:
        return None
    match = _DURATION.match(value.strip())
    if not match or value.strip() in {"P", "PT"}:
        return None
    days, hours, minutes, seconds = (int(part or 0) for part in match.groups())
    return ((days * 24 + hours) * 60 + minutes) * 60 + seconds


def is_short_duration(value: Optional[str]) -> bool:
    total = parse_duration(value)
    return total is not None and total < SHORT_VIDEO_MAX_SECONDS
