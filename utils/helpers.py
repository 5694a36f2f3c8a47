"""
Helper utilities for HASS Alert CLI
"""

from datetime import datetime
from typing import Iterable, Optional, Union

import pytz


def format_mention(user_id: str) -> str:
    """Format a chat mention for the given user id"""
    return f"<@{user_id}>"


def format_roles(roles: Iterable[str]) -> str:
    """Format a role collection as a sorted, comma-separated list"""
    ordered = sorted(str(role) for role in roles)
    return ", ".join(ordered) if ordered else "-"


def parse_roles(value: Optional[str]) -> frozenset:
    """Parse a comma-separated role list, ignoring blanks"""
    if not value:
        return frozenset()
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def mask_secret(value: str, visible: int = 2) -> str:
    """Mask all but the first characters of a secret such as a disable code"""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)


def format_timestamp(timestamp: Union[str, float, int, None],
                     timezone: str = "UTC") -> str:
    """Format an epoch timestamp to readable date/time"""
    if timestamp in (None, ""):
        return "-"
    try:
        if isinstance(timestamp, str):
            if not timestamp.replace(".", "", 1).isdigit():
                return timestamp
            timestamp = float(timestamp)

        dt = datetime.fromtimestamp(float(timestamp), tz=pytz.UTC)

        if timezone != "UTC":
            dt = dt.astimezone(pytz.timezone(timezone))

        return dt.strftime("%Y-%m-%d %H:%M:%S %Z")
    except (ValueError, TypeError, OSError, pytz.UnknownTimeZoneError):
        return str(timestamp)
