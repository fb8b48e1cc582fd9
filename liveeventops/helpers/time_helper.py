"""Time utility helpers."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def now_ms() -> int:
    """
    Get current timestamp in milliseconds since epoch.

    Returns:
        Current time as integer milliseconds
    """
    return int(time.time() * 1000)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time in the provider's ``YYYY-mm-ddTHH:MM:SSZ`` form."""
    return utc_now().strftime(ISO_FORMAT)


def to_iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(ISO_FORMAT)


def window_bounds(window_minutes: int, end: datetime | None = None) -> tuple[str, str]:
    """
    Compute the (start, end) ISO timestamps for a look-back window.

    Args:
        window_minutes: Length of the window ending at ``end``
        end: Window end (defaults to now, UTC)

    Returns:
        Tuple of ISO-8601 UTC strings
    """
    end = end or utc_now()
    start = end - timedelta(minutes=window_minutes)
    return to_iso(start), to_iso(end)


def output_dir_stamp() -> str:
    """Local-time stamp used for default diagnostics directory names."""
    return datetime.now().strftime("%Y%m%d-%H%M%S")
