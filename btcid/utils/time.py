"""
Time Utilities

The exchange reports times as epoch seconds (e.g., "server_time" in getInfo)
while signed requests need a nonce that grows faster than once a second.
to_utc_datetime reads the former, current_utc_timestamp feeds the latter.
"""

from datetime import datetime, timezone
from typing import Union


def to_utc_datetime(seconds: Union[int, float]) -> datetime:
    """
    Convert epoch seconds (as in getInfo "server_time") to a UTC datetime.

    Raises:
        ValueError: If the value is negative or out of range

    Example:
        >>> to_utc_datetime(1704110400)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
    """
    if seconds < 0:
        raise ValueError(f"Timestamp cannot be negative: {seconds}")

    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OSError, OverflowError, ValueError) as e:
        raise ValueError(f"Invalid timestamp: {seconds}. Error: {e}") from e


def current_utc_timestamp(milliseconds: bool = False) -> int:
    """
    Get current UTC timestamp.

    Args:
        milliseconds: If True, return milliseconds; if False, return seconds

    Returns:
        int: Current Unix timestamp

    Examples:
        >>> current_utc_timestamp()
        1704110400

        >>> current_utc_timestamp(milliseconds=True)
        1704110400123
    """
    now = datetime.now(timezone.utc).timestamp()
    if milliseconds:
        return int(now * 1000)
    return int(now)
