"""
Utilities Package

Modules:
    - time: Timestamp conversion used for server times and nonces
"""

from btcid.utils.time import to_utc_datetime, current_utc_timestamp

__all__ = ["to_utc_datetime", "current_utc_timestamp"]
