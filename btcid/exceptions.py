"""
Exception Hierarchy for the Bitcoin.co.id Client

Every operation on BtcidAPIClient raises one of these errors instead of
returning an empty result, so callers can tell apart:

    TransportError - the request never completed (network, timeout, bad URL)
    DecodeError    - a response arrived but is not the expected JSON shape
    ExchangeError  - the exchange answered and reported a failure

Usage:
    from btcid.exceptions import BtcidError, ExchangeError

    try:
        info = await client.get_info()
    except ExchangeError as e:
        logger.error(f"Exchange rejected request: {e} (code={e.error_code}, http={e.status})")
    except BtcidError as e:
        logger.error(f"Request failed: {e}")
"""

from typing import Optional


class BtcidError(Exception):
    """Base class for all client errors."""


class TransportError(BtcidError):
    """Connection, timeout or body-read failure."""


class DecodeError(BtcidError):
    """
    Response body does not parse into the expected structure.

    Attributes:
        body: Raw response bytes that failed to decode
    """

    def __init__(self, message: str, body: bytes = b""):
        super().__init__(message)
        self.body = body


class ExchangeError(BtcidError):
    """
    The exchange reported a failure in its response.

    Attributes:
        error_code: Exchange error code (e.g., "invalid_credentials"), if given
        status: HTTP status of the response that carried the error
    """

    def __init__(self, message: str, error_code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.error_code = error_code
        self.status = status
