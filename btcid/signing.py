"""
Private API Request Signing

Private calls to POST /tapi are authenticated with two headers:

    Key:  the account's API key
    Sign: hex(HMAC-SHA512(secret, url-encoded form body))

The form body carries the private method name and a nonce. The exchange
rejects any nonce that is not larger than the last one it saw for the key,
so NonceGenerator hands out strictly increasing values.

Example:
    >>> body = encode_form({"method": "getInfo", "nonce": "1000"})
    >>> body
    'method=getInfo&nonce=1000'
    >>> len(sign(b"hush", body))
    128
"""

import hashlib
import hmac
import threading
from typing import Dict, Optional, Tuple, Union
from urllib.parse import urlencode

from btcid.utils.time import current_utc_timestamp


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_form(params: Dict[str, str]) -> str:
    """
    URL-encode form parameters in canonical (key-sorted) order.

    The signature covers the exact bytes sent, so the same encoding is
    used for both.
    """
    return urlencode(sorted(params.items()))


def sign(secret: Union[str, bytes], body: str) -> str:
    """
    Compute the Sign header value for an encoded body.

    Args:
        secret: API secret
        body: URL-encoded form body

    Returns:
        Lowercase hex HMAC-SHA512 digest (128 characters)
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    return hmac.new(secret, body.encode("utf-8"), hashlib.sha512).hexdigest()


def build_signed_request(
    api_key: str,
    secret: str,
    method: str,
    nonce: str
) -> Tuple[str, Dict[str, str]]:
    """
    Build the body and headers of a signed private request.

    Args:
        api_key: Value for the Key header
        secret: Secret used for the signature
        method: Private method name (e.g., "getInfo")
        nonce: Decimal nonce string

    Returns:
        Tuple of (encoded body, headers)
    """
    body = encode_form({"method": method, "nonce": nonce})
    headers = {
        "Key": api_key,
        "Sign": sign(secret, body),
        "Content-Type": FORM_CONTENT_TYPE,
    }
    return body, headers


class NonceGenerator:
    """
    Strictly increasing nonce source based on millisecond timestamps.

    When the clock has not moved past the last issued value (several calls
    in the same millisecond, or the clock stepping backwards) the previous
    value plus one is issued instead.

    Attributes:
        last: Last nonce handed out (0 before the first call)
    """

    def __init__(self, start: Optional[int] = None):
        self.last = start or 0
        self._lock = threading.Lock()

    def next(self) -> str:
        """Return the next nonce as a decimal string."""
        with self._lock:
            candidate = current_utc_timestamp(milliseconds=True)
            if candidate <= self.last:
                candidate = self.last + 1
            self.last = candidate
            return str(candidate)
