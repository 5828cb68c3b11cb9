"""
Unit Tests for Private Request Signing

These tests verify:
- Canonical form encoding of method and nonce
- HMAC-SHA512 signatures against a reference computation
- Strictly increasing nonces, including under a frozen or stepping-back clock

Run with:
    pytest tests/unit/test_signing.py -v
"""

import hashlib
import hmac
from concurrent.futures import ThreadPoolExecutor

from btcid import signing
from btcid.signing import NonceGenerator, build_signed_request, encode_form, sign


class TestEncodeForm:
    """Tests for encode_form"""

    def test_keys_are_sorted(self):
        """Verify encoding does not depend on insertion order"""
        assert encode_form({"nonce": "1000", "method": "getInfo"}) == "method=getInfo&nonce=1000"

    def test_values_are_url_encoded(self):
        """Verify reserved characters are escaped"""
        assert encode_form({"method": "a b&c"}) == "method=a+b%26c"


class TestSign:
    """Tests for sign"""

    def test_signature_matches_reference(self):
        """Verify the known vector: secret "hush", method getInfo, nonce 1000"""
        expected = hmac.new(b"hush", b"method=getInfo&nonce=1000", hashlib.sha512).hexdigest()

        assert sign("hush", "method=getInfo&nonce=1000") == expected

    def test_signature_is_lowercase_hex_of_sha512_length(self):
        """Verify the digest is 64 bytes rendered as 128 hex characters"""
        signature = sign("hush", "method=getInfo&nonce=1000")

        assert len(signature) == 128
        assert signature == signature.lower()
        int(signature, 16)

    def test_signature_is_deterministic(self):
        """Verify the same input always signs the same"""
        assert sign(b"hush", "method=getInfo&nonce=1000") == sign("hush", "method=getInfo&nonce=1000")

    def test_signature_depends_on_secret_and_body(self):
        """Verify changing either input changes the signature"""
        base = sign("hush", "method=getInfo&nonce=1000")

        assert sign("other", "method=getInfo&nonce=1000") != base
        assert sign("hush", "method=getInfo&nonce=1001") != base


class TestBuildSignedRequest:
    """Tests for build_signed_request"""

    def test_body_and_headers(self):
        """Verify the body holds exactly method and nonce and headers carry Key and Sign"""
        body, headers = build_signed_request("71239123s", "hush", "getInfo", "1000")

        assert body == "method=getInfo&nonce=1000"
        assert headers["Key"] == "71239123s"
        assert headers["Sign"] == hmac.new(b"hush", body.encode(), hashlib.sha512).hexdigest()
        assert headers["Content-Type"] == "application/x-www-form-urlencoded"


class TestNonceGenerator:
    """Tests for NonceGenerator"""

    def test_nonces_strictly_increase(self):
        """Verify rapid successive calls never repeat or go down"""
        nonces = NonceGenerator()
        values = [int(nonces.next()) for _ in range(1000)]

        assert all(b > a for a, b in zip(values, values[1:]))

    def test_frozen_clock_still_increases(self, monkeypatch):
        """Verify calls within one millisecond get consecutive values"""
        monkeypatch.setattr(signing, "current_utc_timestamp", lambda milliseconds=False: 1700000000000)
        nonces = NonceGenerator()

        assert [nonces.next() for _ in range(3)] == ["1700000000000", "1700000000001", "1700000000002"]

    def test_clock_stepping_back_still_increases(self, monkeypatch):
        """Verify a clock moving backwards does not lower the nonce"""
        ticks = iter([1700000000500, 1700000000000])
        monkeypatch.setattr(signing, "current_utc_timestamp", lambda milliseconds=False: next(ticks))
        nonces = NonceGenerator()

        assert nonces.next() == "1700000000500"
        assert nonces.next() == "1700000000501"

    def test_start_value_is_respected(self, monkeypatch):
        """Verify a generator resumed from a stored nonce continues above it"""
        monkeypatch.setattr(signing, "current_utc_timestamp", lambda milliseconds=False: 5)
        nonces = NonceGenerator(start=10)

        assert nonces.next() == "11"
        assert nonces.last == 11

    def test_nonces_unique_across_threads(self):
        """Verify concurrent callers never receive the same nonce"""
        nonces = NonceGenerator()

        with ThreadPoolExecutor(max_workers=8) as pool:
            values = list(pool.map(lambda _: nonces.next(), range(2000)))

        assert len(set(values)) == len(values)
