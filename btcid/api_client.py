"""
Bitcoin.co.id REST API Client

This module provides an async HTTP client for the Bitcoin.co.id exchange API.
It handles:
- Public market data requests (GET /api/{pair}/...)
- Signed private requests (POST /tapi)
- Error handling and logging
- Decoding responses to our schemas

Errors:
    Every method raises instead of returning empty data:
    - TransportError: request could not be completed
    - DecodeError: response is not the expected JSON shape
    - ExchangeError: exchange reported a failure (e.g., success=0)

Usage:
    async with BtcidAPIClient(api_key, secret) as client:
        ticker = await client.get_ticker()
        info = await client.get_info()
"""

import aiohttp
import asyncio
import json
import time
from typing import Any, List, NamedTuple, Optional, Type, TypeVar, Union
from pydantic import BaseModel, TypeAdapter, ValidationError

from btcid.config import Settings, settings
from btcid.exceptions import DecodeError, ExchangeError, TransportError
from btcid.logging import get_logger, log_api_request, log_api_response
from btcid.schemas import (
    Depth,
    InfoResponse,
    PrivateMethod,
    Ticker,
    TickerEnvelope,
    Trade,
    TradingPair,
    UserInfo,
)
from btcid.signing import NonceGenerator, build_signed_request


ModelT = TypeVar("ModelT", bound=BaseModel)

_TRADES_ADAPTER = TypeAdapter(List[Trade])


class RawResponse(NamedTuple):
    """Undecoded reply: body bytes plus the HTTP status they came with."""
    body: bytes
    status: int


class BtcidAPIClient:
    """
    Async HTTP client for the Bitcoin.co.id API

    Attributes:
        BASE_URL: Production host
        api_key: API key sent in the Key header of private calls
        secret: Secret used to sign private calls
        domain: Base URL used for every request
        session: aiohttp ClientSession used as transport
        nonces: Nonce source for private calls
        logger: Logger instance for debugging

    Example:
        >>> async with BtcidAPIClient("key", "secret") as client:
        ...     ticker = await client.get_ticker()
        ...     print(f"Last BTC/IDR: {ticker.last}")

    Notes:
        - A session passed in is used as is and never closed by the client
        - Without one, a session is created on enter and closed on exit
        - No retries; each method is a single request/response round trip
    """

    BASE_URL = "https://vip.bitcoin.co.id"
    PUBLIC_PATH = "/api"
    PRIVATE_PATH = "/tapi"

    def __init__(
        self,
        api_key: str = "",
        secret: str = "",
        session: Optional[aiohttp.ClientSession] = None,
        domain: str = BASE_URL,
        request_timeout: int = 30
    ):
        """
        Initialize the client.

        Args:
            api_key: API key (only needed for private endpoints)
            secret: API secret (only needed for private endpoints)
            session: Optional shared aiohttp session
            domain: Base URL of the exchange
            request_timeout: Total timeout of the default session, in seconds
        """
        self.api_key = api_key
        self.secret = secret
        self.domain = domain.rstrip("/")
        self.request_timeout = request_timeout
        self.session: Optional[aiohttp.ClientSession] = session
        self._owns_session = False
        self.nonces = NonceGenerator()
        self.logger = get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        config: Settings = settings,
        session: Optional[aiohttp.ClientSession] = None
    ) -> "BtcidAPIClient":
        """
        Build a client from configuration (.env / environment).

        Args:
            config: Settings instance (defaults to the global settings)
            session: Optional shared aiohttp session

        Returns:
            Configured BtcidAPIClient
        """
        return cls(
            api_key=config.btcid_api_key,
            secret=config.btcid_secret_key,
            session=session,
            domain=config.btcid_base_url,
            request_timeout=config.request_timeout
        )

    # ============================================
    # Context Manager for Session Management
    # ============================================

    async def __aenter__(self):
        """
        Enter async context - creates the default HTTP session if none was given.

        Returns:
            Self for use in async with statement
        """
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.request_timeout)
            )
            self._owns_session = True
            self.logger.debug("BtcidAPIClient session created")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit async context - closes the session if this client created it.
        """
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None
            self._owns_session = False
            self.logger.debug("BtcidAPIClient session closed")

    # ============================================
    # Request Builders
    # ============================================

    async def _get(self, endpoint: str) -> RawResponse:
        """
        Send an unauthenticated GET to {domain}/api{endpoint}.

        Args:
            endpoint: Path below /api (e.g., "/btc_idr/ticker")

        Returns:
            RawResponse with body and HTTP status

        Raises:
            RuntimeError: If no session is available
            TransportError: If the request or body read fails

        Notes:
            The HTTP status is logged and handed back with the body; it does
            not fail the request by itself.
        """
        url = f"{self.domain}{self.PUBLIC_PATH}{endpoint}"
        return await self._send("GET", url)

    async def _post(self, method: Union[PrivateMethod, str]) -> RawResponse:
        """
        Send a signed POST to {domain}/tapi.

        The form body holds exactly `method` and `nonce`; it is signed with
        HMAC-SHA512 and sent with the Key and Sign headers.

        Args:
            method: Private method name (e.g., "getInfo")

        Returns:
            RawResponse with body and HTTP status

        Raises:
            RuntimeError: If no session is available
            TransportError: If the request or body read fails
        """
        method_name = method.value if isinstance(method, PrivateMethod) else method
        nonce = self.nonces.next()
        body, headers = build_signed_request(self.api_key, self.secret, method_name, nonce)

        url = f"{self.domain}{self.PRIVATE_PATH}"
        return await self._send(
            "POST",
            url,
            data=body,
            headers=headers,
            log_params={"method": method_name, "nonce": nonce}
        )

    async def _send(self, http_method: str, url: str, log_params: Optional[dict] = None, **kwargs: Any) -> RawResponse:
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' statement.")

        log_api_request(http_method, url, log_params)
        started = time.monotonic()

        try:
            async with self.session.request(http_method, url, **kwargs) as resp:
                body = await resp.read()
                status = resp.status

        except asyncio.TimeoutError as e:
            self.logger.error(f"Timeout on {http_method} {url}")
            raise TransportError(f"Timeout on {http_method} {url}") from e

        except (aiohttp.ClientError, ValueError) as e:
            self.logger.error(f"Request failed on {http_method} {url}: {e}")
            raise TransportError(f"Request failed on {http_method} {url}: {e}") from e

        log_api_response(http_method, url, status, time.monotonic() - started)
        if status != 200:
            self.logger.warning(f"HTTP {status} on {http_method} {url}")

        return RawResponse(body, status)

    # ============================================
    # Response Decoding
    # ============================================

    def _load_json(self, body: bytes, what: str) -> Any:
        try:
            return json.loads(body)
        except ValueError as e:
            self.logger.error(f"Invalid JSON in {what} response: {e}")
            raise DecodeError(f"Invalid JSON in {what} response: {e}", body) from e

    def _raise_for_public_error(self, data: Any, what: str, status: int) -> None:
        # Public endpoints answer unknown pairs and outages with {"error": "..."}
        if isinstance(data, dict) and "error" in data:
            message = str(data["error"])
            self.logger.error(f"Exchange error on {what}: {message}")
            raise ExchangeError(message, data.get("error_code"), status)

    def _validate(self, model: Type[ModelT], data: Any, body: bytes, what: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            self.logger.error(f"Unexpected {what} response shape: {e}")
            raise DecodeError(f"Unexpected {what} response shape: {e}", body) from e

    @staticmethod
    def _pair_name(pair: Union[TradingPair, str]) -> str:
        return pair.value if isinstance(pair, TradingPair) else str(pair).lower()

    # ============================================
    # Public API Methods
    # ============================================

    async def get_ticker(self, pair: Union[TradingPair, str] = TradingPair.BTC_IDR) -> Ticker:
        """
        Fetch the latest ticker for a pair.

        Args:
            pair: Trading pair (default "btc_idr")

        Returns:
            Ticker object

        Raises:
            TransportError, DecodeError, ExchangeError

        Endpoint:
            GET /api/{pair}/ticker

        Response Format:
            {"ticker": {"high": "...", "low": "...", "last": "...", "buy": "...", "sell": "..."}}
        """
        pair = self._pair_name(pair)
        self.logger.info(f"Fetching ticker: {pair}")

        body, status = await self._get(f"/{pair}/ticker")
        data = self._load_json(body, "ticker")
        self._raise_for_public_error(data, "ticker", status)

        return self._validate(TickerEnvelope, data, body, "ticker").ticker

    async def get_trades(self, pair: Union[TradingPair, str] = TradingPair.BTC_IDR) -> List[Trade]:
        """
        Fetch the latest market trades for a pair.

        Args:
            pair: Trading pair (default "btc_idr")

        Returns:
            List of Trade objects (empty if the market had no trades)

        Raises:
            TransportError, DecodeError, ExchangeError

        Endpoint:
            GET /api/{pair}/trades

        Response Format:
            [{"date": "...", "price": "...", "amount": "...", "tid": "...", "type": "buy"}]
        """
        pair = self._pair_name(pair)
        self.logger.info(f"Fetching trades: {pair}")

        body, status = await self._get(f"/{pair}/trades")
        data = self._load_json(body, "trades")
        self._raise_for_public_error(data, "trades", status)

        try:
            trades = _TRADES_ADAPTER.validate_python(data)
        except ValidationError as e:
            self.logger.error(f"Unexpected trades response shape: {e}")
            raise DecodeError(f"Unexpected trades response shape: {e}", body) from e

        self.logger.info(f"Fetched {len(trades)} trades for {pair}")
        return trades

    async def get_depth(self, pair: Union[TradingPair, str] = TradingPair.BTC_IDR) -> Depth:
        """
        Fetch order book depth for a pair.

        Args:
            pair: Trading pair (default "btc_idr")

        Returns:
            Depth object with buy and sell sides

        Raises:
            TransportError, DecodeError, ExchangeError

        Endpoint:
            GET /api/{pair}/depth

        Response Format:
            {"buy": [[price, amount], ...], "sell": [[price, amount], ...]}
        """
        pair = self._pair_name(pair)
        self.logger.info(f"Fetching depth: {pair}")

        body, status = await self._get(f"/{pair}/depth")
        data = self._load_json(body, "depth")
        self._raise_for_public_error(data, "depth", status)

        depth = self._validate(Depth, data, body, "depth")
        self.logger.info(f"Fetched depth for {pair}: {len(depth.buy)} bids, {len(depth.sell)} asks")
        return depth

    # ============================================
    # Private API Methods
    # ============================================

    async def get_info(self) -> UserInfo:
        """
        Fetch account information (balances, addresses, profile).

        Returns:
            UserInfo object

        Raises:
            TransportError, DecodeError
            ExchangeError: If the exchange answers with success != 1

        Endpoint:
            POST /tapi with method=getInfo

        Response Format:
            {"success": 1, "return": {"balance": {...}, "balance_hold": {...}, "address": {...},
                                      "user_id": "...", "server_time": 1700000000, ...}}
            {"success": 0, "error": "Invalid credentials.", "error_code": "invalid_credentials"}
        """
        self.logger.info("Fetching account info")

        body, status = await self._post(PrivateMethod.GET_INFO)
        data = self._load_json(body, "getInfo")

        # Failure replies may carry any "return" value, often []
        if isinstance(data, dict) and "success" in data and str(data["success"]) != "1":
            message = str(data.get("error") or f"getInfo failed (success={data['success']})")
            error_code = data.get("error_code")
            self.logger.error(f"Exchange error on getInfo: {message}")
            raise ExchangeError(
                message,
                str(error_code) if error_code is not None else None,
                status
            )

        envelope = self._validate(InfoResponse, data, body, "getInfo")
        return envelope.return_
