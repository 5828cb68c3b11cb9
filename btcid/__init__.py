"""
btcid - async client for the Bitcoin.co.id (Indodax) HTTP API

Exposes the public market data endpoints (ticker, trades, depth) and the
signed private getInfo endpoint.

Usage:
    from btcid import BtcidAPIClient

    async with BtcidAPIClient(api_key, secret) as client:
        ticker = await client.get_ticker()
"""

from btcid.api_client import BtcidAPIClient
from btcid.exceptions import BtcidError, DecodeError, ExchangeError, TransportError
from btcid.schemas import Depth, InfoResponse, PrivateMethod, Ticker, Trade, TradingPair, UserInfo

__all__ = [
    "BtcidAPIClient",
    "BtcidError",
    "DecodeError",
    "ExchangeError",
    "TransportError",
    "Depth",
    "InfoResponse",
    "PrivateMethod",
    "Ticker",
    "Trade",
    "TradingPair",
    "UserInfo",
]
