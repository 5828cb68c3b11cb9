"""
Response Schemas

This module defines Pydantic models for every response the client decodes.
Each operation validates the raw body against exactly one of these shapes,
so a body that does not match surfaces as a DecodeError instead of an
empty object.

Models:
    - Ticker: Latest price summary for a pair
    - Trade: One entry of the public trade history
    - Depth: Order book with buy and sell sides
    - UserInfo: Account balances, deposit addresses and profile
    - InfoResponse: {success, return} envelope of private calls

Constants:
    - TradingPair: Pairs the public endpoints accept
    - PrivateMethod: Method names accepted by POST /tapi
"""

from decimal import Decimal
from enum import Enum
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from btcid.utils.time import to_utc_datetime


# ============================================
# Constants
# ============================================

class TradingPair(str, Enum):
    """Pairs served by the public /api/{pair}/... endpoints."""

    BTC_IDR = "btc_idr"
    ETH_IDR = "eth_idr"


class PrivateMethod(str, Enum):
    """
    Method names of the private /tapi endpoint.

    Only GET_INFO is called by the client; the rest name the remaining
    exchange methods (order and withdrawal calls are not implemented).
    """

    GET_INFO = "getInfo"
    TRANS_HISTORY = "transHistory"
    TRADE = "trade"
    TRADE_HISTORY = "tradeHistory"
    OPEN_ORDERS = "openOrders"
    ORDER_HISTORY = "orderHistory"
    GET_ORDER = "getOrder"
    CANCEL_ORDER = "cancelOrder"
    WITHDRAW_COIN = "withdrawCoin"


# ============================================
# Base Response Model
# ============================================

class BaseResponseModel(BaseModel):
    """
    Base model for all decoded responses.

    The exchange sends prices sometimes as strings and sometimes as bare
    numbers; numbers are coerced to strings for string fields. Unknown keys
    are ignored.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")


# ============================================
# Public Market Data
# ============================================

class Ticker(BaseResponseModel):
    """
    Ticker Data Model

    Attributes:
        high: Highest price in the last 24h
        low: Lowest price in the last 24h
        last: Last traded price
        buy: Best bid
        sell: Best ask

    Example:
        >>> Ticker(high="2500", low="2500", last="2500", buy="2500", sell="2500")
    """

    high: str = Field(..., description="Highest price in the last 24h")
    low: str = Field(..., description="Lowest price in the last 24h")
    last: str = Field(..., description="Last traded price")
    buy: str = Field(..., description="Best bid price")
    sell: str = Field(..., description="Best ask price")


class TickerEnvelope(BaseResponseModel):
    """Outer {"ticker": {...}} object of the ticker endpoint."""

    ticker: Ticker


class Trade(BaseResponseModel):
    """
    Trade History Entry

    Attributes:
        date: Epoch seconds of the trade, as sent by the exchange
        price: Execution price
        amount: Traded amount in base currency
        tid: Trade id
        type: "buy" or "sell"
    """

    date: str
    price: str
    amount: str
    tid: str
    type: str


class Depth(BaseResponseModel):
    """
    Order Book Depth

    Each side is an ordered list of [price, amount] pairs exactly as
    received (values may be numbers or strings).

    Attributes:
        buy: Bids, best first
        sell: Asks, best first
    """

    buy: List[List[Any]] = Field(default_factory=list)
    sell: List[List[Any]] = Field(default_factory=list)


# ============================================
# Private Account Data
# ============================================

class UserInfo(BaseResponseModel):
    """
    Account Information (getInfo)

    Attributes:
        balance: Available balance per currency code
        balance_hold: Balance locked in open orders per currency code
        address: Deposit address per currency code
        user_id: Account id
        profile_picture: Profile picture URL (may be empty)
        name: Account holder name
        server_time: Server time in epoch seconds
        email: Account email

    Notes:
        - Balances come back as numeric strings or numbers depending on the
          currency; both are normalised to Decimal
        - Every field has an empty default, the envelope's success flag is
          what tells a failed call apart
    """

    balance: Dict[str, Decimal] = Field(default_factory=dict)
    balance_hold: Dict[str, Decimal] = Field(default_factory=dict)
    address: Dict[str, str] = Field(default_factory=dict)
    user_id: str = ""
    profile_picture: Optional[str] = ""
    name: str = ""
    server_time: int = 0
    email: str = ""

    @field_validator("balance", "balance_hold", mode="before")
    @classmethod
    def normalize_balances(cls, v: Any) -> Any:
        """Map null or empty balance values to zero"""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {k: (0 if val is None or val == "" else val) for k, val in v.items()}
        return v

    @field_validator("address", mode="before")
    @classmethod
    def normalize_addresses(cls, v: Any) -> Any:
        """Drop currencies without a deposit address"""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {k: val for k, val in v.items() if val is not None}
        return v

    @property
    def server_datetime(self) -> Optional[datetime]:
        """server_time as an aware UTC datetime, None when not set"""
        if not self.server_time:
            return None
        return to_utc_datetime(self.server_time)


class InfoResponse(BaseResponseModel):
    """
    Private Call Envelope

    Attributes:
        success: 1 on success, 0 on failure
        return_: Payload (JSON key "return")
        error: Failure message sent with success=0
        error_code: Machine-readable failure code sent with success=0
    """

    model_config = ConfigDict(populate_by_name=True)

    success: int
    return_: UserInfo = Field(default_factory=UserInfo, alias="return")
    error: Optional[str] = None
    error_code: Optional[str] = None
