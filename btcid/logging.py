"""
Unified Logging Configuration

This module sets up the logging used across the client. All modules should
import their logger from here instead of using print() statements.

Usage:
    from btcid.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Fetching ticker")

Configuration:
    Importing the package only attaches a NullHandler to the "btcid" logger;
    the host application's logging setup is left untouched. Scripts that want
    console output call setup_logging(), which reads LOG_LEVEL from settings
    when no level is given.

Note:
    Request helpers below never receive the API secret or the Sign header.
"""

import logging
import sys
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure console logging and return the package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to settings.log_level

    Returns:
        logging.Logger: Configured logger instance

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Client ready")
        2024-01-01 12:00:00 [INFO] btcid Client ready
    """
    if log_level is None:
        from btcid.config import settings
        log_level = settings.log_level

    level = getattr(logging, log_level.upper(), logging.INFO)

    # No-op when the root logger already has handlers
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout
    )

    logger.setLevel(level)
    return logger


# ============================================
# Package Logger
# ============================================

logger = logging.getLogger("btcid")
logger.addHandler(logging.NullHandler())


# ============================================
# Convenience Functions
# ============================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Name for the logger (typically __name__)

    Returns:
        logging.Logger: Child of the "btcid" logger

    Example:
        >>> get_logger("api_client").name
        'btcid.api_client'
    """
    if name == "btcid" or name.startswith("btcid."):
        return logging.getLogger(name)
    return logging.getLogger(f"btcid.{name}")


def set_log_level(level: str) -> None:
    """
    Change the log level at runtime.

    Args:
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# ============================================
# Log Helper Functions
# ============================================

def log_api_request(method: str, endpoint: str, params: dict = None) -> None:
    """
    Log an API request with consistent formatting.

    Args:
        method: HTTP method ("GET", "POST")
        endpoint: API path or private method name
        params: Request parameters (optional, must not contain secrets)

    Example:
        >>> log_api_request("POST", "/tapi", {"method": "getInfo", "nonce": "1700000000000"})
        [DEBUG] API Request: POST /tapi | Params: {'method': 'getInfo', 'nonce': '1700000000000'}
    """
    if params:
        logger.debug(f"API Request: {method} {endpoint} | Params: {params}")
    else:
        logger.debug(f"API Request: {method} {endpoint}")


def log_api_response(method: str, endpoint: str, status: int, response_time: float = None) -> None:
    """
    Log an API response with status and timing information.

    Args:
        method: HTTP method
        endpoint: API path
        status: HTTP status code
        response_time: Response time in seconds (optional)

    Example:
        >>> log_api_response("GET", "/api/btc_idr/ticker", 200, 0.342)
        [DEBUG] API Response: GET /api/btc_idr/ticker | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {method} {endpoint} | Status: {status}{time_str}")
