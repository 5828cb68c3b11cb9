"""
Configuration Management Module

This module handles loading, validating, and providing access to client
configuration from environment variables (.env file).

Uses Pydantic Settings for automatic validation and type conversion.

Key Features:
- Loads configuration from .env file
- Provides type-safe access to configuration values
- Handles optional credentials (public endpoints need none)

Usage:
    from btcid.config import settings

    print(settings.btcid_base_url)
    print(settings.has_credentials)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Client Settings

    Values are automatically loaded from environment variables or .env file.

    Attributes:
        btcid_base_url: Base URL of the exchange (production host by default)
        btcid_api_key: API key for private endpoints
        btcid_secret_key: Secret used to sign private requests
        request_timeout: Total timeout for the default HTTP session, in seconds
        log_level: Logging level name
    """

    # ============================================
    # Exchange API Configuration
    # ============================================

    btcid_base_url: str = Field(
        default="https://vip.bitcoin.co.id",
        description="Bitcoin.co.id API base URL"
    )

    btcid_api_key: str = Field(
        default="",
        description="Bitcoin.co.id API key (optional for public endpoints)"
    )

    btcid_secret_key: str = Field(
        default="",
        description="Bitcoin.co.id secret key (optional for public endpoints)"
    )

    # ============================================
    # Transport Configuration
    # ============================================

    request_timeout: int = Field(
        default=30,
        description="HTTP request timeout in seconds for the default session"
    )

    # ============================================
    # Application Configuration
    # ============================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # ============================================
    # Pydantic Settings Configuration
    # ============================================

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False
    )

    @property
    def has_credentials(self) -> bool:
        """
        Check if both API key and secret are configured.

        Returns:
            True if private endpoints can be called, False otherwise
        """
        return bool(self.btcid_api_key and self.btcid_secret_key)


# ============================================
# Global Settings Instance
# ============================================

settings = Settings()


# ============================================
# Configuration Validation
# ============================================

def validate_configuration(config: Settings = settings) -> None:
    """
    Validate critical configuration settings.

    Args:
        config: Settings instance to check (defaults to the global settings)

    Raises:
        ValueError: If configuration is invalid
    """
    # Import logger here to avoid circular import
    # (setup_logging imports config.py for the default level)
    from btcid.logging import logger

    if not config.btcid_base_url.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid BTCID_BASE_URL: '{config.btcid_base_url}'. "
            f"Must start with http:// or https://"
        )

    if config.request_timeout <= 0:
        raise ValueError(f"Invalid REQUEST_TIMEOUT: {config.request_timeout}. Must be positive")

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.log_level.upper() not in valid_log_levels:
        raise ValueError(
            f"Invalid LOG_LEVEL: '{config.log_level}'. "
            f"Must be one of: {', '.join(valid_log_levels)}"
        )

    logger.info("Configuration validated successfully")
    logger.info(f"Bitcoin.co.id API: {config.btcid_base_url}")
    logger.info(f"Credentials: {'configured' if config.has_credentials else 'not set (public endpoints only)'}")
    logger.info(f"Log level: {config.log_level.upper()}")
