"""
Unit Tests for Configuration Module

These tests verify that the configuration system works correctly:
- Default values are applied when needed
- Validation catches invalid configurations
- Property methods work as expected

Run with:
    pytest tests/unit/test_config.py -v
"""

import pytest
from btcid.config import Settings, settings, validate_configuration


def make_settings(**overrides) -> Settings:
    """Build Settings without reading a local .env file"""
    return Settings(_env_file=None, **overrides)


class TestConfigurationLoading:
    """Test that configuration loads with sane values"""

    def test_base_url_loaded(self):
        """Verify the API URL is set"""
        assert settings.btcid_base_url is not None
        assert settings.btcid_base_url.startswith("http")

    def test_default_base_url_is_production(self):
        """Verify the production host is the default"""
        assert Settings.model_fields["btcid_base_url"].default == "https://vip.bitcoin.co.id"

    def test_request_timeout_is_positive(self):
        """Verify request timeout is a positive integer"""
        assert isinstance(settings.request_timeout, int)
        assert settings.request_timeout > 0

    def test_log_level_is_set(self):
        """Verify log level is configured"""
        assert isinstance(settings.log_level, str)
        assert len(settings.log_level) > 0


class TestConfigurationProperties:
    """Test property methods and computed values"""

    def test_has_credentials_requires_key_and_secret(self):
        """Verify has_credentials needs both values"""
        assert make_settings(btcid_api_key="k", btcid_secret_key="s").has_credentials is True
        assert make_settings(btcid_api_key="k", btcid_secret_key="").has_credentials is False
        assert make_settings(btcid_api_key="", btcid_secret_key="s").has_credentials is False


class TestConfigurationValidation:
    """Test configuration validation function"""

    def test_validate_configuration_succeeds(self):
        """Verify validation passes with a valid configuration"""
        try:
            validate_configuration(make_settings(
                btcid_base_url="https://vip.bitcoin.co.id",
                request_timeout=30,
                log_level="INFO"
            ))
        except ValueError as e:
            pytest.fail(f"Configuration validation failed: {e}")

    def test_invalid_base_url(self):
        """Verify a URL without scheme is rejected"""
        with pytest.raises(ValueError, match="BTCID_BASE_URL"):
            validate_configuration(make_settings(btcid_base_url="vip.bitcoin.co.id"))

    def test_invalid_timeout(self):
        """Verify a non-positive timeout is rejected"""
        with pytest.raises(ValueError, match="REQUEST_TIMEOUT"):
            validate_configuration(make_settings(
                btcid_base_url="https://vip.bitcoin.co.id",
                request_timeout=0
            ))

    def test_invalid_log_level(self):
        """Verify an unknown log level is rejected"""
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            validate_configuration(make_settings(
                btcid_base_url="https://vip.bitcoin.co.id",
                request_timeout=30,
                log_level="LOUD"
            ))

    def test_environment_override(self, monkeypatch):
        """Verify environment variables are picked up case-insensitively"""
        monkeypatch.setenv("BTCID_API_KEY", "from-env")
        monkeypatch.setenv("BTCID_SECRET_KEY", "secret-env")

        config = make_settings()

        assert config.btcid_api_key == "from-env"
        assert config.has_credentials is True
