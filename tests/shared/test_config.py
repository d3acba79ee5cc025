"""Tests for environment-driven settings."""

from shared.config import PAYPAL_SANDBOX_API, Settings
from shared.logging import default_log_level


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.store_slug == "badminton"
        assert settings.store_name == "OfCourt"
        assert settings.paypal_api_base == PAYPAL_SANDBOX_API
        assert settings.shipping_cost == 10.0
        assert settings.environment == "development"
        assert settings.log_level == "DEBUG"
        assert settings.paypal_enabled is False

    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "PAYPAL_CLIENT_ID": "client-id",
                "PAYPAL_CLIENT_SECRET": "secret",
                "STORE_SLUG": "tennis",
                "STOREFRONT_API_URL": "https://shop.example.com",
                "PROTEAN_ENV": "production",
                "LOG_LEVEL": "warning",
                "LOG_FORMAT": "json",
            }
        )
        assert settings.paypal_enabled is True
        assert settings.paypal_server_enabled is True
        assert settings.store_slug == "tennis"
        assert settings.api_url == "https://shop.example.com"
        assert settings.is_production is True
        assert settings.log_level == "WARNING"
        assert settings.log_format == "json"

    def test_blank_client_id_disables_paypal(self):
        assert Settings.from_env({"PAYPAL_CLIENT_ID": ""}).paypal_enabled is False

    def test_client_id_without_secret(self):
        settings = Settings.from_env({"PAYPAL_CLIENT_ID": "client-id"})
        assert settings.paypal_enabled is True
        assert settings.paypal_server_enabled is False


class TestDefaultLogLevel:
    def test_by_environment(self):
        assert default_log_level("production") == "INFO"
        assert default_log_level("test") == "WARNING"
        assert default_log_level("unknown") == "INFO"
