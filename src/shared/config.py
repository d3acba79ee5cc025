"""Application settings shared by the API server and the storefront client.

Settings are read once from the environment at startup and passed to the
components that need them; nothing reads ``os.environ`` after that.
"""

import os
from dataclasses import dataclass

from fastapi import Request

from shared.logging import default_log_level

PAYPAL_SANDBOX_API = "https://api-m.sandbox.paypal.com"


@dataclass(frozen=True)
class Settings:
    paypal_client_id: str | None = None
    paypal_client_secret: str | None = None
    paypal_api_base: str = PAYPAL_SANDBOX_API
    store_slug: str = "badminton"
    store_name: str = "OfCourt"
    api_url: str = "http://localhost:8000"
    currency: str = "USD"
    shipping_cost: float = 10.0
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        environment = env.get("PROTEAN_ENV", "development")
        return cls(
            paypal_client_id=env.get("PAYPAL_CLIENT_ID") or None,
            paypal_client_secret=env.get("PAYPAL_CLIENT_SECRET") or None,
            paypal_api_base=env.get("PAYPAL_API_BASE", PAYPAL_SANDBOX_API),
            store_slug=env.get("STORE_SLUG", "badminton"),
            store_name=env.get("STORE_NAME", "OfCourt"),
            api_url=env.get("STOREFRONT_API_URL", "http://localhost:8000"),
            shipping_cost=float(env.get("SHIPPING_COST", "10")),
            environment=environment,
            log_level=(env.get("LOG_LEVEL") or default_log_level(environment)).upper(),
            log_format=env.get("LOG_FORMAT", "console"),
        )

    @property
    def paypal_enabled(self) -> bool:
        """The PayPal checkout path needs a client id; without it the UI shows a notice instead."""
        return bool(self.paypal_client_id)

    @property
    def paypal_server_enabled(self) -> bool:
        return bool(self.paypal_client_id and self.paypal_client_secret)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def get_settings(request: Request) -> Settings:
    """FastAPI dependency: the settings the application was created with."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else Settings.from_env()
