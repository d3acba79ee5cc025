"""Payment gateway factory.

build_gateway() picks the implementation from settings:
- PayPalGateway when both PayPal credentials are configured
- FakeGateway for development and testing otherwise

The application stores the gateway on ``app.state``; routes reach it through
the get_gateway() dependency.
"""

from fastapi import Request

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.paypal_adapter import PayPalGateway
from payments.gateway.port import PaymentGateway


def build_gateway(settings) -> PaymentGateway:
    """Return the gateway for these settings."""
    if settings.paypal_server_enabled:
        return PayPalGateway(
            client_id=settings.paypal_client_id,
            client_secret=settings.paypal_client_secret,
            base_url=settings.paypal_api_base,
        )
    return FakeGateway()


def get_gateway(request: Request) -> PaymentGateway:
    """FastAPI dependency: the gateway the application was created with."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("No payment gateway configured on the application")
    return gateway
