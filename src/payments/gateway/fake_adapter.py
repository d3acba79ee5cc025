"""Configurable fake payment gateway for development and testing.

This adapter simulates the PayPal Orders API without any external calls.
It can be configured at runtime to fail or to return a non-completed
capture status, making it useful for:
- Manual API testing via /api/paypal/gateway/configure
- Automated tests with predictable outcomes
- Development without real PayPal credentials
"""

from uuid import uuid4

from payments.gateway.port import CAPTURE_COMPLETED, CaptureResult, GatewayError, PaymentGateway, ProviderOrder


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.capture_status: str = CAPTURE_COMPLETED
        self.failure_reason: str = "Provider unavailable"
        self.calls: list[dict] = []
        self.orders: dict[str, float] = {}

    def configure(
        self,
        should_succeed: bool,
        capture_status: str = CAPTURE_COMPLETED,
        failure_reason: str = "Provider unavailable",
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.capture_status = capture_status
        self.failure_reason = failure_reason

    def create_order(self, amount: float, currency: str) -> ProviderOrder:
        self.calls.append({"method": "create_order", "amount": amount, "currency": currency})

        if not self.should_succeed:
            raise GatewayError(self.failure_reason, status_code=503)

        order_id = f"FAKE-{uuid4().hex[:17].upper()}"
        self.orders[order_id] = amount
        return ProviderOrder(id=order_id, status="CREATED")

    def capture_order(self, order_id: str) -> CaptureResult:
        self.calls.append({"method": "capture_order", "order_id": order_id})

        if not self.should_succeed:
            raise GatewayError(self.failure_reason, status_code=503)
        if order_id not in self.orders:
            raise GatewayError(f"Unknown order {order_id}", status_code=404)

        return CaptureResult(
            id=order_id,
            status=self.capture_status,
            payer_email="buyer@example.com",
            capture_id=f"fake_cap_{uuid4().hex[:12]}",
        )
