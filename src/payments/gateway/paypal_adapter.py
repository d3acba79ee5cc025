"""PayPal payment gateway adapter (Orders v2 REST API).

Authenticates with the OAuth2 client-credentials grant and keeps the access
token until shortly before it expires. Amounts are sent as decimal strings
with two places, as the Orders API requires.
"""

import time

import httpx
import structlog

from payments.gateway.port import CaptureResult, GatewayError, PaymentGateway, ProviderOrder

logger = structlog.get_logger(__name__)

# Refresh the token this many seconds before PayPal says it expires.
_TOKEN_EXPIRY_MARGIN = 60


class PayPalGateway(PaymentGateway):
    """Production PayPal gateway adapter."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = "https://api-m.sandbox.paypal.com",
        http: httpx.Client | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.http = http or httpx.Client(base_url=base_url, timeout=30.0)
        self._access_token: str | None = None
        self._token_expires_at: float = 0.0

    def close(self) -> None:
        self.http.close()

    def _token(self) -> str:
        if self._access_token and time.monotonic() < self._token_expires_at:
            return self._access_token

        data = self._send(
            "POST",
            "/v1/oauth2/token",
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"Accept": "application/json"},
        )
        token = data.get("access_token")
        if not token:
            raise GatewayError("PayPal token response missing access_token")

        self._access_token = token
        self._token_expires_at = time.monotonic() + max(int(data.get("expires_in", 0)) - _TOKEN_EXPIRY_MARGIN, 0)
        return token

    def _send(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("PayPal request failed", url=url, error=str(exc))
            raise GatewayError(f"PayPal request failed: {exc}") from exc

        if response.is_error:
            logger.error("PayPal returned an error", url=url, status_code=response.status_code, body=response.text)
            try:
                details = response.json()
            except ValueError:
                details = {"body": response.text}
            raise GatewayError(
                f"PayPal returned {response.status_code}",
                status_code=response.status_code,
                details=details,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError("PayPal returned a non-JSON body", status_code=response.status_code) from exc

    def _authorized(self) -> dict:
        return {"Authorization": f"Bearer {self._token()}", "Content-Type": "application/json"}

    def create_order(self, amount: float, currency: str) -> ProviderOrder:
        data = self._send(
            "POST",
            "/v2/checkout/orders",
            headers=self._authorized(),
            json={
                "intent": "CAPTURE",
                "purchase_units": [
                    {"amount": {"currency_code": currency, "value": f"{amount:.2f}"}},
                ],
            },
        )
        if not data.get("id"):
            raise GatewayError("PayPal order response missing id", details=data)

        logger.info("PayPal order created", provider_order_id=data["id"], amount=amount, currency=currency)
        return ProviderOrder(id=data["id"], status=data.get("status", "CREATED"))

    def capture_order(self, order_id: str) -> CaptureResult:
        data = self._send("POST", f"/v2/checkout/orders/{order_id}/capture", headers=self._authorized())
        if not data.get("status"):
            raise GatewayError("PayPal capture response missing status", details=data)

        capture_id = None
        for unit in data.get("purchase_units", []):
            captures = unit.get("payments", {}).get("captures", [])
            if captures:
                capture_id = captures[0].get("id")
                break

        logger.info("PayPal order captured", provider_order_id=order_id, status=data["status"])
        return CaptureResult(
            id=data.get("id", order_id),
            status=data["status"],
            payer_email=data.get("payer", {}).get("email_address"),
            capture_id=capture_id,
        )
