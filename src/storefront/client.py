"""HTTP client for the storefront API.

Wraps the endpoints the browser talks to: the PayPal proxy, order
persistence, order history and the remote cart record. Every transport or
HTTP failure is raised as one of the StorefrontError subclasses so callers
can decide which failures are fatal and which are best-effort.
"""

import httpx
import structlog

from storefront.exceptions import OrderRecordError, ProviderError, RemoteCartError, StorefrontError

logger = structlog.get_logger(__name__)


class StorefrontClient:
    """Client for the storefront API."""

    def __init__(self, base_url: str | None = None, http: httpx.Client | None = None, timeout: float = 10.0) -> None:
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000``. Ignored when ``http`` is given.
            http: Pre-configured httpx client (a FastAPI TestClient works too)
            timeout: Request timeout in seconds for the client created here
        """
        if http is None and base_url is None:
            raise ValueError("StorefrontClient needs a base_url or an http client")
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def _request(self, method: str, url: str, error_cls: type[StorefrontError], **kwargs) -> httpx.Response:
        try:
            return self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Storefront API request failed", method=method, url=url, error=str(exc))
            raise error_cls(f"Request to {url} failed: {exc}") from exc

    @staticmethod
    def _json(response: httpx.Response, error_cls: type[StorefrontError]) -> dict:
        try:
            data = response.json()
        except ValueError as exc:
            raise error_cls("Response was not JSON", status_code=response.status_code) from exc
        if not isinstance(data, dict):
            raise error_cls("Response was not a JSON object", status_code=response.status_code)
        return data

    # -------------------------------------------------------------------
    # Payment provider
    # -------------------------------------------------------------------
    def create_provider_order(self, amount: float) -> str:
        """Create a PayPal order for ``amount`` and return its id."""
        response = self._request(
            "POST", "/api/paypal/create-order", ProviderError, json={"amount": round(amount, 2)}
        )
        if response.is_error:
            raise ProviderError(
                f"API returned {response.status_code}: {response.text}", status_code=response.status_code
            )
        order = self._json(response, ProviderError)
        if not order.get("id"):
            raise ProviderError("Order ID missing from response", status_code=response.status_code, details=order)
        return order["id"]

    def capture_provider_order(self, order_id: str) -> str:
        """Capture an approved PayPal order and return the provider's status string."""
        response = self._request("POST", "/api/paypal/capture-order", ProviderError, json={"orderID": order_id})
        if response.is_error:
            raise ProviderError(
                f"API returned {response.status_code}: {response.text}", status_code=response.status_code
            )
        details = self._json(response, ProviderError)
        if not details.get("status"):
            raise ProviderError("Capture status missing from response", details=details)
        return details["status"]

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def record_order(
        self,
        customer_email: str,
        total_price: float,
        items: list[dict],
        customer_name: str | None = None,
        user_id: str | None = None,
    ) -> dict:
        """Persist a paid checkout; returns the stored order."""
        payload = {
            "customer_email": customer_email,
            "customer_name": customer_name,
            "total_price": total_price,
            "items": items,
        }
        if user_id:
            payload["user_id"] = user_id

        response = self._request("POST", "/api/create-order", OrderRecordError, json=payload)
        if response.is_error:
            raise OrderRecordError(
                f"Order endpoint returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return self._json(response, OrderRecordError).get("order", {})

    def list_orders(self, email: str) -> list[dict]:
        response = self._request("GET", "/api/orders", OrderRecordError, params={"email": email})
        if response.is_error:
            raise OrderRecordError(
                f"Order history returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return self._json(response, OrderRecordError).get("orders", [])

    # -------------------------------------------------------------------
    # Remote cart record
    # -------------------------------------------------------------------
    def fetch_cart(self, user_id: str) -> list[dict] | None:
        """Return the stored cart lines for ``user_id``, or None when no record exists."""
        response = self._request("GET", f"/api/carts/{user_id}", RemoteCartError)
        if response.status_code == 404:
            return None
        if response.is_error:
            raise RemoteCartError(
                f"Cart read returned {response.status_code}: {response.text}", status_code=response.status_code
            )
        return self._json(response, RemoteCartError).get("items", [])

    def save_cart(self, user_id: str, items: list[dict]) -> None:
        response = self._request("PUT", f"/api/carts/{user_id}", RemoteCartError, json={"items": items})
        if response.is_error:
            raise RemoteCartError(
                f"Cart write returned {response.status_code}: {response.text}", status_code=response.status_code
            )
