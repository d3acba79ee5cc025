"""Fixtures for the storefront client components.

The storefront API is replaced by ``StubStorefrontApi`` served through
``httpx.MockTransport``; the remote cart record by an in-memory store that
can be told to fail.
"""

import itertools
import json

import httpx
import pytest
from shared.config import Settings
from storefront.cart.items import CartItem
from storefront.cart.remote import RemoteCartStore
from storefront.cart.store import CartStore
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.checkout.receipt import ReceiptStore
from storefront.client import StorefrontClient
from storefront.exceptions import RemoteCartError
from storefront.storage import MemoryStorage


class InMemoryRemoteCarts(RemoteCartStore):
    def __init__(self) -> None:
        self.records: dict[str, list[dict]] = {}
        self.fail_fetch = False
        self.fail_upsert = False
        self.upserts: list[tuple[str, list[dict]]] = []

    def fetch(self, user_id):
        if self.fail_fetch:
            raise RemoteCartError("remote read failed", status_code=500)
        raw = self.records.get(user_id)
        return None if raw is None else [CartItem.from_wire(entry) for entry in raw]

    def upsert(self, user_id, items):
        if self.fail_upsert:
            raise RemoteCartError("remote write failed", status_code=500)
        wire = [item.to_wire() for item in items]
        self.upserts.append((user_id, wire))
        self.records[user_id] = wire


class StubStorefrontApi:
    """Answers the storefront API routes the client calls."""

    def __init__(self) -> None:
        self.create_status = 200
        self.create_body: dict = {"id": "PAYPAL-ORDER-1", "status": "CREATED"}
        self.capture_status = 200
        self.capture_body: dict = {"id": "PAYPAL-ORDER-1", "status": "COMPLETED"}
        self.record_status = 201
        self.cart_status: int | None = None
        self.carts: dict[str, list[dict]] = {}
        self.orders: list[dict] = []
        self.requests: list[httpx.Request] = []

    def sent(self, path: str) -> list[dict]:
        """JSON bodies posted to ``path``, in order."""
        return [json.loads(r.content) for r in self.requests if r.url.path == path and r.content]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        body = json.loads(request.content) if request.content else None

        if path == "/api/paypal/create-order":
            return httpx.Response(self.create_status, json=self.create_body)

        if path == "/api/paypal/capture-order":
            return httpx.Response(self.capture_status, json=self.capture_body)

        if path == "/api/create-order":
            if self.record_status >= 400:
                return httpx.Response(self.record_status, json={"error": "Failed to create order"})
            self.orders.append(body)
            order = {"id": f"order-{len(self.orders)}", "status": "pending", **body}
            return httpx.Response(201, json={"success": True, "order": order})

        if path == "/api/orders":
            email = request.url.params.get("email")
            return httpx.Response(200, json={"orders": [o for o in self.orders if o["customer_email"] == email]})

        if path.startswith("/api/carts/"):
            user_id = path.rsplit("/", 1)[-1]
            if self.cart_status is not None:
                return httpx.Response(self.cart_status, json={"detail": "cart store unavailable"})
            if request.method == "PUT":
                self.carts[user_id] = body["items"]
                return httpx.Response(200, json={"user_id": user_id, "items": body["items"]})
            if user_id not in self.carts:
                return httpx.Response(404, json={"detail": "Cart not found"})
            return httpx.Response(200, json={"user_id": user_id, "items": self.carts[user_id]})

        return httpx.Response(404, json={"detail": "Not Found"})


@pytest.fixture()
def api():
    return StubStorefrontApi()


@pytest.fixture()
def client(api):
    http = httpx.Client(base_url="http://storefront.test", transport=httpx.MockTransport(api))
    yield StorefrontClient(http=http)
    http.close()


@pytest.fixture()
def local():
    return MemoryStorage()


@pytest.fixture()
def remote():
    return InMemoryRemoteCarts()


@pytest.fixture()
def cart_store(local, remote):
    counter = itertools.count(1)
    store = CartStore(local, remote, id_factory=lambda: f"line-{next(counter)}")
    store.load()
    return store


@pytest.fixture()
def settings():
    return Settings(paypal_client_id="test-client-id")


@pytest.fixture()
def receipts(local):
    return ReceiptStore(local)


@pytest.fixture()
def checkout(cart_store, client, receipts, settings):
    return CheckoutOrchestrator(cart_store, client, receipts, settings)


@pytest.fixture()
def racket():
    return {
        "id": 7,
        "title": "Astrox 88D Pro",
        "unitPrice": 229.0,
        "quantity": 1,
        "totalPrice": 229.0,
        "customization": {"string": "BG80", "tension": 26},
    }


@pytest.fixture()
def shuttles():
    return {
        "id": 12,
        "title": "Aerosensa 30 (tube of 12)",
        "unitPrice": 31.0,
        "quantity": 2,
        "totalPrice": 62.0,
    }
