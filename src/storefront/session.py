"""Client-side composition root.

Builds the API client, the cart, the receipt store and the checkout for one
device from ``Settings``. Nothing here is a module-level singleton; the
caller owns the returned ``Storefront`` and closes it on shutdown.
"""

from dataclasses import dataclass

import httpx
import structlog

from shared.config import Settings
from storefront.auth import AuthEventStream
from storefront.cart.remote import ApiCartStore
from storefront.cart.store import CartStore
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.checkout.receipt import ReceiptStore
from storefront.client import StorefrontClient
from storefront.storage import KeyValueStore

logger = structlog.get_logger(__name__)


@dataclass
class Storefront:
    settings: Settings
    client: StorefrontClient
    auth: AuthEventStream
    cart: CartStore
    receipts: ReceiptStore
    checkout: CheckoutOrchestrator

    def new_checkout(self) -> CheckoutOrchestrator:
        """Start a fresh checkout over the same cart, e.g. after visiting the receipt."""
        self.checkout = CheckoutOrchestrator(self.cart, self.client, self.receipts, self.settings)
        return self.checkout

    def close(self) -> None:
        self.cart.detach()
        self.client.close()

    def __enter__(self) -> "Storefront":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_storefront(
    settings: Settings,
    local: KeyValueStore,
    auth: AuthEventStream | None = None,
    http: httpx.Client | None = None,
) -> Storefront:
    """Wire the client components and load the cart for the current session.

    ``http`` overrides the client built from ``settings.api_url``.
    """
    client = StorefrontClient(base_url=settings.api_url, http=http)
    auth = auth or AuthEventStream()
    cart = CartStore(local, ApiCartStore(client))
    cart.attach(auth)
    receipts = ReceiptStore(local)

    logger.info(
        "Storefront client ready",
        api_url=settings.api_url,
        subject=cart.subject.key,
        paypal_enabled=settings.paypal_enabled,
    )
    return Storefront(
        settings=settings,
        client=client,
        auth=auth,
        cart=cart,
        receipts=receipts,
        checkout=CheckoutOrchestrator(cart, client, receipts, settings),
    )
