"""Remote cart record port and its API-backed adapter.

One record per signed-in user, holding the whole serialized cart. Reads
return None when the user has no record yet; any other failure raises
RemoteCartError.
"""

from abc import ABC, abstractmethod

import structlog
from pydantic import ValidationError

from storefront.cart.items import CartItem
from storefront.client import StorefrontClient

logger = structlog.get_logger(__name__)


class RemoteCartStore(ABC):
    @abstractmethod
    def fetch(self, user_id: str) -> list[CartItem] | None:
        """Return the user's cart lines, or None when no record exists."""
        ...

    @abstractmethod
    def upsert(self, user_id: str, items: list[CartItem]) -> None:
        """Create or overwrite the user's single cart record."""
        ...


def parse_items(raw, source: str) -> list[CartItem]:
    """Parse serialized cart lines, skipping any that are malformed."""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Ignoring cart that is not a list", source=source)
        return []

    items = []
    for entry in raw:
        try:
            items.append(CartItem.from_wire(entry))
        except ValidationError as exc:
            logger.warning("Skipping malformed cart line", source=source, error=str(exc))
    return items


class ApiCartStore(RemoteCartStore):
    """Remote cart record kept by the storefront API (``/api/carts/{user_id}``)."""

    def __init__(self, client: StorefrontClient) -> None:
        self.client = client

    def fetch(self, user_id: str) -> list[CartItem] | None:
        raw = self.client.fetch_cart(user_id)
        if raw is None:
            return None
        return parse_items(raw, source="remote")

    def upsert(self, user_id: str, items: list[CartItem]) -> None:
        self.client.save_cart(user_id, [item.to_wire() for item in items])
