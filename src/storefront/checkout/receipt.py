"""Order summary handed from checkout to the receipt page.

Written to device-local storage under ``lastOrder`` right before the cart is
cleared; the receipt page reads it back.
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError

from storefront.storage import KeyValueStore

logger = structlog.get_logger(__name__)

RECEIPT_KEY = "lastOrder"


class OrderSummary(BaseModel):
    order_id: str
    email: str
    delivery_method: str
    shipping: dict[str, Any] | None = None
    pickup: dict[str, Any] | None = None
    items: list[dict[str, Any]]
    subtotal: float
    shipping_cost: float
    total: float
    payment_method: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ReceiptStore:
    def __init__(self, local: KeyValueStore) -> None:
        self.local = local

    def save(self, summary: OrderSummary) -> None:
        self.local.set(RECEIPT_KEY, summary.model_dump(mode="json"))

    def load(self) -> OrderSummary | None:
        raw = self.local.get(RECEIPT_KEY)
        if raw is None:
            return None
        try:
            return OrderSummary.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Stored receipt is unreadable", error=str(exc))
            return None
