"""Order and OrderLineItem aggregates (CQRS).

An Order is written once per successful checkout, after the payment
provider has captured the funds. It starts out ``pending``; later status
changes happen in back-office tooling and are not driven from here.

Line items are a separate aggregate because they are recorded in a
best-effort second write: a failure to store them must never undo the
Order itself.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderLineItemRecorded, OrderPlaced

DEFAULT_CURRENCY = "USD"


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


@ordering.aggregate
class Order:
    store_id = Identifier(required=True)
    customer_email = String(required=True, max_length=254)
    customer_name = String(max_length=255)
    total_price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    user_id = Identifier()
    created_at = DateTime()

    @classmethod
    def place(cls, store_id, customer_email, total_price, customer_name=None, user_id=None):
        """Record a checkout whose payment has already been captured."""
        if not customer_email:
            raise ValidationError({"customer_email": ["Customer email is required"]})
        if total_price is None:
            raise ValidationError({"total_price": ["Total price is required"]})

        now = datetime.now(UTC)
        order = cls(
            store_id=store_id,
            customer_email=customer_email,
            customer_name=customer_name or None,
            total_price=float(total_price),
            currency=DEFAULT_CURRENCY,
            status=OrderStatus.PENDING.value,
            user_id=user_id,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                store_id=str(store_id),
                customer_email=customer_email,
                customer_name=order.customer_name,
                total_price=order.total_price,
                currency=order.currency,
                placed_at=now,
            )
        )
        return order


def _coerce_quantity(value):
    if isinstance(value, bool):
        return 1
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        return 1
    return quantity if quantity >= 1 else 1


def _coerce_price(value):
    if isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    return price if price >= 0 else 0.0


@ordering.aggregate
class OrderLineItem:
    order_id = Identifier(required=True)
    store_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default=DEFAULT_CURRENCY)
    line_total = Float(required=True, min_value=0.0)

    @classmethod
    def from_cart_item(cls, order_id, store_id, item):
        """Build a line item from a serialized cart item.

        Cart items come straight from the buyer's browser, so the fields are
        read leniently: the product name falls back from ``title`` to
        ``name``, a missing or malformed quantity counts as 1 and a missing
        or malformed price as 0.
        """
        quantity = _coerce_quantity(item.get("quantity"))
        price = item.get("unitPrice", item.get("unit_price", item.get("price")))
        unit_price = _coerce_price(price)

        line_item = cls(
            order_id=order_id,
            store_id=store_id,
            product_name=item.get("title") or item.get("name") or "Item",
            quantity=quantity,
            unit_price=unit_price,
            currency=DEFAULT_CURRENCY,
            line_total=round(quantity * unit_price, 2),
        )
        line_item.raise_(
            OrderLineItemRecorded(
                line_item_id=str(line_item.id),
                order_id=str(order_id),
                product_name=line_item.product_name,
                quantity=quantity,
                line_total=line_item.line_total,
            )
        )
        return line_item
