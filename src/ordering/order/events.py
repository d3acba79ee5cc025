"""Domain events for the Order and OrderLineItem aggregates."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A paid checkout was recorded as a pending order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    store_id = Identifier(required=True)
    customer_email = String(required=True)
    customer_name = String()
    total_price = Float(required=True)
    currency = String(default="USD")
    placed_at = DateTime(required=True)


@ordering.event(part_of="OrderLineItem")
class OrderLineItemRecorded:
    """A purchased product line was recorded against an order."""

    __version__ = "v1"

    line_item_id = Identifier(required=True)
    order_id = Identifier(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)
    line_total = Float(required=True)
