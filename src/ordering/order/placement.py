"""Order placement: command and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    """Record a paid checkout as a pending order for a store."""

    store_id = Identifier(required=True)
    customer_email = String(required=True, max_length=254)
    customer_name = String(max_length=255)
    total_price = Float(required=True)
    user_id = Identifier()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.place(
            store_id=command.store_id,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            total_price=command.total_price,
            user_id=command.user_id,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order created",
            order_id=str(order.id),
            store_id=str(command.store_id),
            total_price=order.total_price,
        )
        return str(order.id)
