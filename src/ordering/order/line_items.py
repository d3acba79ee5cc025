"""Order line item recording: command and handler.

Runs after the Order row exists. Callers treat it as a best-effort write.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import OrderLineItem

logger = structlog.get_logger(__name__)


@ordering.command(part_of="OrderLineItem")
class RecordOrderLineItems:
    order_id = Identifier(required=True)
    store_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of serialized cart items


@ordering.command_handler(part_of=OrderLineItem)
class RecordOrderLineItemsHandler:
    @handle(RecordOrderLineItems)
    def record_line_items(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items

        repo = current_domain.repository_for(OrderLineItem)
        recorded = 0
        for item in items or []:
            if not isinstance(item, dict):
                logger.warning("Skipping malformed cart item", order_id=str(command.order_id), item=repr(item))
                continue
            repo.add(OrderLineItem.from_cart_item(command.order_id, command.store_id, item))
            recorded += 1

        logger.info("Order line items recorded", order_id=str(command.order_id), count=recorded)
        return recorded
