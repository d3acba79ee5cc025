"""Order history queries for the account pages."""

from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderLineItem


def orders_for_customer(customer_email, store_id):
    """Orders placed with ``customer_email`` in a store, newest first."""
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.filter(customer_email=customer_email, store_id=store_id)
        .all()
        .items
    )
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


def line_items_for_order(order_id):
    return current_domain.repository_for(OrderLineItem)._dao.query.filter(order_id=order_id).all().items
