"""Ordering bounded context: Orders, Order Line Items, Stores and saved Carts.

Handles order persistence for completed checkouts, best-effort line item
recording, per-customer order history and the single remote cart record
kept for each signed-in shopper.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
