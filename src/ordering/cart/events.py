"""Domain events for the UserCart aggregate."""

from protean.fields import DateTime, Identifier, Integer

from ordering.domain import ordering


@ordering.event(part_of="UserCart")
class CartSaved:
    """A signed-in shopper's cart record was written."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    saved_at = DateTime(required=True)
