"""UserCart aggregate (CQRS): the remote cart record of a signed-in shopper.

Exactly one record exists per user, keyed by the user id. The record stores
the serialized cart as the browser produced it; this service does not
interpret individual cart lines. Every write replaces the whole list, so
two tabs saving concurrently resolve to last-write-wins.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Text

from ordering.cart.events import CartSaved
from ordering.domain import ordering


@ordering.aggregate
class UserCart:
    user_id = Identifier(identifier=True, required=True)
    items = Text(default="[]")  # JSON: serialized cart lines
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, items=json.dumps([]), created_at=now, updated_at=now)

    @property
    def item_list(self):
        return json.loads(self.items) if self.items else []

    def replace_items(self, items):
        """Overwrite the stored cart with ``items``."""
        if not isinstance(items, list):
            raise ValidationError({"items": ["Cart items must be a list"]})

        now = datetime.now(UTC)
        self.items = json.dumps(items)
        self.updated_at = now

        self.raise_(
            CartSaved(
                user_id=str(self.user_id),
                item_count=len(items),
                saved_at=now,
            )
        )
