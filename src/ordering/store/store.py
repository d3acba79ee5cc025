"""Store aggregate (CQRS): the storefront an order belongs to.

Orders and order line items are stamped with a store id. The checkout
endpoint only knows a fixed store slug, so every write starts by resolving
that slug to the registered Store.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from ordering.domain import ordering


@ordering.aggregate
class Store:
    slug = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    created_at = DateTime()

    @classmethod
    def register(cls, slug, name):
        slug = (slug or "").strip().lower()
        if not slug:
            raise ValidationError({"slug": ["Store slug is required"]})
        return cls(slug=slug, name=name or slug.title(), created_at=datetime.now(UTC))


def find_store(slug):
    """Return the Store registered under ``slug``, or None."""
    if not slug:
        return None
    stores = current_domain.repository_for(Store)._dao.query.filter(slug=slug.strip().lower()).all().items
    return stores[0] if stores else None


def resolve_store_id(slug):
    """Resolve a store slug to its id. Returns None when no store is registered."""
    store = find_store(slug)
    return str(store.id) if store else None
