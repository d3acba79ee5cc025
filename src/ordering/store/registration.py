"""Store registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.store.store import Store, find_store

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Store")
class RegisterStore:
    """Register a storefront under a slug. Re-registering an existing slug is a no-op."""

    slug = String(required=True, max_length=100)
    name = String(max_length=255)


@ordering.command_handler(part_of=Store)
class RegisterStoreHandler:
    @handle(RegisterStore)
    def register_store(self, command):
        existing = find_store(command.slug)
        if existing is not None:
            logger.info("Store already registered", slug=existing.slug, store_id=str(existing.id))
            return str(existing.id)

        store = Store.register(slug=command.slug, name=command.name)
        current_domain.repository_for(Store).add(store)
        logger.info("Store registered", slug=store.slug, store_id=str(store.id))
        return str(store.id)
