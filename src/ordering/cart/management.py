"""Cart record management: command and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import UserCart
from ordering.domain import ordering


@ordering.command(part_of="UserCart")
class SaveCart:
    """Upsert the single cart record of a signed-in shopper."""

    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of serialized cart lines


@ordering.command_handler(part_of=UserCart)
class SaveCartHandler:
    @handle(SaveCart)
    def save_cart(self, command):
        repo = current_domain.repository_for(UserCart)
        try:
            cart = repo.get(command.user_id)
        except ObjectNotFoundError:
            cart = UserCart.create(user_id=command.user_id)

        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        cart.replace_items(items)
        repo.add(cart)
        return str(cart.user_id)


def load_cart(user_id):
    """Return the UserCart for ``user_id``; raises ObjectNotFoundError when none is stored."""
    return current_domain.repository_for(UserCart).get(user_id)
