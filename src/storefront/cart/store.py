"""Cart Store: the shopping cart of whoever is using this device.

A guest's cart lives in device-local storage under the ``cart`` key. Once
a user is known, the cart lives in that user's single remote record, and
any guest cart left on the device is merged into it exactly once.

Every mutation writes the whole cart back to wherever it currently lives.
Writes are suppressed while a load is in progress, so a cart that has not
finished loading (or merging) can never overwrite the stored one.
"""

from dataclasses import dataclass
from uuid import uuid4

import structlog

from storefront.auth import AuthEvent, AuthEventStream, Session, Subscription
from storefront.cart.items import CartItem
from storefront.cart.merge import merge_carts
from storefront.cart.remote import RemoteCartStore, parse_items
from storefront.exceptions import RemoteCartError
from storefront.storage import KeyValueStore

logger = structlog.get_logger(__name__)

CART_KEY = "cart"


@dataclass(frozen=True)
class Subject:
    """Owner of a cart: the guest device (``user_id`` None) or a signed-in user."""

    user_id: str | None = None

    @classmethod
    def guest(cls) -> "Subject":
        return cls()

    @classmethod
    def user(cls, user_id: str) -> "Subject":
        if not user_id:
            raise ValueError("A user subject needs a user id")
        return cls(user_id=str(user_id))

    @classmethod
    def parse(cls, key: str) -> "Subject":
        if key == "guest":
            return cls.guest()
        if key.startswith("user:"):
            return cls.user(key[len("user:") :])
        raise ValueError(f"Unknown cart subject: {key!r}")

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @property
    def key(self) -> str:
        return "guest" if self.is_guest else f"user:{self.user_id}"


def _new_cart_id() -> str:
    return uuid4().hex[:12]


class CartStore:
    def __init__(self, local: KeyValueStore, remote: RemoteCartStore, id_factory=None) -> None:
        self.local = local
        self.remote = remote
        self._new_cart_id = id_factory or _new_cart_id
        self._items: list[CartItem] = []
        self.subject = Subject.guest()
        self.loaded = False
        self._loading = False
        self._subscription: Subscription | None = None

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def loading(self) -> bool:
        return self._loading

    def total(self) -> float:
        """Sum of line totals; a line without a total counts as 0."""
        return sum(item.total_price or 0 for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    # -------------------------------------------------------------------
    # Loading and merging
    # -------------------------------------------------------------------
    def load(self, subject: Subject | str | None = None) -> tuple[CartItem, ...]:
        """Load the cart owned by ``subject`` (guest when omitted).

        ``subject`` may also be given in its key form, ``"guest"`` or ``"user:{id}"``.
        """
        if isinstance(subject, str):
            subject = Subject.parse(subject)
        subject = subject or Subject.guest()
        self._loading = True
        try:
            self.subject = subject
            if subject.is_guest:
                self._items = self._read_local()
            else:
                self._items = self._load_user_cart(subject.user_id)
            self.loaded = True
        finally:
            self._loading = False

        logger.info("Cart loaded", subject=subject.key, item_count=len(self._items))
        return self.items

    def _read_local(self) -> list[CartItem]:
        return parse_items(self.local.get(CART_KEY), source="local")

    def _fetch_remote(self, user_id: str) -> list[CartItem] | None:
        try:
            return self.remote.fetch(user_id)
        except RemoteCartError as exc:
            # Unreadable is treated like absent; the page must still load.
            logger.warning("Remote cart read failed, continuing without it", user_id=user_id, error=exc.message)
            return None

    def _load_user_cart(self, user_id: str) -> list[CartItem]:
        local_items = self._read_local()
        remote_items = self._fetch_remote(user_id)

        if not local_items:
            return remote_items or []

        merged = merge_carts(remote_items or [], local_items)
        try:
            self.remote.upsert(user_id, merged)
        except RemoteCartError as exc:
            # The guest cart stays on the device, so the next load retries the merge.
            logger.error("Cart merge write failed, keeping guest cart", user_id=user_id, error=exc.message)
            return merged

        self.local.remove(CART_KEY)
        logger.info(
            "Guest cart merged",
            user_id=user_id,
            remote_count=len(remote_items or []),
            local_count=len(local_items),
            merged_count=len(merged),
        )
        return merged

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def save(self) -> bool:
        """Write the cart to its owner's storage. Returns False when the write did not happen."""
        if self._loading:
            logger.debug("Cart save suppressed while loading", subject=self.subject.key)
            return False

        if self.subject.is_guest:
            self.local.set(CART_KEY, [item.to_wire() for item in self._items])
            return True

        try:
            self.remote.upsert(self.subject.user_id, list(self._items))
        except RemoteCartError as exc:
            logger.error("Cart save failed", subject=self.subject.key, error=exc.message)
            return False
        return True

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, item: CartItem | dict) -> CartItem:
        """Append a line with a fresh cart id and persist. Returns the stored line."""
        if isinstance(item, dict):
            item = CartItem.from_wire(item)
        line = item.with_cart_id(self._new_cart_id())
        self._items = [*self._items, line]
        self.save()
        return line

    def remove(self, cart_id) -> bool:
        """Drop the line with ``cart_id``. Returns False (and writes nothing) when it is not in the cart."""
        remaining = [item for item in self._items if item.cart_id != cart_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self.save()
        return True

    def clear(self) -> None:
        self._items = []
        self.save()

    # -------------------------------------------------------------------
    # Auth state
    # -------------------------------------------------------------------
    def attach(self, stream: AuthEventStream) -> Subscription:
        """Follow ``stream``: sign-in switches to the user's cart, sign-out back to the guest cart."""
        self.detach()
        self._subscription = stream.subscribe()
        self.sync()
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def sync(self) -> None:
        """Apply auth events delivered since the last sync."""
        if self._subscription is None:
            return
        for event, session in self._subscription:
            self.handle_auth_event(event, session)

    def handle_auth_event(self, event: AuthEvent, session: Session | None) -> None:
        if event == AuthEvent.SIGNED_OUT or session is None:
            target = Subject.guest()
        else:
            target = Subject.user(session.user_id)

        if self.loaded and target == self.subject:
            return
        self.load(target)
