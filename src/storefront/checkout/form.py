"""Checkout form state and its validity predicates.

Every predicate is a pure function of the form, evaluated again after each
field change. Card number and expiry formatting are display transforms
only; validation always works on the digits.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EXPIRY_PATTERN = re.compile(r"^\d{2}/\d{2}$")
CVV_PATTERN = re.compile(r"^\d{3,4}$")
CARD_NUMBER_LENGTH = 16


class DeliveryMethod(Enum):
    SHIPPING = "shipping"
    PICKUP = "pickup"


class PaymentMethod(Enum):
    PAYPAL = "paypal"
    CARD = "card"


@dataclass(frozen=True)
class ShippingAddress:
    full_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "United States"


@dataclass(frozen=True)
class PickupContact:
    full_name: str = ""
    phone_number: str = ""


@dataclass(frozen=True)
class CardDetails:
    number: str = ""
    expiry: str = ""
    cvv: str = ""
    name: str = ""


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def _filled(*values: str) -> bool:
    return all((value or "").strip() for value in values)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email or ""))


def is_shipping_valid(shipping: ShippingAddress) -> bool:
    return _filled(shipping.full_name, shipping.address, shipping.city, shipping.state, shipping.zip_code)


def is_pickup_valid(pickup: PickupContact) -> bool:
    return _filled(pickup.full_name, pickup.phone_number)


def is_card_valid(card: CardDetails) -> bool:
    return (
        len(_digits(card.number)) == CARD_NUMBER_LENGTH
        and bool(EXPIRY_PATTERN.fullmatch(card.expiry or ""))
        and bool(CVV_PATTERN.fullmatch(card.cvv or ""))
        and _filled(card.name)
    )


def format_card_number(value: str) -> str:
    """``4111111111111111`` → ``4111 1111 1111 1111``; extra digits are cut off."""
    digits = _digits(value)[:CARD_NUMBER_LENGTH]
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


def format_expiry(value: str) -> str:
    """``1229`` → ``12/29``. The slash appears once a third digit is typed."""
    digits = _digits(value)[:4]
    if len(digits) > 2:
        return f"{digits[:2]}/{digits[2:]}"
    return digits


@dataclass(frozen=True)
class CheckoutForm:
    email: str = ""
    delivery_method: DeliveryMethod = DeliveryMethod.SHIPPING
    shipping: ShippingAddress = field(default_factory=ShippingAddress)
    pickup: PickupContact = field(default_factory=PickupContact)
    payment_method: PaymentMethod = PaymentMethod.PAYPAL
    card: CardDetails = field(default_factory=CardDetails)

    @property
    def is_email_valid(self) -> bool:
        return is_valid_email(self.email)

    @property
    def is_delivery_valid(self) -> bool:
        if self.delivery_method == DeliveryMethod.SHIPPING:
            return is_shipping_valid(self.shipping)
        return is_pickup_valid(self.pickup)

    @property
    def is_payment_valid(self) -> bool:
        if self.payment_method == PaymentMethod.CARD:
            return is_card_valid(self.card)
        return True

    @property
    def can_proceed_to_payment(self) -> bool:
        return self.is_email_valid and self.is_delivery_valid and self.is_payment_valid

    @property
    def customer_name(self) -> str | None:
        if self.delivery_method == DeliveryMethod.SHIPPING:
            name = self.shipping.full_name
        else:
            name = self.pickup.full_name
        return name.strip() or None

    def shipping_cost(self, flat_rate: float) -> float:
        return flat_rate if self.delivery_method == DeliveryMethod.SHIPPING else 0.0

    def with_shipping(self, **fields) -> "CheckoutForm":
        return replace(self, shipping=replace(self.shipping, **fields))

    def with_pickup(self, **fields) -> "CheckoutForm":
        return replace(self, pickup=replace(self.pickup, **fields))

    def with_card(self, **fields) -> "CheckoutForm":
        if "number" in fields:
            fields["number"] = format_card_number(fields["number"])
        if "expiry" in fields:
            fields["expiry"] = format_expiry(fields["expiry"])
        return replace(self, card=replace(self.card, **fields))
