"""Checkout Orchestrator: sequences payment and order persistence.

State Machine:
    EMPTY (no cart → redirect to /cart)
    COLLECTING_CONTACT → COLLECTING_DELIVERY → READY_FOR_PAYMENT
    READY_FOR_PAYMENT → AWAITING_PAYMENT_CAPTURE → ORDER_PERSISTED → COMPLETE
    any payment/order error → FAILED → back to READY_FOR_PAYMENT

The first four states are derived from the cart and the form on every read;
the payment states are entered by the payment calls. Leaving FAILED keeps
everything the buyer typed.

Once the provider reports the capture as COMPLETED the buyer has paid, so
the order record is a best-effort write: its failure is logged and the
buyer still sees the receipt.
"""

from dataclasses import dataclass, replace
from enum import Enum
from uuid import uuid4

import structlog

from shared.config import Settings
from storefront.cart.store import CartStore
from storefront.checkout.form import CheckoutForm, DeliveryMethod, PaymentMethod
from storefront.checkout.receipt import OrderSummary, ReceiptStore
from storefront.client import StorefrontClient
from storefront.exceptions import CheckoutError, ProviderError, StorefrontError

logger = structlog.get_logger(__name__)

CAPTURE_COMPLETED = "COMPLETED"
PAYMENT_FAILED_NOTICE = "Payment failed. Please try again."
PAYPAL_NOT_CONFIGURED_NOTICE = "PayPal is not configured. Add PAYPAL_CLIENT_ID to enable payments."


class CheckoutState(Enum):
    EMPTY = "Empty"
    COLLECTING_CONTACT = "CollectingContact"
    COLLECTING_DELIVERY = "CollectingDelivery"
    READY_FOR_PAYMENT = "ReadyForPayment"
    AWAITING_PAYMENT_CAPTURE = "AwaitingPaymentCapture"
    ORDER_PERSISTED = "OrderPersisted"
    COMPLETE = "Complete"
    FAILED = "Failed"


_REDIRECTS = {
    CheckoutState.EMPTY: "/cart",
    CheckoutState.COMPLETE: "/receipt",
}

_SETTLED = (CheckoutState.ORDER_PERSISTED, CheckoutState.COMPLETE)


@dataclass(frozen=True)
class Quote:
    """What the buyer is charged for: fixed when the payment starts."""

    items: list[dict]
    subtotal: float
    shipping_cost: float
    total: float


class CheckoutOrchestrator:
    def __init__(
        self,
        cart: CartStore,
        client: StorefrontClient,
        receipts: ReceiptStore,
        settings: Settings,
    ) -> None:
        self.cart = cart
        self.client = client
        self.receipts = receipts
        self.settings = settings
        self.form = CheckoutForm()
        self.error: str | None = None
        self.provider_order_id: str | None = None
        self.quote: Quote | None = None
        self.order_record: dict | None = None
        self.receipt: OrderSummary | None = None
        self._phase: CheckoutState | None = None

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def state(self) -> CheckoutState:
        if self._phase is not None:
            return self._phase
        if not self.cart.count:
            return CheckoutState.EMPTY
        if not self.form.is_email_valid:
            return CheckoutState.COLLECTING_CONTACT
        if not (self.form.is_delivery_valid and self.form.is_payment_valid):
            return CheckoutState.COLLECTING_DELIVERY
        return CheckoutState.READY_FOR_PAYMENT

    @property
    def redirect(self) -> str | None:
        return _REDIRECTS.get(self.state)

    @property
    def paypal_available(self) -> bool:
        return self.settings.paypal_enabled

    @property
    def configuration_notice(self) -> str | None:
        return None if self.paypal_available else PAYPAL_NOT_CONFIGURED_NOTICE

    @property
    def subtotal(self) -> float:
        return self.cart.total()

    @property
    def shipping_cost(self) -> float:
        return self.form.shipping_cost(self.settings.shipping_cost)

    @property
    def order_total(self) -> float:
        return round(self.subtotal + self.shipping_cost, 2)

    def _quote(self) -> Quote:
        return Quote(
            items=[item.to_wire() for item in self.cart.items],
            subtotal=self.subtotal,
            shipping_cost=self.shipping_cost,
            total=self.order_total,
        )

    # -------------------------------------------------------------------
    # Form edits
    # -------------------------------------------------------------------
    def _edit(self, form: CheckoutForm) -> None:
        if self._phase in _SETTLED:
            raise CheckoutError("The order has already been placed")
        if self._phase == CheckoutState.AWAITING_PAYMENT_CAPTURE:
            raise CheckoutError("Payment is in progress; cancel it to change the order")
        self.form = form
        if self._phase == CheckoutState.FAILED:
            self.dismiss_error()

    def set_email(self, email: str) -> None:
        self._edit(self._replace(email=email))

    def set_delivery_method(self, method: DeliveryMethod | str) -> None:
        self._edit(self._replace(delivery_method=DeliveryMethod(method)))

    def update_shipping(self, **fields) -> None:
        self._edit(self.form.with_shipping(**fields))

    def update_pickup(self, **fields) -> None:
        self._edit(self.form.with_pickup(**fields))

    def set_payment_method(self, method: PaymentMethod | str) -> None:
        self._edit(self._replace(payment_method=PaymentMethod(method)))

    def update_card(self, **fields) -> None:
        self._edit(self.form.with_card(**fields))

    def _replace(self, **fields) -> CheckoutForm:
        return replace(self.form, **fields)

    def dismiss_error(self) -> None:
        """Leave FAILED; the state is derived from the form again."""
        if self._phase == CheckoutState.FAILED:
            self._phase = None
        self.error = None

    def _fail(self, message: str) -> None:
        self._phase = CheckoutState.FAILED
        self.error = message

    def _require(self, action: str, *states: CheckoutState) -> None:
        if self.state not in states:
            raise CheckoutError(f"Cannot {action} while checkout is {self.state.value}")

    # -------------------------------------------------------------------
    # PayPal path
    # -------------------------------------------------------------------
    def create_order(self) -> str:
        """Create the provider order for the current total and return its id.

        Any failure is surfaced as the checkout error and re-raised so the
        provider's button flow aborts.
        """
        if not self.paypal_available:
            raise CheckoutError(PAYPAL_NOT_CONFIGURED_NOTICE)
        self._require("create a payment order", CheckoutState.READY_FOR_PAYMENT)

        quote = self._quote()
        try:
            order_id = self.client.create_provider_order(quote.total)
        except ProviderError as exc:
            logger.error("Error creating provider order", amount=quote.total, error=exc.message)
            self._fail(f"Failed to create order: {exc.message}")
            raise

        self.provider_order_id = order_id
        self.quote = quote
        self._phase = CheckoutState.AWAITING_PAYMENT_CAPTURE
        logger.info("Provider order created", provider_order_id=order_id, amount=quote.total)
        return order_id

    def approve(self, order_id: str | None = None) -> OrderSummary | None:
        """Capture the approved provider order and finish checkout.

        Returns the receipt, or None when the provider reports a status other
        than COMPLETED; the cart is left untouched in that case.
        """
        self._require("capture payment", CheckoutState.AWAITING_PAYMENT_CAPTURE)
        order_id = order_id or self.provider_order_id

        try:
            status = self.client.capture_provider_order(order_id)
        except ProviderError as exc:
            logger.error("Error capturing provider order", provider_order_id=order_id, error=exc.message)
            self._fail(PAYMENT_FAILED_NOTICE)
            raise

        if status != CAPTURE_COMPLETED:
            logger.warning("Payment not completed", provider_order_id=order_id, status=status)
            self._fail(f"Payment was not completed (status {status}). Please try again.")
            return None

        return self._complete(order_id, "PayPal", self.quote)

    def cancel_payment(self) -> None:
        """The buyer closed the provider popup without approving."""
        if self._phase == CheckoutState.AWAITING_PAYMENT_CAPTURE:
            self._phase = None
            self.provider_order_id = None
            self.quote = None

    def on_provider_error(self, error: Exception | str) -> None:
        """Error reported by the provider's own button flow."""
        if self._phase in _SETTLED:
            logger.warning("Provider error after checkout completed", error=str(error))
            return
        logger.error("Provider error", error=str(error))
        self._fail(PAYMENT_FAILED_NOTICE)

    # -------------------------------------------------------------------
    # Card path
    # -------------------------------------------------------------------
    def submit_card(self) -> OrderSummary:
        if self.form.payment_method != PaymentMethod.CARD:
            raise CheckoutError("Card payment is not selected")
        self._require("submit card payment", CheckoutState.READY_FOR_PAYMENT)

        order_id = f"CARD-{uuid4().hex[:10].upper()}"
        return self._complete(order_id, "Card", self._quote())

    # -------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------
    def _complete(self, order_id: str, payment_method: str, quote: Quote) -> OrderSummary:
        self.order_record = self._record_order(quote.items, quote.total)
        self._phase = CheckoutState.ORDER_PERSISTED

        shipping = self.form.delivery_method == DeliveryMethod.SHIPPING
        summary = OrderSummary(
            order_id=order_id,
            email=self.form.email,
            delivery_method=self.form.delivery_method.value,
            shipping=vars(self.form.shipping) if shipping else None,
            pickup=None if shipping else vars(self.form.pickup),
            items=quote.items,
            subtotal=quote.subtotal,
            shipping_cost=quote.shipping_cost,
            total=quote.total,
            payment_method=payment_method,
        )
        self.receipts.save(summary)
        self.cart.clear()

        self.receipt = summary
        self.error = None
        self._phase = CheckoutState.COMPLETE
        logger.info("Checkout complete", order_id=order_id, payment_method=payment_method, total=quote.total)
        return summary

    def _record_order(self, items: list[dict], total: float) -> dict | None:
        try:
            return self.client.record_order(
                customer_email=self.form.email,
                customer_name=self.form.customer_name,
                total_price=total,
                items=items,
                user_id=self.cart.subject.user_id,
            )
        except StorefrontError as exc:
            # Payment is already captured; the buyer cannot fix a failed record.
            logger.error("Failed to save order to database", error=exc.message, total=total)
            return None
