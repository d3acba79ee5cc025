"""BDD tests for the checkout flow."""

from pytest_bdd import given, parsers, scenarios, then, when
from storefront.checkout.orchestrator import CheckoutState

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("the cart holds a racket priced {price:f}"))
def cart_with_racket(cart_store, racket, price):
    cart_store.add(dict(racket, unitPrice=price, totalPrice=price))


@given("the shopper has entered contact and shipping details")
def contact_and_shipping(checkout):
    checkout.set_email("ana@example.com")
    checkout.update_shipping(full_name="Ana Lim", address="1 Court Rd", city="Austin", state="TX", zip_code="73301")


@given("the shopper has entered contact details with store pickup")
def contact_and_pickup(checkout):
    checkout.set_email("ana@example.com")
    checkout.set_delivery_method("pickup")
    checkout.update_pickup(full_name="Ana Lim", phone_number="555-0100")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper pays with PayPal and the capture is "{status}"'))
def pay_with_paypal(checkout, api, status):
    api.capture_body = {"id": "PAYPAL-ORDER-1", "status": status}
    order_id = checkout.create_order()
    checkout.approve(order_id)


@when("the shopper pays by card")
def pay_by_card(checkout):
    checkout.set_payment_method("card")
    checkout.update_card(number="4111 1111 1111 1111", expiry="12/29", cvv="123", name="Ana Lim")
    checkout.submit_card()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the checkout is "{state}"'))
def checkout_state(checkout, state):
    assert checkout.state == CheckoutState(state)


@then(parsers.cfparse('the shopper is sent to "{path}"'))
def redirected(checkout, path):
    assert checkout.redirect == path


@then(parsers.cfparse("the receipt total is {total:f}"))
def receipt_total(receipts, total):
    assert receipts.load().total == total


@then(parsers.cfparse('the order was recorded for "{email}"'))
def order_recorded(api, email):
    assert [order["customer_email"] for order in api.orders] == [email]


@then("no receipt is saved")
def no_receipt(receipts):
    assert receipts.load() is None
