"""Shared step definitions for the storefront scenarios."""

from pytest_bdd import parsers, then


@then("the cart is empty")
def cart_is_empty(cart_store):
    assert cart_store.count == 0


@then(parsers.cfparse("the cart still holds {count:d} item"))
def cart_still_holds(cart_store, count):
    assert cart_store.count == count
