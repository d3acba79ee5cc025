"""Guest cart → user cart merge.

A set union keyed on (product id, customization): remote lines come first,
then each local line that has no match among the lines collected so far.
Matching lines are dropped, not summed, so quantities never change.
"""

from storefront.cart.items import CartItem


def merge_carts(remote: list[CartItem], local: list[CartItem]) -> list[CartItem]:
    merged = list(remote)
    for item in local:
        if not any(item.same_product(existing) for existing in merged):
            merged.append(item)
    return merged
