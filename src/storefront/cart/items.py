"""Cart line item as stored in local storage and in the remote cart record.

The wire format is the browser's: camelCase keys, an opaque customization
bag, and a ``cartId`` assigned when the line is added. Unknown keys are kept
so lines round-trip untouched between storage and the order endpoint.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CartItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: int | str
    title: str = ""
    unit_price: float | None = Field(default=None, alias="unitPrice")
    quantity: int = 1
    total_price: float | None = Field(default=None, alias="totalPrice")
    customization: dict[str, Any] = Field(default_factory=dict)
    cart_id: int | str | None = Field(default=None, alias="cartId")

    @field_validator("customization", mode="before")
    @classmethod
    def _empty_customization(cls, value):
        return {} if value is None else value

    def same_product(self, other: "CartItem") -> bool:
        """Same product id with a structurally equal customization."""
        return self.id == other.id and self.customization == other.customization

    def with_cart_id(self, cart_id: str) -> "CartItem":
        return self.model_copy(update={"cart_id": cart_id})

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, data: dict) -> "CartItem":
        return cls.model_validate(data)
