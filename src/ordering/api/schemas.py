"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), kept separate from
internal Protean commands.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class OrderLineItemSchema(BaseModel):
    id: str
    product_name: str
    quantity: int
    unit_price: float
    currency: str
    line_total: float

    @classmethod
    def from_line_item(cls, line_item) -> "OrderLineItemSchema":
        return cls(
            id=str(line_item.id),
            product_name=line_item.product_name,
            quantity=line_item.quantity,
            unit_price=line_item.unit_price,
            currency=line_item.currency,
            line_total=line_item.line_total,
        )


class OrderSchema(BaseModel):
    id: str
    store_id: str
    customer_email: str
    customer_name: str | None = None
    total_price: float
    currency: str
    status: str
    created_at: datetime | None = None
    user_id: str | None = None
    items: list[OrderLineItemSchema] | None = None

    @classmethod
    def from_order(cls, order, line_items=None) -> "OrderSchema":
        return cls(
            id=str(order.id),
            store_id=str(order.store_id),
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            total_price=order.total_price,
            currency=order.currency,
            status=order.status,
            created_at=order.created_at,
            user_id=str(order.user_id) if order.user_id else None,
            items=[OrderLineItemSchema.from_line_item(li) for li in line_items] if line_items is not None else None,
        )


class OrderHistoryResponse(BaseModel):
    orders: list[OrderSchema]


class SaveCartRequest(BaseModel):
    items: list[dict[str, Any]]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "id": 7,
                            "title": "Astrox 88D Pro",
                            "unitPrice": 229.0,
                            "quantity": 1,
                            "totalPrice": 229.0,
                            "customization": {"string": "BG80", "tension": 26},
                            "cartId": "9f1c2a7b3d4e",
                        }
                    ]
                }
            ]
        }
    }


class CartRecordResponse(BaseModel):
    user_id: str
    items: list[dict[str, Any]]
    updated_at: datetime | None = None
