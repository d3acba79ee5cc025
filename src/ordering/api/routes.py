"""FastAPI routes for the Ordering domain: checkout orders, order history and cart records."""

import json

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from shared.config import Settings, get_settings

from ordering.api.schemas import (
    CartRecordResponse,
    OrderHistoryResponse,
    OrderSchema,
    SaveCartRequest,
)
from ordering.cart.management import SaveCart, load_cart
from ordering.order.history import line_items_for_order, orders_for_customer
from ordering.order.line_items import RecordOrderLineItems
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.store.store import resolve_store_id

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api", tags=["orders"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe(messages: dict) -> str:
    return "; ".join(f"{field}: {', '.join(map(str, errors))}" for field, errors in messages.items())


@order_router.post("/create-order", status_code=201)
async def create_order(request: Request, settings: Settings = Depends(get_settings)):
    """Persist a paid checkout.

    1. Validate required fields
    2. Resolve the configured store
    3. Insert the Order (authoritative write)
    4. Insert one line item per cart item (best effort, logged only)
    """
    try:
        payload = await request.json()
    except json.JSONDecodeError:
        return _error(400, "Request body must be JSON")
    if not isinstance(payload, dict):
        return _error(400, "Request body must be a JSON object")

    customer_email = payload.get("customer_email")
    total_price = payload.get("total_price")
    if not customer_email or total_price is None:
        return _error(400, "Missing required fields: customer_email, total_price")
    if isinstance(total_price, bool) or not isinstance(total_price, int | float):
        return _error(400, "total_price must be a number")

    store_id = resolve_store_id(settings.store_slug)
    if not store_id:
        logger.error("Store not found", store_slug=settings.store_slug)
        return _error(500, "Store configuration error")

    logger.info("Creating order", store_slug=settings.store_slug, store_id=store_id)

    try:
        order_id = current_domain.process(
            PlaceOrder(
                store_id=store_id,
                customer_email=customer_email,
                customer_name=payload.get("customer_name"),
                total_price=total_price,
                user_id=payload.get("user_id"),
            ),
            asynchronous=False,
        )
        order = current_domain.repository_for(Order).get(order_id)
    except ValidationError as exc:
        logger.warning("Invalid order", store_id=store_id, errors=exc.messages)
        return _error(400, f"Invalid order: {_describe(exc.messages)}")
    except Exception:
        logger.exception("Error inserting order", store_id=store_id)
        return _error(500, "Failed to create order")

    items = payload.get("items")
    if isinstance(items, list) and items:
        try:
            current_domain.process(
                RecordOrderLineItems(order_id=order_id, store_id=store_id, items=json.dumps(items)),
                asynchronous=False,
            )
        except Exception:
            # Payment is already captured; the order stands without its lines.
            logger.exception("Error inserting order items", order_id=order_id)

    return JSONResponse(
        status_code=201,
        content={"success": True, "order": OrderSchema.from_order(order).model_dump(mode="json")},
    )


@order_router.get("/orders", response_model=OrderHistoryResponse)
async def list_orders(email: str | None = None, settings: Settings = Depends(get_settings)):
    """Order history for a customer email in the configured store, newest first."""
    if not email:
        raise HTTPException(status_code=400, detail="email is required")

    store_id = resolve_store_id(settings.store_slug)
    if not store_id:
        logger.error("Store not found", store_slug=settings.store_slug)
        raise HTTPException(status_code=500, detail="Store configuration error")

    orders = orders_for_customer(email, store_id)
    return OrderHistoryResponse(
        orders=[OrderSchema.from_order(order, line_items_for_order(str(order.id))) for order in orders]
    )


# ---------------------------------------------------------------------------
# Cart Record Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/carts", tags=["carts"])


@cart_router.get("/{user_id}", response_model=CartRecordResponse)
async def get_cart(user_id: str) -> CartRecordResponse:
    try:
        cart = load_cart(user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Cart not found") from None
    return CartRecordResponse(user_id=str(cart.user_id), items=cart.item_list, updated_at=cart.updated_at)


@cart_router.put("/{user_id}", response_model=CartRecordResponse)
async def save_cart(user_id: str, body: SaveCartRequest) -> CartRecordResponse:
    current_domain.process(SaveCart(user_id=user_id, items=json.dumps(body.items)), asynchronous=False)
    cart = load_cart(user_id)
    return CartRecordResponse(user_id=str(cart.user_id), items=cart.item_list, updated_at=cart.updated_at)
