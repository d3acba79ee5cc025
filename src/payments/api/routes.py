"""FastAPI routes for the Payments domain: PayPal order creation and capture."""

import structlog
from fastapi import APIRouter, Depends, HTTPException
from shared.config import Settings, get_settings

from payments.api.schemas import (
    CaptureOrderRequest,
    CaptureOrderResponse,
    ConfigureGatewayRequest,
    CreateProviderOrderRequest,
    GatewayConfigResponse,
    ProviderOrderResponse,
)
from payments.gateway import get_gateway
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import GatewayError, PaymentGateway

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# PayPal Router
# ---------------------------------------------------------------------------
paypal_router = APIRouter(prefix="/api/paypal", tags=["payments"])


@paypal_router.post("/create-order", response_model=ProviderOrderResponse)
async def create_provider_order(
    body: CreateProviderOrderRequest,
    gateway: PaymentGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> ProviderOrderResponse:
    """Create a provider order for the checkout total."""
    try:
        order = gateway.create_order(amount=body.amount, currency=settings.currency)
    except GatewayError as exc:
        logger.error("Provider order creation failed", amount=body.amount, error=exc.message)
        raise HTTPException(status_code=502, detail=exc.message) from exc
    return ProviderOrderResponse(id=order.id, status=order.status)


@paypal_router.post("/capture-order", response_model=CaptureOrderResponse)
async def capture_provider_order(
    body: CaptureOrderRequest,
    gateway: PaymentGateway = Depends(get_gateway),
) -> CaptureOrderResponse:
    """Capture an order the buyer approved in the PayPal popup."""
    try:
        result = gateway.capture_order(body.orderID)
    except GatewayError as exc:
        logger.error("Provider capture failed", provider_order_id=body.orderID, error=exc.message)
        raise HTTPException(status_code=502, detail=exc.message) from exc

    if not result.completed:
        logger.warning("Provider capture not completed", provider_order_id=body.orderID, status=result.status)
    return CaptureOrderResponse(
        id=result.id,
        status=result.status,
        payer_email=result.payer_email,
        capture_id=result.capture_id,
    )


@paypal_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(
    body: ConfigureGatewayRequest,
    gateway: PaymentGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    It allows toggling failure and capture status for manual API testing.
    """
    if settings.is_production:
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        capture_status=body.capture_status,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        capture_status=gateway.capture_status,
        failure_reason=gateway.failure_reason,
    )
