"""Pydantic request/response schemas for the PayPal proxy API.

Field names follow what the browser-side PayPal buttons send and expect
(``orderID`` on capture), not Python naming.
"""

from pydantic import BaseModel, Field


class CreateProviderOrderRequest(BaseModel):
    amount: float = Field(gt=0)

    model_config = {"json_schema_extra": {"examples": [{"amount": 239.0}]}}


class ProviderOrderResponse(BaseModel):
    id: str
    status: str


class CaptureOrderRequest(BaseModel):
    orderID: str = Field(min_length=1)  # noqa: N815


class CaptureOrderResponse(BaseModel):
    id: str
    status: str
    payer_email: str | None = None
    capture_id: str | None = None


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    capture_status: str = "COMPLETED"
    failure_reason: str = "Provider unavailable"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    capture_status: str
    failure_reason: str
