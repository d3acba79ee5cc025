"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and PayPalGateway
(production) without changing any route or client code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

CAPTURE_COMPLETED = "COMPLETED"


class GatewayError(Exception):
    """The payment provider could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


@dataclass(frozen=True)
class ProviderOrder:
    """A payment order created with the provider, awaiting buyer approval."""

    id: str
    status: str


@dataclass(frozen=True)
class CaptureResult:
    """Result of capturing an approved provider order."""

    id: str
    status: str
    payer_email: str | None = None
    capture_id: str | None = None

    @property
    def completed(self) -> bool:
        return self.status == CAPTURE_COMPLETED


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_order(self, amount: float, currency: str) -> ProviderOrder:
        """Create a provider order for ``amount`` that the buyer then approves."""
        ...

    @abstractmethod
    def capture_order(self, order_id: str) -> CaptureResult:
        """Capture the funds of an approved provider order."""
        ...
