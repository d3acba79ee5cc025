"""Errors raised by the storefront client components."""


class StorefrontError(Exception):
    """Base class for storefront client failures."""

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ProviderError(StorefrontError):
    """The payment provider step failed: network error, non-OK status or a missing id/status."""


class RemoteCartError(StorefrontError):
    """The remote cart record could not be read or written."""


class OrderRecordError(StorefrontError):
    """The order endpoint rejected or failed to store a checkout."""


class CheckoutError(StorefrontError):
    """A checkout action was attempted in a state that does not allow it."""
