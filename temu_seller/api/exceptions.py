# temu_seller/api/exceptions.py
"""Errors raised by the Temu seller client.

Transport failures are not wrapped: ``requests.RequestException`` reaches
the caller as raised by ``requests``.
"""
from typing import List, Optional


class TemuError(RuntimeError):
    """Base class for client failures."""


class ValidationError(TemuError, ValueError):
    """Required request fields are missing. Nothing was sent."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class SignatureError(TemuError):
    """The Anti-Content signer failed for an outgoing request."""


class APIError(TemuError):
    """The platform answered with success=false or an HTTP error status."""

    def __init__(self, message: str, error_code: Optional[int] = None, status_code: Optional[int] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class RequestCancelled(TemuError):
    """The caller's cancellation event was set before the call completed."""
