# temu_seller/api/envelopes.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar
import requests
from temu_seller.api.exceptions import APIError

TRANSIENT_ERROR_CODE = 4000000
TRANSIENT_ERROR_MSG = "SYSTEM_EXCEPTION"

E = TypeVar("E", bound="ResponseEnvelope")


def decode_json_object(response: requests.Response) -> Optional[Dict[str, Any]]:
    """Return the body as a dict, or None if it is not a JSON object."""
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def is_transient_failure(payload: Optional[Dict[str, Any]]) -> bool:
    """True for the platform's retryable SYSTEM_EXCEPTION answer."""
    if not payload:
        return False
    error_msg = payload.get("errorMsg")
    return (
        payload.get("success") is not True
        and payload.get("errorCode") == TRANSIENT_ERROR_CODE
        and isinstance(error_msg, str)
        and error_msg.casefold() == TRANSIENT_ERROR_MSG.casefold()
    )


@dataclass(frozen=True)
class ResponseEnvelope(ABC):
    """Outcome shared by both wire shapes: success flag, error info, payload."""
    success: bool
    error_code: Optional[int]
    message: str
    result: Any

    @classmethod
    @abstractmethod
    def from_payload(cls: Type[E], payload: Dict[str, Any]) -> E:
        """Decode this wire shape from a JSON object."""

    @classmethod
    def from_response(cls: Type[E], response: requests.Response) -> E:
        payload = decode_json_object(response)
        if payload is None:
            return cls(
                success=False, error_code=None,
                message=f"unexpected response body (HTTP {response.status_code})", result=None,
            )
        return cls.from_payload(payload)


@dataclass(frozen=True)
class KuajingmaihuoEnvelope(ResponseEnvelope):
    """``{"success", "errorCode", "errorMsg", "result"}`` from the seller portal."""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "KuajingmaihuoEnvelope":
        return cls(
            success=payload.get("success") is True,
            error_code=payload.get("errorCode"),
            message=payload.get("errorMsg") or "",
            result=payload.get("result"),
        )


@dataclass(frozen=True)
class SellerCentralEnvelope(ResponseEnvelope):
    """``{"success", "error_code", "error_msg", "result"}`` from Seller Central."""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SellerCentralEnvelope":
        return cls(
            success=payload.get("success") is True,
            error_code=payload.get("error_code"),
            message=payload.get("error_msg") or "",
            result=payload.get("result"),
        )


def recheck_error(response: requests.Response, envelope_cls: Type[E]) -> E:
    """Decode ``response`` as ``envelope_cls`` and raise APIError on failure.

    Args:
        response (requests.Response): Final response of the call.
        envelope_cls (Type[E]): The wire shape the endpoint is bound to.

    Returns:
        E: The decoded envelope, only when it reports success.

    Raises:
        APIError: HTTP status >= 400 or ``success`` is false.
    """
    envelope = envelope_cls.from_response(response)
    if response.status_code >= 400:
        message = envelope.message.strip() or f"HTTP {response.status_code}"
        raise APIError(message, envelope.error_code, response.status_code)
    if not envelope.success:
        raise APIError(envelope.message.strip(), envelope.error_code, response.status_code)
    return envelope
