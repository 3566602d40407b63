"""Error models for the Multicard SDK.

Every failure raised by the SDK is a :class:`MulticardError`. The concrete
class tells you the kind of failure (and ``err.kind`` carries the same
information as an :class:`ErrorKind` tag), while the shared payload keeps
everything the API sent back so callers never need to re-parse the body.

Classification is two-tiered: a recognised business ``error.code`` wins
regardless of HTTP status, otherwise the status code decides.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Type


class ErrorKind(str, Enum):
    """Discriminator carried by every SDK error."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    INVALID_FIELDS = "invalid_fields"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    CARD_NOT_FOUND = "card_not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    CARD_EXPIRED = "card_expired"
    DEBIT_UNKNOWN = "debit_unknown"
    CALLBACK_TIMEOUT = "callback_timeout"
    UNKNOWN = "unknown"


class MulticardError(Exception):
    """Base exception for Multicard SDK."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    retryable: bool = False

    def __init__(
        self,
        message: Optional[str] = None,
        http_status: Optional[int] = None,
        error_code: Optional[str] = None,
        error_details: Any = None,
        response_body: Any = None,
    ):
        self.message = message or _default_message(http_status)
        super().__init__(self.message)
        self.http_status = http_status
        self.error_code = error_code
        self.error_details = error_details
        self.response_body = response_body

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "kind": self.kind.value,
                "http_status": self.http_status,
                "code": self.error_code,
                "details": self.error_details,
                "message": self.message,
            }
        }


def _default_message(http_status: Optional[int]) -> str:
    if http_status is None:
        return "Multicard API error"
    return f"Multicard API error (HTTP {http_status})"


class NetworkError(MulticardError):
    """Timeout, refused/reset connection or DNS failure."""

    kind = ErrorKind.NETWORK
    retryable = True


class AuthenticationError(MulticardError):
    """Missing, expired or rejected bearer token."""

    kind = ErrorKind.AUTHENTICATION


class ValidationError(MulticardError):
    """4xx response without a more specific business code."""

    kind = ErrorKind.VALIDATION


class NotFoundError(MulticardError):
    kind = ErrorKind.NOT_FOUND


class RateLimitError(MulticardError):
    kind = ErrorKind.RATE_LIMIT
    retryable = True


class ServerError(MulticardError):
    kind = ErrorKind.SERVER
    retryable = True


# Business errors, identified by ``error.code`` in the response envelope.

class InvalidFieldsError(ValidationError):
    kind = ErrorKind.INVALID_FIELDS


class CardNotFoundError(ValidationError):
    kind = ErrorKind.CARD_NOT_FOUND


class InsufficientFundsError(ValidationError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


class CardExpiredError(ValidationError):
    kind = ErrorKind.CARD_EXPIRED


class DebitUnknownError(MulticardError):
    """The debit outcome is unknown; check the payment status before retrying."""

    kind = ErrorKind.DEBIT_UNKNOWN


class CallbackTimeoutError(MulticardError):
    kind = ErrorKind.CALLBACK_TIMEOUT


ERROR_CODE_MAP: Dict[str, Type[MulticardError]] = {
    "ERROR_CARD_NOT_FOUND": CardNotFoundError,
    "ERROR_INSUFFICIENT_FUNDS": InsufficientFundsError,
    "ERROR_CARD_EXPIRED": CardExpiredError,
    "ERROR_DEBIT_UNKNOWN": DebitUnknownError,
    "ERROR_CALLBACK_TIMEOUT": CallbackTimeoutError,
    "ERROR_FIELDS": InvalidFieldsError,
}


def error_class_for_status(status: int) -> Type[MulticardError]:
    """Fallback classification when no business code is recognised."""
    if status == 401:
        return AuthenticationError
    if status == 404:
        return NotFoundError
    if status == 429:
        return RateLimitError
    if 400 <= status <= 499:
        return ValidationError
    if 500 <= status <= 599:
        return ServerError
    return MulticardError


def error_from_response(status: int, body: Any) -> MulticardError:
    """Build the error for a non-2xx response.

    Args:
        status: HTTP status code
        body: Decoded response body (any JSON value, or ``{"raw": text}``)

    Returns:
        The classified error, ready to be raised
    """
    error_code = None
    error_details = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error_code = body["error"].get("code")
        error_details = body["error"].get("details")

    error_class = ERROR_CODE_MAP.get(error_code) if isinstance(error_code, str) else None
    if error_class is None:
        error_class = error_class_for_status(status)

    message = error_details if isinstance(error_details, str) and error_details else None
    return error_class(
        message,
        http_status=status,
        error_code=error_code,
        error_details=error_details,
        response_body=body,
    )


__all__ = [
    "ErrorKind",
    "MulticardError",
    "NetworkError",
    "AuthenticationError",
    "ValidationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "InvalidFieldsError",
    "CardNotFoundError",
    "InsufficientFundsError",
    "CardExpiredError",
    "DebitUnknownError",
    "CallbackTimeoutError",
    "ERROR_CODE_MAP",
    "error_class_for_status",
    "error_from_response",
]
