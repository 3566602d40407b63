"""
Multicard Python SDK

A client for the Multicard payment-processing API: invoices, card binding,
holds, payments, payouts, registry queries and webhook signature checks.
"""

import logging

from .client import AsyncMulticardClient, MulticardClient
from .config import MulticardConfig, MulticardSettings
from .errors import (
    AuthenticationError,
    CallbackTimeoutError,
    CardExpiredError,
    CardNotFoundError,
    DebitUnknownError,
    ErrorKind,
    InsufficientFundsError,
    InvalidFieldsError,
    MulticardError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from .response import Response
from .signature import verify_signature

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Clients
    "MulticardClient",
    "AsyncMulticardClient",
    # Configuration
    "MulticardConfig",
    "MulticardSettings",
    # Responses
    "Response",
    # Webhooks
    "verify_signature",
    # Errors
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
]
