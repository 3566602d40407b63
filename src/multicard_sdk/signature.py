"""
Webhook callback signature verification.

Multicard signs callbacks with ``md5(store_id + invoice_id + amount + secret)``
as a hex digest. Amounts are integer tiyin, but callbacks may render them as
``"50000.00"``; the signature is always computed over the integer form.
"""
from __future__ import annotations

import hashlib
import re
from typing import Any, Mapping

_TRAILING_ZERO_DECIMALS = re.compile(r"\.0+\Z")


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_amount(amount: Any) -> str:
    """Strip a trailing ``.0``/``.00``/... suffix; other decimals are kept as-is.

    >>> normalize_amount("500000.00")
    '500000'
    >>> normalize_amount("500000.5")
    '500000.5'
    """
    return _TRAILING_ZERO_DECIMALS.sub("", _as_text(amount))


def secure_compare(a: str, b: str) -> bool:
    """Compare two strings in time that depends only on their length."""
    left = a.encode("utf-8")
    right = b.encode("utf-8")
    if len(left) != len(right):
        return False

    result = 0
    for x, y in zip(left, right):
        result |= x ^ y
    return result == 0


def compute_signature(store_id: Any, invoice_id: Any, amount: Any, secret: str) -> str:
    """Hex digest Multicard expects in the callback's ``sign`` field."""
    payload = f"{_as_text(store_id)}{_as_text(invoice_id)}{normalize_amount(amount)}{secret}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def verify_signature(params: Mapping[str, Any], secret: str) -> bool:
    """Verify a webhook callback.

    Args:
        params: Callback parameters with ``store_id``, ``invoice_id``,
            ``amount`` and ``sign``
        secret: Application secret

    Returns:
        True when ``sign`` matches, compared case-insensitively
    """
    sign = _as_text(params.get("sign"))
    if not sign:
        return False

    expected = compute_signature(
        params.get("store_id"),
        params.get("invoice_id"),
        params.get("amount"),
        secret,
    )
    return secure_compare(expected.lower(), sign.lower())


__all__ = ["compute_signature", "normalize_amount", "secure_compare", "verify_signature"]
