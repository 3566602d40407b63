"""
Cards resource for the Multicard SDK.

Two binding flows are supported: form-based binding (Multicard hosts the card
form and returns a link) and API-based binding, which handles raw card
numbers and therefore requires PCI DSS certification.
"""
from __future__ import annotations

from typing import Any

from ..response import Response
from .base import AsyncBaseResource, SyncBaseResource, encode_path


class AsyncCardsResource(AsyncBaseResource):
    """Async resource for card binding and card token operations."""

    async def create_binding_link(self, **options: Any) -> Response:
        """Create a form-based binding session; the response holds the link and session ID."""
        return await self._post("/card/bind/session", options)

    async def binding_status(self, session_id: str) -> Response:
        return await self._get(f"/card/bind/status/{encode_path(session_id)}")

    async def add(self, card_number: str, card_expiry: str) -> Response:
        """Start API-based binding; Multicard sends an SMS code to the cardholder."""
        return await self._post("/card/add", {"number": card_number, "expiry": card_expiry})

    async def confirm_binding(self, otp_code: str, **params: Any) -> Response:
        return await self._post("/card/bind/confirm", {"code": otp_code, **params})

    async def retrieve(self, token: str) -> Response:
        return await self._get(f"/card/{encode_path(token)}")

    async def check(self, card_number: str) -> Response:
        return await self._get(f"/card/check/{encode_path(card_number)}")

    async def verify_pinfl(self, token: str, pinfl: str) -> Response:
        """Verify card ownership against a personal identification number."""
        return await self._post("/card/verify/pinfl", {"token": token, "pinfl": pinfl})

    async def revoke(self, token: str) -> Response:
        """Unbind a card token."""
        return await self._delete(f"/card/{encode_path(token)}")


class CardsResource(SyncBaseResource):
    """Sync resource for card binding and card token operations."""

    def create_binding_link(self, **options: Any) -> Response:
        """Create a form-based binding session; the response holds the link and session ID."""
        return self._post("/card/bind/session", options)

    def binding_status(self, session_id: str) -> Response:
        return self._get(f"/card/bind/status/{encode_path(session_id)}")

    def add(self, card_number: str, card_expiry: str) -> Response:
        """Start API-based binding; Multicard sends an SMS code to the cardholder."""
        return self._post("/card/add", {"number": card_number, "expiry": card_expiry})

    def confirm_binding(self, otp_code: str, **params: Any) -> Response:
        return self._post("/card/bind/confirm", {"code": otp_code, **params})

    def retrieve(self, token: str) -> Response:
        return self._get(f"/card/{encode_path(token)}")

    def check(self, card_number: str) -> Response:
        return self._get(f"/card/check/{encode_path(card_number)}")

    def verify_pinfl(self, token: str, pinfl: str) -> Response:
        """Verify card ownership against a personal identification number."""
        return self._post("/card/verify/pinfl", {"token": token, "pinfl": pinfl})

    def revoke(self, token: str) -> Response:
        """Unbind a card token."""
        return self._delete(f"/card/{encode_path(token)}")


__all__ = ["AsyncCardsResource", "CardsResource"]
