"""Payouts resource for the Multicard SDK."""
from __future__ import annotations

from typing import Any

from ..response import Response
from .base import AsyncBaseResource, SyncBaseResource, encode_path


class AsyncPayoutsResource(AsyncBaseResource):
    async def create(self, card_number: str, amount: int, **options: Any) -> Response:
        """Create a payout to a card (amount in tiyin)."""
        return await self._post("/payout", {"card_number": card_number, "amount": amount, **options})

    async def confirm(self, payout_id: str) -> Response:
        return await self._post(f"/payout/{encode_path(payout_id)}/confirm")

    async def retrieve(self, payout_id: str) -> Response:
        return await self._get(f"/payout/{encode_path(payout_id)}")


class PayoutsResource(SyncBaseResource):
    def create(self, card_number: str, amount: int, **options: Any) -> Response:
        """Create a payout to a card (amount in tiyin)."""
        return self._post("/payout", {"card_number": card_number, "amount": amount, **options})

    def confirm(self, payout_id: str) -> Response:
        return self._post(f"/payout/{encode_path(payout_id)}/confirm")

    def retrieve(self, payout_id: str) -> Response:
        return self._get(f"/payout/{encode_path(payout_id)}")


__all__ = ["AsyncPayoutsResource", "PayoutsResource"]
