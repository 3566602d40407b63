"""
Holds resource for the Multicard SDK.

This module provides both async and sync interfaces for hold
(pre-authorization) operations: block funds on a card, then capture them
fully or partially, or cancel the hold to release them.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

from ..response import Response
from .base import AsyncBaseResource, SyncBaseResource, compact, encode_path


def _create_body(
    card_token: str,
    amount: int,
    invoice_id: str,
    store_id: Optional[Union[int, str]],
    options: Dict[str, Any],
) -> Dict[str, Any]:
    return compact(
        {
            "card": {"token": card_token},
            "amount": amount,
            "store_id": store_id,
            "invoice_id": invoice_id,
            **options,
        }
    )


class AsyncHoldsResource(AsyncBaseResource):
    """Async resource for hold (pre-authorization) operations.

    Example:
        ```python
        async with AsyncMulticardClient(application_id="...", secret="...") as client:
            hold = await client.holds.create(
                card_token="card_abc",
                amount=500000,
                invoice_id="ORD-001",
            )
            await client.holds.capture(hold["id"], amount=250000)
        ```
    """

    async def create(
        self,
        card_token: str,
        amount: int,
        invoice_id: str,
        store_id: Optional[Union[int, str]] = None,
        **options: Any,
    ) -> Response:
        """Create a hold (pre-authorization).

        Args:
            card_token: Token of a bound card
            amount: Amount in tiyin
            invoice_id: Your order ID
            store_id: Store ID (defaults to the configured store)
            **options: Extra fields passed through to the API

        Returns:
            Response with the hold details
        """
        body = _create_body(card_token, amount, invoice_id, self._store_id(store_id), options)
        return await self._post("/hold", body)

    async def confirm(self, hold_id: str, otp_code: Optional[str] = None) -> Response:
        """Confirm a hold, submitting the SMS code when the bank asks for one."""
        body = {"code": otp_code} if otp_code else {}
        return await self._post(f"/hold/{encode_path(hold_id)}/confirm", body)

    async def capture(self, hold_id: str, amount: Optional[int] = None) -> Response:
        """Capture held funds.

        Args:
            hold_id: The hold ID
            amount: Partial capture amount in tiyin (None captures the full hold)
        """
        body = {"amount": amount} if amount is not None else {}
        return await self._post(f"/hold/{encode_path(hold_id)}/charge", body)

    async def retrieve(self, hold_id: str) -> Response:
        return await self._get(f"/hold/{encode_path(hold_id)}")

    async def cancel(self, hold_id: str) -> Response:
        """Cancel a hold and release the blocked funds."""
        return await self._delete(f"/hold/{encode_path(hold_id)}")


class HoldsResource(SyncBaseResource):
    """Sync resource for hold (pre-authorization) operations.

    Example:
        ```python
        with MulticardClient(application_id="...", secret="...", store_id=100) as client:
            hold = client.holds.create(
                card_token="card_abc",
                amount=500000,
                invoice_id="ORD-001",
            )
            client.holds.capture(hold["id"])
        ```
    """

    def create(
        self,
        card_token: str,
        amount: int,
        invoice_id: str,
        store_id: Optional[Union[int, str]] = None,
        **options: Any,
    ) -> Response:
        """Create a hold (pre-authorization).

        Args:
            card_token: Token of a bound card
            amount: Amount in tiyin
            invoice_id: Your order ID
            store_id: Store ID (defaults to the configured store)
            **options: Extra fields passed through to the API

        Returns:
            Response with the hold details
        """
        body = _create_body(card_token, amount, invoice_id, self._store_id(store_id), options)
        return self._post("/hold", body)

    def confirm(self, hold_id: str, otp_code: Optional[str] = None) -> Response:
        """Confirm a hold, submitting the SMS code when the bank asks for one."""
        body = {"code": otp_code} if otp_code else {}
        return self._post(f"/hold/{encode_path(hold_id)}/confirm", body)

    def capture(self, hold_id: str, amount: Optional[int] = None) -> Response:
        """Capture held funds.

        Args:
            hold_id: The hold ID
            amount: Partial capture amount in tiyin (None captures the full hold)
        """
        body = {"amount": amount} if amount is not None else {}
        return self._post(f"/hold/{encode_path(hold_id)}/charge", body)

    def retrieve(self, hold_id: str) -> Response:
        return self._get(f"/hold/{encode_path(hold_id)}")

    def cancel(self, hold_id: str) -> Response:
        """Cancel a hold and release the blocked funds."""
        return self._delete(f"/hold/{encode_path(hold_id)}")


__all__ = ["AsyncHoldsResource", "HoldsResource"]
