"""
Payments resource for the Multicard SDK.

Every method that creates or mutates a payment is a POST and is therefore
sent once per attempt; only the 401 re-authentication retry applies to it.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ..response import Response
from .base import AsyncBaseResource, SyncBaseResource, compact, encode_path

StoreId = Optional[Union[int, str]]


def _payment_body(
    source: Dict[str, Any],
    amount: int,
    invoice_id: str,
    store_id: StoreId,
    callback_url: Optional[str],
    ofd: Optional[List[Dict[str, Any]]],
    options: Dict[str, Any],
) -> Dict[str, Any]:
    return compact(
        {
            **source,
            "amount": amount,
            "store_id": store_id,
            "invoice_id": invoice_id,
            "callback_url": callback_url,
            "ofd": ofd,
            **options,
        }
    )


class AsyncPaymentsResource(AsyncBaseResource):
    """Async resource for payment operations."""

    async def create_by_token(
        self,
        card_token: str,
        amount: int,
        invoice_id: str,
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Pay with a saved card token.

        Args:
            card_token: Token from card binding
            amount: Amount in tiyin
            invoice_id: Your order ID
            store_id: Store ID (defaults to the configured store)
            callback_url: URL receiving the payment callback
            ofd: Fiscal receipt items
        """
        body = _payment_body(
            {"card": {"token": card_token}},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd, options,
        )
        return await self._post("/payment/token", body)

    async def create_by_card(
        self,
        card_number: str,
        card_expiry: str,
        amount: int,
        invoice_id: str,
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Pay with a card number and expiry (MMYY). Requires PCI DSS."""
        body = _payment_body(
            {"card": {"number": card_number, "expiry": card_expiry}},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd, options,
        )
        return await self._post("/payment/card", body)

    async def create_split(
        self,
        card_token: str,
        amount: int,
        invoice_id: str,
        split: List[Dict[str, Any]],
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Split one payment across several recipients.

        Args:
            split: Recipients, each ``{"type", "amount", "details", "recipient"}``
        """
        body = _payment_body(
            {"card": {"token": card_token}},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd,
            {"split": split, **options},
        )
        return await self._post("/payment/split", body)

    async def create_wallet(
        self,
        service: str,
        amount: int,
        invoice_id: str,
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Pay through a wallet app (Payme, Click, Uzum, ...)."""
        body = _payment_body(
            {"service": service},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd, options,
        )
        return await self._post("/payment/app", body)

    async def confirm(self, payment_id: str, otp_code: Optional[str] = None) -> Response:
        body = {"code": otp_code} if otp_code else {}
        return await self._post(f"/payment/{encode_path(payment_id)}/confirm", body)

    async def retrieve(self, payment_id: str) -> Response:
        return await self._get(f"/payment/{encode_path(payment_id)}")

    async def refund(self, payment_id: str) -> Response:
        """Refund the full payment amount."""
        return await self._delete(f"/payment/{encode_path(payment_id)}")

    async def partial_refund(self, payment_id: str, amount: int) -> Response:
        return await self._post(f"/payment/{encode_path(payment_id)}/refund/partial", {"amount": amount})

    async def send_fiscal_link(self, payment_id: str, fiscal_url: str) -> Response:
        """Attach the fiscal receipt URL to a payment."""
        return await self._post(f"/payment/{encode_path(payment_id)}/fiscal", {"fiscal_url": fiscal_url})


class PaymentsResource(SyncBaseResource):
    """Sync resource for payment operations.

    Example:
        ```python
        client = MulticardClient(application_id="...", secret="...", store_id=100)
        payment = client.payments.create_by_token(
            card_token="card_abc",
            amount=500000,
            invoice_id="ORD-001",
        )
        if payment.is_success:
            print(payment["uuid"])
        ```
    """

    def create_by_token(
        self,
        card_token: str,
        amount: int,
        invoice_id: str,
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Pay with a saved card token.

        Args:
            card_token: Token from card binding
            amount: Amount in tiyin
            invoice_id: Your order ID
            store_id: Store ID (defaults to the configured store)
            callback_url: URL receiving the payment callback
            ofd: Fiscal receipt items
        """
        body = _payment_body(
            {"card": {"token": card_token}},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd, options,
        )
        return self._post("/payment/token", body)

    def create_by_card(
        self,
        card_number: str,
        card_expiry: str,
        amount: int,
        invoice_id: str,
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Pay with a card number and expiry (MMYY). Requires PCI DSS."""
        body = _payment_body(
            {"card": {"number": card_number, "expiry": card_expiry}},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd, options,
        )
        return self._post("/payment/card", body)

    def create_split(
        self,
        card_token: str,
        amount: int,
        invoice_id: str,
        split: List[Dict[str, Any]],
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Split one payment across several recipients.

        Args:
            split: Recipients, each ``{"type", "amount", "details", "recipient"}``
        """
        body = _payment_body(
            {"card": {"token": card_token}},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd,
            {"split": split, **options},
        )
        return self._post("/payment/split", body)

    def create_wallet(
        self,
        service: str,
        amount: int,
        invoice_id: str,
        store_id: StoreId = None,
        callback_url: Optional[str] = None,
        ofd: Optional[List[Dict[str, Any]]] = None,
        **options: Any,
    ) -> Response:
        """Pay through a wallet app (Payme, Click, Uzum, ...)."""
        body = _payment_body(
            {"service": service},
            amount, invoice_id, self._store_id(store_id), callback_url, ofd, options,
        )
        return self._post("/payment/app", body)

    def confirm(self, payment_id: str, otp_code: Optional[str] = None) -> Response:
        body = {"code": otp_code} if otp_code else {}
        return self._post(f"/payment/{encode_path(payment_id)}/confirm", body)

    def retrieve(self, payment_id: str) -> Response:
        return self._get(f"/payment/{encode_path(payment_id)}")

    def refund(self, payment_id: str) -> Response:
        """Refund the full payment amount."""
        return self._delete(f"/payment/{encode_path(payment_id)}")

    def partial_refund(self, payment_id: str, amount: int) -> Response:
        return self._post(f"/payment/{encode_path(payment_id)}/refund/partial", {"amount": amount})

    def send_fiscal_link(self, payment_id: str, fiscal_url: str) -> Response:
        """Attach the fiscal receipt URL to a payment."""
        return self._post(f"/payment/{encode_path(payment_id)}/fiscal", {"fiscal_url": fiscal_url})


__all__ = ["AsyncPaymentsResource", "PaymentsResource"]
