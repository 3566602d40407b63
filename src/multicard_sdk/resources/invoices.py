"""Invoices resource: hosted checkout pages and Quick Pay links."""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

from ..response import Response
from .base import AsyncBaseResource, SyncBaseResource, compact, encode_path


def _create_body(
    amount: int,
    invoice_id: str,
    callback_url: str,
    store_id: Optional[Union[int, str]],
    options: Dict[str, Any],
) -> Dict[str, Any]:
    return compact(
        {
            "amount": amount,
            "store_id": store_id,
            "invoice_id": invoice_id,
            "callback_url": callback_url,
            **options,
        }
    )


class AsyncInvoicesResource(AsyncBaseResource):
    """Async resource for invoice operations."""

    async def create(
        self,
        amount: int,
        invoice_id: str,
        callback_url: str,
        store_id: Optional[Union[int, str]] = None,
        **options: Any,
    ) -> Response:
        """Create an invoice (hosted checkout page).

        Args:
            amount: Amount in tiyin
            invoice_id: Your order ID
            callback_url: URL receiving the payment callback
            store_id: Store ID (defaults to the configured store)
            **options: description, lifetime, return_url, ...
        """
        body = _create_body(amount, invoice_id, callback_url, self._store_id(store_id), options)
        return await self._post("/payment/invoice", body)

    async def retrieve(self, invoice_id: str) -> Response:
        return await self._get(f"/invoice/{encode_path(invoice_id)}")

    async def cancel(self, invoice_id: str) -> Response:
        """Cancel an unpaid invoice."""
        return await self._delete(f"/invoice/{encode_path(invoice_id)}")

    async def quick_pay(self, invoice_id: str, service: str) -> Response:
        """Generate a Quick Pay link for a wallet service (Payme, Click, ...)."""
        return await self._post("/invoice/quick-pay", {"invoice_id": invoice_id, "service": service})


class InvoicesResource(SyncBaseResource):
    """Sync resource for invoice operations."""

    def create(
        self,
        amount: int,
        invoice_id: str,
        callback_url: str,
        store_id: Optional[Union[int, str]] = None,
        **options: Any,
    ) -> Response:
        """Create an invoice (hosted checkout page).

        Args:
            amount: Amount in tiyin
            invoice_id: Your order ID
            callback_url: URL receiving the payment callback
            store_id: Store ID (defaults to the configured store)
            **options: description, lifetime, return_url, ...
        """
        body = _create_body(amount, invoice_id, callback_url, self._store_id(store_id), options)
        return self._post("/payment/invoice", body)

    def retrieve(self, invoice_id: str) -> Response:
        return self._get(f"/invoice/{encode_path(invoice_id)}")

    def cancel(self, invoice_id: str) -> Response:
        """Cancel an unpaid invoice."""
        return self._delete(f"/invoice/{encode_path(invoice_id)}")

    def quick_pay(self, invoice_id: str, service: str) -> Response:
        """Generate a Quick Pay link for a wallet service (Payme, Click, ...)."""
        return self._post("/invoice/quick-pay", {"invoice_id": invoice_id, "service": service})


__all__ = ["AsyncInvoicesResource", "InvoicesResource"]
