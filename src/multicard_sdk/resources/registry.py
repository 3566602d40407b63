"""Registry resource: payment and payout history, account information."""
from __future__ import annotations

from typing import Any

from ..response import Response
from .base import AsyncBaseResource, SyncBaseResource


class AsyncRegistryResource(AsyncBaseResource):
    async def payments(self, **filters: Any) -> Response:
        """List processed payments (date_from, date_to, status, ...)."""
        return await self._get("/payments/registry", filters)

    async def payouts(self, **filters: Any) -> Response:
        return await self._get("/payout/history", filters)

    async def application_info(self) -> Response:
        return await self._get("/app/info")

    async def merchant_details(self) -> Response:
        return await self._get("/merchant/details")


class RegistryResource(SyncBaseResource):
    def payments(self, **filters: Any) -> Response:
        """List processed payments (date_from, date_to, status, ...)."""
        return self._get("/payments/registry", filters)

    def payouts(self, **filters: Any) -> Response:
        return self._get("/payout/history", filters)

    def application_info(self) -> Response:
        return self._get("/app/info")

    def merchant_details(self) -> Response:
        return self._get("/merchant/details")


__all__ = ["AsyncRegistryResource", "RegistryResource"]
