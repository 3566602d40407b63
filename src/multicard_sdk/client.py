"""
Multicard Python SDK

Clients for the Multicard payment-processing API (invoices, card binding,
holds, payments, payouts, registry).

Example usage:
    ```python
    from multicard_sdk import MulticardClient

    with MulticardClient(
        application_id="your-application-id",
        secret="your-secret",
        store_id=100,
    ) as client:
        invoice = client.invoices.create(
            amount=500000,
            invoice_id="ORD-001",
            callback_url="https://shop.example/multicard/callback",
        )
        print(invoice["checkout_url"])
    ```
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .config import MulticardConfig, MulticardSettings
from .errors import AuthenticationError
from .resources.cards import AsyncCardsResource, CardsResource
from .resources.holds import AsyncHoldsResource, HoldsResource
from .resources.invoices import AsyncInvoicesResource, InvoicesResource
from .resources.payments import AsyncPaymentsResource, PaymentsResource
from .resources.payouts import AsyncPayoutsResource, PayoutsResource
from .resources.registry import AsyncRegistryResource, RegistryResource
from .response import Response
from .signature import verify_signature
from .token_manager import AsyncTokenManager, TokenManager
from .transport import AsyncHttpTransport, HttpTransport

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = frozenset({"GET", "POST", "DELETE"})


def _build_config(config: Optional[MulticardConfig], options: Mapping[str, Any]) -> MulticardConfig:
    merged = (config if config is not None else MulticardConfig()).merge(options)
    merged.validate_credentials()
    return merged


def _normalize_method(method: str) -> str:
    verb = str(method).upper()
    if verb not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")
    return verb


class MulticardClient:
    """
    Synchronous Multicard API client.

    Provides access to all Multicard API resources:
    - invoices: Hosted checkout pages and Quick Pay links
    - payments: Token, card, split and wallet-app payments, refunds
    - cards: Card binding and card tokens
    - holds: Pre-authorizations, capture and cancel
    - payouts: Payouts to cards
    - registry: Payment and payout history, account information

    The client is safe to share between threads.

    Args:
        config: Base configuration (defaults to an empty one)
        http_client: Optional :class:`httpx.Client` to send requests with
        **options: Per-client overrides merged into ``config``
            (``application_id``, ``secret``, ``store_id``, ``timeout``, ...)

    Raises:
        ValueError: If ``application_id`` or ``secret`` is missing
    """

    def __init__(
        self,
        config: Optional[MulticardConfig] = None,
        *,
        http_client: Optional[httpx.Client] = None,
        **options: Any,
    ):
        self._config = _build_config(config, options)
        self._transport = HttpTransport(self._config, http_client=http_client)
        self._token_manager = TokenManager(self._transport, self._config)

        # Initialize resources
        self.invoices = InvoicesResource(self)
        self.payments = PaymentsResource(self)
        self.cards = CardsResource(self)
        self.holds = HoldsResource(self)
        self.payouts = PayoutsResource(self)
        self.registry = RegistryResource(self)

    @classmethod
    def from_env(cls, *, http_client: Optional[httpx.Client] = None, **options: Any) -> "MulticardClient":
        """Build a client from ``MULTICARD_*`` environment variables."""
        return cls(MulticardSettings().to_config(), http_client=http_client, **options)

    @property
    def config(self) -> MulticardConfig:
        return self._config

    def authenticated_request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Response:
        """Execute an authenticated API request.

        GET and DELETE are retried on transient failures (timeouts, 429,
        5xx). POST is sent once. On a 401 the cached token is dropped and
        the whole call is repeated exactly once with a fresh token.

        Args:
            method: ``GET``, ``POST`` or ``DELETE``
            path: API path, e.g. ``/payment/<uuid>``
            body: JSON body for POST
            params: Query parameters for GET/DELETE

        Returns:
            The successful response

        Raises:
            MulticardError: subclass describing the failure
        """
        verb = _normalize_method(method)
        try:
            return self._execute_authenticated(verb, path, body, params)
        except AuthenticationError:
            logger.info("Authentication failed for %s %s; retrying once with a fresh token", verb, path)
            self._token_manager.reset()
            return self._execute_authenticated(verb, path, body, params)

    def _execute_authenticated(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
    ) -> Response:
        headers = {"Authorization": f"Bearer {self._token_manager.get_token()}"}
        if method == "POST":
            # Never retried here: a repeated payment POST could charge twice.
            return self._transport.execute(method, path, body=body if body is not None else {}, headers=headers)
        return self._transport.execute_with_retry(method, path, params=params or {}, headers=headers)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return self.authenticated_request("GET", path, params=params)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Response:
        return self.authenticated_request("POST", path, body=body)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return self.authenticated_request("DELETE", path, params=params)

    def verify_webhook(self, params: Mapping[str, Any]) -> bool:
        """Verify a callback's ``sign`` with this client's secret."""
        return verify_signature(params, secret=self._config.secret)

    def close(self) -> None:
        """Close the HTTP client."""
        self._transport.close()

    def __enter__(self) -> "MulticardClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncMulticardClient:
    """
    Asynchronous Multicard API client.

    Same surface and retry policy as :class:`MulticardClient`; every request
    method is a coroutine and backoff waits do not block the event loop.

    Args:
        config: Base configuration (defaults to an empty one)
        http_client: Optional :class:`httpx.AsyncClient` to send requests with
        **options: Per-client overrides merged into ``config``
    """

    def __init__(
        self,
        config: Optional[MulticardConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        **options: Any,
    ):
        self._config = _build_config(config, options)
        self._transport = AsyncHttpTransport(self._config, http_client=http_client)
        self._token_manager = AsyncTokenManager(self._transport, self._config)

        self.invoices = AsyncInvoicesResource(self)
        self.payments = AsyncPaymentsResource(self)
        self.cards = AsyncCardsResource(self)
        self.holds = AsyncHoldsResource(self)
        self.payouts = AsyncPayoutsResource(self)
        self.registry = AsyncRegistryResource(self)

    @classmethod
    def from_env(
        cls,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        **options: Any,
    ) -> "AsyncMulticardClient":
        return cls(MulticardSettings().to_config(), http_client=http_client, **options)

    @property
    def config(self) -> MulticardConfig:
        return self._config

    async def authenticated_request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Response:
        """Async version of :meth:`MulticardClient.authenticated_request`."""
        verb = _normalize_method(method)
        try:
            return await self._execute_authenticated(verb, path, body, params)
        except AuthenticationError:
            logger.info("Authentication failed for %s %s; retrying once with a fresh token", verb, path)
            await self._token_manager.reset()
            return await self._execute_authenticated(verb, path, body, params)

    async def _execute_authenticated(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
    ) -> Response:
        headers = {"Authorization": f"Bearer {await self._token_manager.get_token()}"}
        if method == "POST":
            return await self._transport.execute(
                method, path, body=body if body is not None else {}, headers=headers
            )
        return await self._transport.execute_with_retry(method, path, params=params or {}, headers=headers)

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return await self.authenticated_request("GET", path, params=params)

    async def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Response:
        return await self.authenticated_request("POST", path, body=body)

    async def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return await self.authenticated_request("DELETE", path, params=params)

    def verify_webhook(self, params: Mapping[str, Any]) -> bool:
        return verify_signature(params, secret=self._config.secret)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._transport.aclose()

    async def __aenter__(self) -> "AsyncMulticardClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


__all__ = ["AsyncMulticardClient", "MulticardClient", "SUPPORTED_METHODS"]
