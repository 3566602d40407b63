"""
Low-level HTTP execution for the Multicard SDK.

The transport sends exactly one request per :meth:`execute` call, decodes the
JSON body, and turns every non-2xx status into a classified
:class:`~multicard_sdk.errors.MulticardError`. :meth:`execute_with_retry`
adds bounded exponential backoff and must only be used for idempotent calls.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import httpx

from .config import MulticardConfig
from .errors import NetworkError, RateLimitError, ServerError, error_from_response
from .response import Response

logger = logging.getLogger(__name__)

USER_AGENT = "multicard-sdk-python/0.1.0"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
}

RETRYABLE_ERRORS = (NetworkError, RateLimitError, ServerError)


def build_url(base_url: str, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Join base URL and path; the query string is added only for non-empty params."""
    url = f"{base_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params, doseq=True)}"
    return url


def build_timeout(config: MulticardConfig) -> httpx.Timeout:
    return httpx.Timeout(config.timeout or None, connect=config.open_timeout or None)


def parse_body(raw: httpx.Response) -> Any:
    """Decode a JSON body, keeping non-JSON text under ``raw``."""
    try:
        return raw.json()
    except ValueError:
        return {"raw": raw.text}


def _network_error(exc: httpx.RequestError) -> NetworkError:
    if isinstance(exc, httpx.TimeoutException):
        return NetworkError(f"Request timed out: {exc}")
    return NetworkError(f"Connection failed: {exc}")


class _TransportBase:
    """Request preparation, logging and response handling shared by both transports."""

    def __init__(self, config: MulticardConfig) -> None:
        self._config = config
        self._timeout = build_timeout(config)

    def _prepare(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
    ) -> tuple[str, str, Dict[str, str]]:
        request_headers = dict(DEFAULT_HEADERS)
        if headers:
            request_headers.update(headers)
        return method.upper(), build_url(self._config.base_url, path, params), request_headers

    def _log(self, message: str, *args: Any) -> None:
        try:
            if self._config.logger is not None:
                self._config.logger.info(message, *args)
            else:
                logger.debug(message, *args)
        except Exception:  # noqa: BLE001 - a broken logger never fails a request
            pass

    def _handle_response(self, raw: httpx.Response) -> Response:
        self._log("[Multicard] %s", raw.status_code)
        body = parse_body(raw)
        if not 200 <= raw.status_code <= 299:
            raise error_from_response(raw.status_code, body)
        return Response(http_status=raw.status_code, body=body, headers=dict(raw.headers))

    def _retry_budget(self, retries: Optional[int]) -> int:
        return self._config.max_retries if retries is None else retries

    def _retry_delay(self, attempt: int) -> float:
        return self._config.retry_base_delay * (2 ** attempt)

    def _log_retry(self, method: str, path: str, exc: Exception, attempt: int, budget: int, delay: float) -> None:
        logger.warning(
            "Retrying %s %s after %s (attempt %d/%d, sleeping %.2fs)",
            method.upper(),
            path,
            type(exc).__name__,
            attempt,
            budget,
            delay,
        )


class HttpTransport(_TransportBase):
    """Synchronous transport over :class:`httpx.Client`.

    Args:
        config: Client configuration
        http_client: Optional pre-built client; it is not closed by :meth:`close`
    """

    def __init__(self, config: MulticardConfig, http_client: Optional[httpx.Client] = None) -> None:
        super().__init__(config)
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=self._timeout)

    def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """Send one request and return its response.

        Raises:
            NetworkError: on timeouts and connection failures
            MulticardError: subclass matching the error response
        """
        method, url, request_headers = self._prepare(method, path, params, headers)
        self._log("[Multicard] %s %s", method, url)
        try:
            raw = self._client.request(
                method,
                url,
                json=body,
                headers=request_headers,
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise _network_error(exc) from exc
        return self._handle_response(raw)

    def execute_with_retry(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        retries: Optional[int] = None,
    ) -> Response:
        """Like :meth:`execute`, retrying transient failures with exponential backoff.

        Only network errors, 429 and 5xx responses are retried. Once the
        budget is spent the last error is re-raised unchanged.
        """
        budget = self._retry_budget(retries)
        attempt = 0
        while True:
            try:
                return self.execute(method, path, body=body, params=params, headers=headers)
            except RETRYABLE_ERRORS as exc:
                attempt += 1
                if attempt > budget:
                    raise
                delay = self._retry_delay(attempt)
                self._log_retry(method, path, exc, attempt, budget, delay)
                time.sleep(delay)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncHttpTransport(_TransportBase):
    """Asynchronous transport over :class:`httpx.AsyncClient`.

    Backoff waits use :func:`asyncio.sleep`, so only the calling task waits.
    """

    def __init__(self, config: MulticardConfig, http_client: Optional[httpx.AsyncClient] = None) -> None:
        super().__init__(config)
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.AsyncClient(timeout=self._timeout)

    async def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        method, url, request_headers = self._prepare(method, path, params, headers)
        self._log("[Multicard] %s %s", method, url)
        try:
            raw = await self._client.request(
                method,
                url,
                json=body,
                headers=request_headers,
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise _network_error(exc) from exc
        return self._handle_response(raw)

    async def execute_with_retry(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        retries: Optional[int] = None,
    ) -> Response:
        budget = self._retry_budget(retries)
        attempt = 0
        while True:
            try:
                return await self.execute(method, path, body=body, params=params, headers=headers)
            except RETRYABLE_ERRORS as exc:
                attempt += 1
                if attempt > budget:
                    raise
                delay = self._retry_delay(attempt)
                self._log_retry(method, path, exc, attempt, budget, delay)
                await asyncio.sleep(delay)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "AsyncHttpTransport",
    "HttpTransport",
    "RETRYABLE_ERRORS",
    "build_url",
    "parse_body",
]
