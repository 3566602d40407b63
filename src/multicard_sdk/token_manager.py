"""Bearer token lifecycle for the Multicard SDK."""
from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable, Optional

from .config import MulticardConfig
from .errors import AuthenticationError
from .response import Response
from .transport import AsyncHttpTransport, HttpTransport

logger = logging.getLogger(__name__)

AUTH_PATH = "/auth"

# Tokens live 24h upstream; refresh an hour early so none expires mid-flight.
TOKEN_TTL = 23 * 3600


def _auth_body(config: MulticardConfig) -> dict:
    return {"application_id": config.application_id, "secret": config.secret}


def _extract_token(response: Response) -> str:
    # /auth replies with a flat {"token": "..."}, not the success/data envelope.
    token = response.body.get("token") if isinstance(response.body, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthenticationError(
            "Auth response missing token",
            http_status=response.http_status,
            response_body=response.body,
        )
    return token


class TokenManager:
    """Caches the bearer token and refreshes it when it expires.

    The lock covers the whole check-refresh-read sequence, so concurrent
    callers wait for a single refresh instead of each issuing their own.

    Args:
        transport: Transport used for the unauthenticated ``POST /auth``
        config: Configuration holding the credentials
        clock: Monotonic clock, injectable for tests
    """

    def __init__(
        self,
        transport: HttpTransport,
        config: MulticardConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self._config = config
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: Optional[float] = None
        self._lock = threading.Lock()

    def get_token(self) -> str:
        with self._lock:
            if self._expired():
                self._refresh()
            return self._token

    def reset(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = None

    def _expired(self) -> bool:
        return self._token is None or self._expires_at is None or self._clock() >= self._expires_at

    def _refresh(self) -> None:
        logger.debug("Requesting a new Multicard access token")
        response = self._transport.execute("POST", AUTH_PATH, body=_auth_body(self._config))
        self._token = _extract_token(response)
        self._expires_at = self._clock() + TOKEN_TTL


class AsyncTokenManager:
    """Async twin of :class:`TokenManager`, guarded by an :class:`asyncio.Lock`."""

    def __init__(
        self,
        transport: AsyncHttpTransport,
        config: MulticardConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self._config = config
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: Optional[float] = None
        self._lock = asyncio.Lock()

    async def get_token(self) -> str:
        async with self._lock:
            if self._expired():
                await self._refresh()
            return self._token

    async def reset(self) -> None:
        async with self._lock:
            self._token = None
            self._expires_at = None

    def _expired(self) -> bool:
        return self._token is None or self._expires_at is None or self._clock() >= self._expires_at

    async def _refresh(self) -> None:
        logger.debug("Requesting a new Multicard access token")
        response = await self._transport.execute("POST", AUTH_PATH, body=_auth_body(self._config))
        self._token = _extract_token(response)
        self._expires_at = self._clock() + TOKEN_TTL


__all__ = ["AsyncTokenManager", "TokenManager", "TOKEN_TTL"]
