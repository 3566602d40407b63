"""
Base resource classes for the Multicard SDK.

Resources only marshal parameters; every call goes through the client's
``authenticated_request``, which owns token handling and the retry policy.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Union
from urllib.parse import quote

from ..response import Response

if TYPE_CHECKING:
    from ..client import AsyncMulticardClient, MulticardClient


def compact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in values.items() if value is not None}


def encode_path(value: Any) -> str:
    """Percent-encode a single path segment (``/`` and ``..`` cannot escape it)."""
    return quote(str(value), safe="")


class _ResourceBase:
    def __init__(self, client: Union["MulticardClient", "AsyncMulticardClient"]) -> None:
        """Initialize the resource.

        Args:
            client: The owning client instance
        """
        self._client = client

    def _store_id(self, store_id: Optional[Union[int, str]]) -> Optional[Union[int, str]]:
        return store_id if store_id is not None else self._client.config.store_id


class SyncBaseResource(_ResourceBase):
    """Base class for resources of the synchronous :class:`MulticardClient`."""

    _client: "MulticardClient"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return self._client.authenticated_request("GET", path, params=params or {})

    def _post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Response:
        return self._client.authenticated_request("POST", path, body=data or {})

    def _delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return self._client.authenticated_request("DELETE", path, params=params or {})


class AsyncBaseResource(_ResourceBase):
    """Base class for resources of the :class:`AsyncMulticardClient`."""

    _client: "AsyncMulticardClient"

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return await self._client.authenticated_request("GET", path, params=params or {})

    async def _post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Response:
        return await self._client.authenticated_request("POST", path, body=data or {})

    async def _delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Response:
        return await self._client.authenticated_request("DELETE", path, params=params or {})


__all__ = [
    "AsyncBaseResource",
    "SyncBaseResource",
    "compact",
    "encode_path",
]
