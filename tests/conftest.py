"""
Pytest configuration and fixtures for Multicard SDK tests.
"""
from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
import pytest

from multicard_sdk import AsyncMulticardClient, MulticardClient, MulticardConfig

BASE_URL = "https://api.multicard.uz"
TEST_TOKEN = "test_token_abc"


@dataclass
class _MockEntry:
    method: str
    url: str
    status_code: int = 200
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    exception: Optional[Exception] = None
    reusable: bool = False
    delay: float = 0.0


class _LocalHTTPXMock:
    """Records requests and replays registered responses through ``httpx.MockTransport``.

    Responses for the same method and URL are served in registration order;
    a ``reusable`` response is served for every matching request.
    """

    def __init__(self) -> None:
        self._entries: List[_MockEntry] = []
        self._requests: List[httpx.Request] = []
        self._lock = threading.Lock()

    def add_response(
        self,
        *,
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        reusable: bool = False,
        delay: float = 0.0,
    ) -> None:
        response_headers: Dict[str, str] = {}
        if content is None and json is not None:
            content = json_dumps_bytes(json)
            response_headers["content-type"] = "application/json"
        if headers:
            response_headers.update(headers)
        self._entries.append(
            _MockEntry(
                method=method.upper(),
                url=url,
                status_code=status_code,
                content=content or b"",
                headers=response_headers,
                reusable=reusable,
                delay=delay,
            )
        )

    def add_exception(self, exception: Exception, *, url: str, method: str = "GET") -> None:
        self._entries.append(_MockEntry(method=method.upper(), url=url, exception=exception))

    def get_requests(self, *, url: Optional[str] = None, method: Optional[str] = None) -> List[httpx.Request]:
        with self._lock:
            requests = list(self._requests)
        if method is not None:
            requests = [r for r in requests if r.method == method.upper()]
        if url is not None:
            requests = [r for r in requests if _normalize_url(str(r.url)) == _normalize_url(url)]
        return requests

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self._requests.append(request)
            entry = self._match(request.method, str(request.url))
        if entry.delay:
            time.sleep(entry.delay)
        if entry.exception is not None:
            raise entry.exception
        return httpx.Response(
            status_code=entry.status_code,
            headers=entry.headers,
            content=entry.content,
        )

    def _match(self, method: str, url: str) -> _MockEntry:
        normalized_url = _normalize_url(url)
        for idx, entry in enumerate(self._entries):
            if entry.method == method and _normalize_url(entry.url) == normalized_url:
                if not entry.reusable:
                    self._entries.pop(idx)
                return entry
        raise AssertionError(
            f"No mocked response for {method} {url}. "
            f"Available: {[f'{e.method} {e.url}' for e in self._entries]}"
        )


def json_dumps_bytes(payload: Any) -> bytes:
    return json.dumps(payload, default=str).encode("utf-8")


def _normalize_url(url: str) -> str:
    parts = urlsplit(url)
    normalized_query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, normalized_query, parts.fragment))


def success_response(data: Any = None) -> Dict[str, Any]:
    return {"success": True, "data": data if data is not None else {}}


@pytest.fixture
def httpx_mock() -> _LocalHTTPXMock:
    """Request recorder backing the mocked HTTP clients."""
    return _LocalHTTPXMock()


@pytest.fixture
def config() -> MulticardConfig:
    """Test configuration; backoff is zero so retry tests do not sleep."""
    return MulticardConfig(
        application_id="test_app_id",
        secret="test_secret",
        store_id=100,
        retry_base_delay=0,
    )


@pytest.fixture
def auth_stub(httpx_mock):
    """Serve the same token for every ``POST /auth``."""
    httpx_mock.add_response(
        url=f"{BASE_URL}/auth",
        method="POST",
        json={"token": TEST_TOKEN},
        reusable=True,
    )
    return httpx_mock


@pytest.fixture
def stub_api(httpx_mock):
    """Register an enveloped API response."""

    def _stub(
        method: str,
        path: str,
        *,
        status_code: int = 200,
        data: Any = None,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> None:
        url = f"{BASE_URL}{path}"
        if params:
            url = f"{url}?{urlencode(params, doseq=True)}"
        httpx_mock.add_response(
            url=url,
            method=method,
            status_code=status_code,
            json=body if body is not None else success_response(data),
        )

    return _stub


@pytest.fixture
def client(config, httpx_mock) -> MulticardClient:
    """Create a test client backed by the mock transport."""
    http_client = httpx.Client(transport=httpx.MockTransport(httpx_mock.handler))
    client = MulticardClient(config, http_client=http_client)
    yield client
    client.close()
    http_client.close()


@pytest.fixture
async def async_client(config, httpx_mock) -> AsyncMulticardClient:
    """Create an async test client backed by the mock transport."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(httpx_mock.handler))
    client = AsyncMulticardClient(config, http_client=http_client)
    yield client
    await client.aclose()
    await http_client.aclose()
