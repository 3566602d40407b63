"""Response value returned by every successful API call."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Response:
    """A completed 2xx API response.

    Most endpoints reply with the ``{"success", "data", "error"}`` envelope;
    the accessors below read from it and return ``None`` when a field is
    missing or the body is not an object.
    """

    http_status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return isinstance(self.body, dict) and self.body.get("success") is True

    @property
    def data(self) -> Any:
        if not isinstance(self.body, dict):
            return None
        return self.body.get("data")

    @property
    def error_code(self) -> Optional[str]:
        return self._error_field("code")

    @property
    def error_details(self) -> Any:
        return self._error_field("details")

    def _error_field(self, name: str) -> Any:
        if not isinstance(self.body, dict):
            return None
        error = self.body.get("error")
        if not isinstance(error, dict):
            return None
        return error.get(name)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a key from ``data``."""
        data = self.data
        if not isinstance(data, dict):
            return default
        return data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)
