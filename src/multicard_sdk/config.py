"""Configuration surface for the Multicard SDK.

:class:`MulticardConfig` is the immutable settings bag handed to a client.
:class:`MulticardSettings` reads the same values from ``MULTICARD_*``
environment variables (or a ``.env`` file) for deployments that configure
credentials outside the code.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.multicard.uz"
DEFAULT_TIMEOUT = 30.0
DEFAULT_OPEN_TIMEOUT = 10.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BASE_DELAY = 0.5

# A None override for these means "not supplied"; they have no valid None value.
_NONE_KEEPS_BASE = frozenset({"application_id", "secret", "base_url"})


class MulticardConfig(BaseModel):
    """Per-client configuration.

    Instances are frozen; use :meth:`merge` to derive a configuration with
    some fields overridden.

    Attributes:
        application_id: Application ID issued by Multicard
        secret: Application secret, also used to verify webhook signatures
        base_url: API base URL
        timeout: Read timeout in seconds (``0``/``None`` disables it)
        open_timeout: Connect timeout in seconds (``0``/``None`` disables it)
        logger: Optional logger receiving one line per request and response
        store_id: Default store (cash register) ID for payment calls
        max_retries: Retry budget for idempotent calls
        retry_base_delay: Base of the exponential backoff, in seconds
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    application_id: Optional[str] = None
    secret: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    open_timeout: Optional[float] = DEFAULT_OPEN_TIMEOUT
    logger: Optional[logging.Logger] = None
    store_id: Optional[Union[int, str]] = None
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    retry_base_delay: float = Field(default=DEFAULT_RETRY_BASE_DELAY, ge=0)

    def validate_credentials(self) -> None:
        """Raise ``ValueError`` unless both credentials are present."""
        if not self.application_id:
            raise ValueError("application_id is required")
        if not self.secret:
            raise ValueError("secret is required")

    def merge(self, overrides: Mapping[str, Any]) -> "MulticardConfig":
        """Return a new configuration with ``overrides`` applied.

        A key present in ``overrides`` wins even when its value is falsy
        (``timeout=0``, ``store_id=None``); absent keys keep this
        configuration's value.
        """
        fields = type(self).model_fields
        unknown = sorted(set(overrides) - set(fields))
        if unknown:
            raise TypeError(f"Unknown configuration option(s): {', '.join(unknown)}")

        values = {name: getattr(self, name) for name in fields}
        for key, value in overrides.items():
            if value is None and key in _NONE_KEEPS_BASE:
                continue
            values[key] = value
        return type(self)(**values)

    def __repr__(self) -> str:
        secret = "***" if self.secret else None
        return (
            f"MulticardConfig(application_id={self.application_id!r}, secret={secret!r}, "
            f"base_url={self.base_url!r}, store_id={self.store_id!r})"
        )


class MulticardSettings(BaseSettings):
    """Environment-driven settings (``MULTICARD_APPLICATION_ID`` etc.)."""

    application_id: Optional[str] = None
    secret: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    open_timeout: Optional[float] = DEFAULT_OPEN_TIMEOUT
    store_id: Optional[Union[int, str]] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY

    class Config:
        env_prefix = "MULTICARD_"
        env_file = ".env"
        extra = "ignore"

    def to_config(self, **overrides: Any) -> MulticardConfig:
        """Build a :class:`MulticardConfig`, applying keyword overrides."""
        return MulticardConfig(**self.model_dump()).merge(overrides)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_OPEN_TIMEOUT",
    "MulticardConfig",
    "MulticardSettings",
]
