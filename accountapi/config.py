"""Configuration management for accountapi."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from accountapi.exceptions import ConfigurationError
from accountapi.logging import setup_logging

DEFAULT_BASE_URL = "http://localhost:8080/v1/organisation/accounts"
DEFAULT_TIMEOUT = 3.0

BASE_URL_ENV = "ACCOUNTAPI_BASE_URL"
TIMEOUT_ENV = "ACCOUNTAPI_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """Account API client configuration.

    ``base_url`` is the accounts collection URL; single-account paths are
    built by appending the account id. ``log_level`` is applied by
    :meth:`configure_logging`.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        parsed = urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid base URL: {self.base_url!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, base_url: str | None = None) -> ClientConfig:
        """Create config from environment variables.

        The base URL comes from ``ACCOUNTAPI_BASE_URL`` when set, else from
        ``base_url``, else the built-in default.
        """
        timeout_str = os.getenv(TIMEOUT_ENV)
        try:
            timeout = float(timeout_str) if timeout_str else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ConfigurationError(f"{TIMEOUT_ENV} is not a number: {timeout_str!r}") from exc

        return cls(
            base_url=os.getenv(BASE_URL_ENV) or base_url or DEFAULT_BASE_URL,
            timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def configure_logging(self, format_type: str = "standard") -> None:
        """Install the accountapi log handler at ``log_level``."""
        setup_logging(level=self.log_level, format_type=format_type)
