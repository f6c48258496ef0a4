"""Live catalog client configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import positive_float_env_var

CONNECT_TIMEOUT_ENV: Final[str] = "DEPSTER_CATALOG_CONNECT_TIMEOUT"
REQUEST_TIMEOUT_ENV: Final[str] = "DEPSTER_CATALOG_REQUEST_TIMEOUT"
HEALTH_TIMEOUT_ENV: Final[str] = "DEPSTER_CATALOG_HEALTH_TIMEOUT"

DEFAULT_CONNECT_TIMEOUT_SECONDS: Final[float] = 5.0
DEFAULT_REQUEST_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_HEALTH_TIMEOUT_SECONDS: Final[float] = 5.0


@dataclass(frozen=True, slots=True)
class CatalogClientConfig:
    """Timeouts applied to every live catalog connection."""

    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    health_timeout_seconds: float = DEFAULT_HEALTH_TIMEOUT_SECONDS


def get_catalog_client_config() -> CatalogClientConfig:
    return CatalogClientConfig(
        connect_timeout_seconds=positive_float_env_var(
            CONNECT_TIMEOUT_ENV, default=DEFAULT_CONNECT_TIMEOUT_SECONDS
        ),
        request_timeout_seconds=positive_float_env_var(
            REQUEST_TIMEOUT_ENV, default=DEFAULT_REQUEST_TIMEOUT_SECONDS
        ),
        health_timeout_seconds=positive_float_env_var(
            HEALTH_TIMEOUT_ENV, default=DEFAULT_HEALTH_TIMEOUT_SECONDS
        ),
    )
