"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogClientConfig, get_catalog_client_config
from .env import optional_env_var, positive_float_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .resolution import FILE_BASED_CATALOG_NAMESPACE, FILE_BASED_SUBSCRIPTION_NAME_TEMPLATE

__all__ = [
    "FILE_BASED_CATALOG_NAMESPACE",
    "FILE_BASED_SUBSCRIPTION_NAME_TEMPLATE",
    "CatalogClientConfig",
    "ConfigurationError",
    "configure_logging",
    "get_catalog_client_config",
    "optional_env_var",
    "positive_float_env_var",
]
