"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import (
    BundleIterator,
    BundleStream,
    CatalogClient,
    CatalogSourceLister,
    RegistryClientProvider,
)
from .manifests import ManifestLoader
from .resolution import Resolver, ResolverFactory

__all__ = [
    "BundleIterator",
    "BundleStream",
    "CatalogClient",
    "CatalogSourceLister",
    "ManifestLoader",
    "RegistryClientProvider",
    "Resolver",
    "ResolverFactory",
]
