"""Live operator-registry catalog reached over gRPC."""

from __future__ import annotations

from .client import GrpcBundleStream, GrpcCatalogClient, connect_catalog
from .translator import to_bundle, to_package

__all__ = [
    "GrpcBundleStream",
    "GrpcCatalogClient",
    "connect_catalog",
    "to_bundle",
    "to_package",
]
