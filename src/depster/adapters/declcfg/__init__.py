"""In-memory catalog built from a declarative config (file-based catalog) tree."""

from __future__ import annotations

from .catalog import FileBasedCatalogLoader, build_subscription
from .client import ModelBundleStream, ModelCatalogClient
from .loader import load_declarative_config
from .model import CatalogModel, convert_to_model
from .querier import ModelQuerier, PackageChannel, PackageManifest
from .schema import DeclarativeBundle, DeclarativeChannel, DeclarativeConfig, DeclarativePackage

__all__ = [
    "CatalogModel",
    "DeclarativeBundle",
    "DeclarativeChannel",
    "DeclarativeConfig",
    "DeclarativePackage",
    "FileBasedCatalogLoader",
    "ModelBundleStream",
    "ModelCatalogClient",
    "ModelQuerier",
    "PackageChannel",
    "PackageManifest",
    "build_subscription",
    "convert_to_model",
    "load_declarative_config",
]
