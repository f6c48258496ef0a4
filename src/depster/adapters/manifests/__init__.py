"""Loaders turning manifest locators into generic manifests."""

from __future__ import annotations

from .decoding import decode_yaml_or_json
from .loaders import (
    FileLoader,
    SchemelessLoader,
    canonical_file_locator,
    default_manifest_loaders,
    load_manifest,
    loader_for,
)

__all__ = [
    "FileLoader",
    "SchemelessLoader",
    "canonical_file_locator",
    "decode_yaml_or_json",
    "default_manifest_loaders",
    "load_manifest",
    "loader_for",
]
