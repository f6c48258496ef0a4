"""Builders for resolution input manifests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

OPERATORS_API_VERSION = "operators.coreos.com/v1alpha1"


def namespace_manifest(name: str) -> dict[str, Any]:
    return {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": name}}


def subscription_manifest(
    name: str,
    package: str,
    *,
    namespace: str = "",
    channel: str = "",
    source: str = "",
    source_namespace: str = "",
) -> dict[str, Any]:
    spec: dict[str, Any] = {"name": package}
    if channel:
        spec["channel"] = channel
    if source:
        spec["source"] = source
    if source_namespace:
        spec["sourceNamespace"] = source_namespace
    return {
        "apiVersion": OPERATORS_API_VERSION,
        "kind": "Subscription",
        "metadata": {"name": name, "namespace": namespace},
        "spec": spec,
    }


def catalog_source_manifest(
    name: str,
    namespace: str,
    address: str,
    *,
    source_type: str = "grpc",
    priority: int = 0,
) -> dict[str, Any]:
    return {
        "apiVersion": OPERATORS_API_VERSION,
        "kind": "CatalogSource",
        "metadata": {"name": name, "namespace": namespace},
        "spec": {"sourceType": source_type, "address": address, "priority": priority},
    }


def csv_manifest(
    name: str,
    *,
    namespace: str = "",
    version: str = "",
    replaces: str = "",
    owned: Sequence[dict[str, str]] = (),
    required: Sequence[dict[str, str]] = (),
) -> dict[str, Any]:
    spec: dict[str, Any] = {"version": version}
    if replaces:
        spec["replaces"] = replaces
    if owned or required:
        spec["customresourcedefinitions"] = {"owned": list(owned), "required": list(required)}
    return {
        "apiVersion": OPERATORS_API_VERSION,
        "kind": "ClusterServiceVersion",
        "metadata": {"name": name, "namespace": namespace},
        "spec": spec,
    }


def write_manifest(directory: Path, filename: str, content: dict[str, Any]) -> Path:
    path = directory / filename
    path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")
    return path
