"""Domain models for manifests, catalogs and resolved operators."""

from __future__ import annotations

from .catalog import APIKey, Bundle, CatalogKey, Channel, Dependency, Package, Property
from .manifests import (
    CATALOG_SOURCE_GVK,
    CLUSTER_SERVICE_VERSION_GVK,
    NAMESPACE_GVK,
    SUBSCRIPTION_GVK,
    CatalogSource,
    CatalogSourceSpec,
    ClusterServiceVersion,
    GroupVersionKind,
    Manifest,
    Namespace,
    ObjectMeta,
    SourceType,
    Subscription,
    SubscriptionSpec,
    Unstructured,
)
from .operators import Operator, OperatorSet

__all__ = [
    "CATALOG_SOURCE_GVK",
    "CLUSTER_SERVICE_VERSION_GVK",
    "NAMESPACE_GVK",
    "SUBSCRIPTION_GVK",
    "APIKey",
    "Bundle",
    "CatalogKey",
    "CatalogSource",
    "CatalogSourceSpec",
    "Channel",
    "ClusterServiceVersion",
    "Dependency",
    "GroupVersionKind",
    "Manifest",
    "Namespace",
    "ObjectMeta",
    "Operator",
    "OperatorSet",
    "Package",
    "Property",
    "SourceType",
    "Subscription",
    "SubscriptionSpec",
    "Unstructured",
]
