"""Sort generic manifests into the typed inputs a resolver consumes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from depster.domain.errors import (
    ManifestConversionError,
    UnrecognizedManifestError,
    UnsupportedCatalogSourceError,
)
from depster.domain.model import (
    CATALOG_SOURCE_GVK,
    CLUSTER_SERVICE_VERSION_GVK,
    NAMESPACE_GVK,
    SUBSCRIPTION_GVK,
    CatalogSource,
    ClusterServiceVersion,
    GroupVersionKind,
    Manifest,
    Namespace,
    SourceType,
    Subscription,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from depster.domain.model import Unstructured

log = getLogger(__name__)


class ManifestKind(StrEnum):
    NAMESPACE = "Namespace"
    SUBSCRIPTION = "Subscription"
    CLUSTER_SERVICE_VERSION = "ClusterServiceVersion"
    CATALOG_SOURCE = "CatalogSource"


_RECOGNIZED: dict[GroupVersionKind, tuple[ManifestKind, type[Manifest]]] = {
    NAMESPACE_GVK: (ManifestKind.NAMESPACE, Namespace),
    SUBSCRIPTION_GVK: (ManifestKind.SUBSCRIPTION, Subscription),
    CLUSTER_SERVICE_VERSION_GVK: (ManifestKind.CLUSTER_SERVICE_VERSION, ClusterServiceVersion),
    CATALOG_SOURCE_GVK: (ManifestKind.CATALOG_SOURCE, CatalogSource),
}


@dataclass(frozen=True, slots=True)
class ClassifiedManifest:
    kind: ManifestKind
    value: Manifest


def classify(obj: Unstructured) -> ClassifiedManifest:
    """Convert ``obj`` into the typed manifest matching its group/version/kind.

    Raises ``UnrecognizedManifestError`` for kinds outside the four recognized
    ones, ``ManifestConversionError`` when the payload does not fit the typed
    shape, and ``UnsupportedCatalogSourceError`` for non-gRPC catalog sources.
    """

    gvk = obj.group_version_kind
    recognized = _RECOGNIZED.get(gvk)
    if recognized is None:
        raise UnrecognizedManifestError(str(gvk))
    kind, model = recognized

    try:
        value = model.model_validate(obj.content)
    except ValidationError as exc:
        raise ManifestConversionError(
            f"failed to convert {kind} manifest {obj.name!r}: {exc}"
        ) from exc

    if isinstance(value, CatalogSource) and value.spec.source_type != SourceType.GRPC:
        raise UnsupportedCatalogSourceError(value.spec.source_type)

    return ClassifiedManifest(kind=kind, value=value)


@dataclass(slots=True)
class InputBuilder:
    """Accumulates classified manifests in input order."""

    namespaces: list[Namespace] = field(default_factory=list)
    subscriptions: list[Subscription] = field(default_factory=list)
    catalogs: list[CatalogSource] = field(default_factory=list)
    csvs: list[ClusterServiceVersion] = field(default_factory=list)

    def add(self, obj: Unstructured) -> None:
        classified = classify(obj)
        log.debug("Classified %s %r", classified.kind, classified.value.name)
        match classified:
            case ClassifiedManifest(kind=ManifestKind.NAMESPACE, value=Namespace() as namespace):
                self.namespaces.append(namespace)
            case ClassifiedManifest(
                kind=ManifestKind.SUBSCRIPTION, value=Subscription() as subscription
            ):
                self.subscriptions.append(subscription)
            case ClassifiedManifest(
                kind=ManifestKind.CATALOG_SOURCE, value=CatalogSource() as catalog
            ):
                self.catalogs.append(catalog)
            case ClassifiedManifest(
                kind=ManifestKind.CLUSTER_SERVICE_VERSION,
                value=ClusterServiceVersion() as csv,
            ):
                self.csvs.append(csv)
            case _:  # pragma: no cover
                raise UnrecognizedManifestError(str(obj.group_version_kind))

    def namespace_names(self) -> list[str]:
        return [namespace.name for namespace in self.namespaces]


def build_input(objects: Iterable[Unstructured]) -> InputBuilder:
    """Classify a batch, stopping at the first manifest that fails."""

    builder = InputBuilder()
    for obj in objects:
        builder.add(obj)
    return builder
