"""Typed manifests accepted as resolution input.

The models mirror the subset of the Kubernetes and OLM API objects that the
resolver consumes. Unknown fields are dropped on validation; every model can be
rendered back to its generic form with ``to_unstructured``.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Final, cast

from pydantic import BaseModel, ConfigDict, Field

from .catalog import APIKey

OPERATORS_GROUP: Final[str] = "operators.coreos.com"
OPERATORS_VERSION: Final[str] = "v1alpha1"


@dataclass(frozen=True, slots=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind)

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


NAMESPACE_GVK: Final = GroupVersionKind("", "v1", "Namespace")
SUBSCRIPTION_GVK: Final = GroupVersionKind(OPERATORS_GROUP, OPERATORS_VERSION, "Subscription")
CATALOG_SOURCE_GVK: Final = GroupVersionKind(OPERATORS_GROUP, OPERATORS_VERSION, "CatalogSource")
CLUSTER_SERVICE_VERSION_GVK: Final = GroupVersionKind(
    OPERATORS_GROUP, OPERATORS_VERSION, "ClusterServiceVersion"
)


@dataclass(slots=True)
class Unstructured:
    """A decoded manifest of not-yet-known kind."""

    content: dict[str, Any]

    @property
    def api_version(self) -> str:
        value = self.content.get("apiVersion")
        return value if isinstance(value, str) else ""

    @property
    def kind(self) -> str:
        value = self.content.get("kind")
        return value if isinstance(value, str) else ""

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(self.api_version, self.kind)

    @property
    def name(self) -> str:
        metadata = self.content.get("metadata")
        if isinstance(metadata, Mapping):
            name = cast(Mapping[str, object], metadata).get("name")
            if isinstance(name, str):
                return name
        return ""

    def to_dict(self) -> dict[str, Any]:
        return deepcopy(self.content)


class SourceType(StrEnum):
    GRPC = "grpc"
    CONFIGMAP = "configmap"
    INTERNAL = "internal"


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ObjectMeta(ManifestBaseModel):
    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class Manifest(ManifestBaseModel):
    gvk: ClassVar[GroupVersionKind]

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def to_unstructured(self) -> Unstructured:
        content: dict[str, Any] = {"apiVersion": self.gvk.api_version, "kind": self.gvk.kind}
        content.update(self.model_dump(mode="json", by_alias=True, exclude_none=True))
        return Unstructured(content)


class Namespace(Manifest):
    gvk: ClassVar[GroupVersionKind] = NAMESPACE_GVK


class SubscriptionSpec(ManifestBaseModel):
    package: str = Field(alias="name")
    channel: str = ""
    source: str = ""
    source_namespace: str = Field(default="", alias="sourceNamespace")
    starting_csv: str = Field(default="", alias="startingCSV")
    install_plan_approval: str | None = Field(default=None, alias="installPlanApproval")


class Subscription(Manifest):
    gvk: ClassVar[GroupVersionKind] = SUBSCRIPTION_GVK

    spec: SubscriptionSpec


class CatalogSourceSpec(ManifestBaseModel):
    source_type: str = Field(default="", alias="sourceType")
    address: str = ""
    image: str = ""
    priority: int = 0
    display_name: str = Field(default="", alias="displayName")
    publisher: str = ""


class CatalogSource(Manifest):
    gvk: ClassVar[GroupVersionKind] = CATALOG_SOURCE_GVK

    spec: CatalogSourceSpec


class ClusterServiceVersion(Manifest):
    """An installed operator; its spec is passed through untouched."""

    gvk: ClassVar[GroupVersionKind] = CLUSTER_SERVICE_VERSION_GVK

    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] | None = None

    @property
    def version(self) -> str:
        value = self.spec.get("version")
        return value if isinstance(value, str) else ""

    @property
    def replaces(self) -> str:
        value = self.spec.get("replaces")
        return value if isinstance(value, str) else ""

    def provided_apis(self) -> tuple[APIKey, ...]:
        return _crd_api_keys(self.spec, "owned")

    def required_apis(self) -> tuple[APIKey, ...]:
        return _crd_api_keys(self.spec, "required")


def _crd_api_keys(spec: Mapping[str, Any], section: str) -> tuple[APIKey, ...]:
    crds = spec.get("customresourcedefinitions")
    if not isinstance(crds, Mapping):
        return ()
    entries = cast(Mapping[str, object], crds).get(section)
    if not isinstance(entries, list):
        return ()

    keys: list[APIKey] = []
    for entry in cast(list[object], entries):
        if not isinstance(entry, Mapping):
            continue
        data = cast(Mapping[str, object], entry)
        plural, _, group = str(data.get("name", "")).partition(".")
        keys.append(
            APIKey(
                group=group,
                version=str(data.get("version", "")),
                kind=str(data.get("kind", "")),
                plural=plural,
            )
        )
    return tuple(keys)
