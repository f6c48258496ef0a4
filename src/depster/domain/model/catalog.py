"""Catalog-owned metadata: identities, packages, channels and bundles."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, order=True)
class CatalogKey:
    """Identity of a catalog: the namespace and name of its CatalogSource."""

    namespace: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class APIKey:
    group: str
    version: str
    kind: str
    plural: str = ""

    def __str__(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}/{self.kind}"
        return f"{self.version}/{self.kind}"

    def matches(self, other: APIKey) -> bool:
        """Compare by group/version/kind; plural forms are informational."""

        return (self.group, self.version, self.kind) == (other.group, other.version, other.kind)


@dataclass(frozen=True, slots=True)
class Property:
    type: str
    value: str


@dataclass(frozen=True, slots=True)
class Dependency:
    type: str
    value: str


@dataclass(frozen=True, slots=True)
class Channel:
    name: str
    csv_name: str


@dataclass(frozen=True, slots=True)
class Package:
    name: str
    channels: tuple[Channel, ...] = ()
    default_channel_name: str = ""

    def channel(self, name: str) -> Channel | None:
        for channel in self.channels:
            if channel.name == name:
                return channel
        return None


@dataclass(frozen=True, slots=True)
class Bundle:
    """One installable version of a package as exposed by a catalog."""

    csv_name: str
    package_name: str
    channel_name: str
    bundle_path: str = ""
    version: str = ""
    replaces: str = ""
    skips: tuple[str, ...] = ()
    skip_range: str = ""
    provided_apis: tuple[APIKey, ...] = ()
    required_apis: tuple[APIKey, ...] = ()
    dependencies: tuple[Dependency, ...] = ()
    properties: tuple[Property, ...] = ()
    csv_json: str = ""
    objects: tuple[str, ...] = field(default=(), repr=False)

    def provides(self, api: APIKey) -> bool:
        return any(provided.matches(api) for provided in self.provided_apis)
