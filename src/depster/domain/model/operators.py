"""Resolution output: the operators a resolver selected."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .catalog import APIKey, Bundle, CatalogKey
    from .manifests import ClusterServiceVersion


@dataclass(frozen=True, slots=True)
class Operator:
    """One component of a resolved operator set."""

    name: str
    version: str = ""
    package_name: str = ""
    channel_name: str = ""
    replaces: str = ""
    source: CatalogKey | None = None
    bundle_path: str = ""
    provided_apis: tuple[APIKey, ...] = ()
    required_apis: tuple[APIKey, ...] = ()

    @property
    def installed(self) -> bool:
        return self.source is None

    @classmethod
    def from_bundle(cls, bundle: Bundle, *, source: CatalogKey) -> Operator:
        return cls(
            name=bundle.csv_name,
            version=bundle.version,
            package_name=bundle.package_name,
            channel_name=bundle.channel_name,
            replaces=bundle.replaces,
            source=source,
            bundle_path=bundle.bundle_path,
            provided_apis=bundle.provided_apis,
            required_apis=bundle.required_apis,
        )

    @classmethod
    def from_installed(cls, csv: ClusterServiceVersion) -> Operator:
        return cls(
            name=csv.name,
            version=csv.version,
            replaces=csv.replaces,
            provided_apis=csv.provided_apis(),
            required_apis=csv.required_apis(),
        )


type OperatorSet = dict[str, Operator]
