"""Stand-ins for collaborators a resolution run does not need."""

from __future__ import annotations

from typing import TYPE_CHECKING

from depster.domain.errors import CatalogLookupError

if TYPE_CHECKING:
    from depster.domain.model import CatalogSource
    from depster.domain.ports import CatalogSourceLister


class NoopCatalogSourceLister:
    """Lists no catalog sources; every catalog then shares the default priority."""

    def list(self) -> list[CatalogSource]:
        return []

    def get(self, namespace: str, name: str) -> CatalogSource:
        raise CatalogLookupError(f"catalog source {namespace}/{name}: lookup not implemented")


if TYPE_CHECKING:

    def _lister_check() -> CatalogSourceLister:
        return NoopCatalogSourceLister()
