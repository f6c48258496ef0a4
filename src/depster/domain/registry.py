"""Catalog registry: one query client per catalog identity."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Self

from depster.domain.errors import DuplicateCatalogError
from depster.domain.model import CatalogKey

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping
    from types import TracebackType

    from depster.domain.model import CatalogSource
    from depster.domain.ports import CatalogClient

log = getLogger(__name__)


def catalog_key(catalog: CatalogSource) -> CatalogKey:
    return CatalogKey(namespace=catalog.namespace, name=catalog.name)


def ensure_unique_catalog_keys(catalogs: Iterable[CatalogSource]) -> list[CatalogKey]:
    """Return the keys of ``catalogs`` in order, failing on the first repeated one."""

    keys: list[CatalogKey] = []
    seen: set[CatalogKey] = set()
    for catalog in catalogs:
        key = catalog_key(catalog)
        if key in seen:
            raise DuplicateCatalogError(key)
        seen.add(key)
        keys.append(key)
    return keys


class CatalogRegistry:
    """Maps catalog identities to clients for the duration of one resolution run.

    The registry owns its clients: ``close`` (or leaving the ``with`` block)
    releases every registered client.
    """

    def __init__(self) -> None:
        self._clients: dict[CatalogKey, CatalogClient] = {}

    def register(self, key: CatalogKey, client: CatalogClient) -> None:
        if key in self._clients:
            raise DuplicateCatalogError(key)
        log.debug("Registered catalog client for %s", key)
        self._clients[key] = client

    def lookup(self, *namespaces: str) -> dict[CatalogKey, CatalogClient]:
        """Return clients whose catalog lives in one of ``namespaces``.

        Without namespaces every registered client is returned.
        """

        if not namespaces:
            return dict(self._clients)
        wanted = set(namespaces)
        return {key: client for key, client in self._clients.items() if key.namespace in wanted}

    def clients_for_namespaces(self, *namespaces: str) -> Mapping[CatalogKey, CatalogClient]:
        return self.lookup(*namespaces)

    def __contains__(self, key: object) -> bool:
        return key in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def __iter__(self) -> Iterator[CatalogKey]:
        return iter(self._clients)

    def close(self) -> None:
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class StaticClientProvider:
    """Serves every client of a registry regardless of the namespaces requested.

    Used for file-based catalogs, whose single client sits under the empty key and
    has no namespace of its own.
    """

    def __init__(self, registry: CatalogRegistry) -> None:
        self._registry = registry

    def clients_for_namespaces(self, *namespaces: str) -> Mapping[CatalogKey, CatalogClient]:
        _ = namespaces
        return self._registry.lookup()
