"""Ports for querying catalogs of installable bundles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from depster.domain.model import Bundle, CatalogKey, CatalogSource, Package


@runtime_checkable
class BundleStream(Protocol):
    """Pull-based bundle source; ``recv`` returns ``None`` once exhausted."""

    def recv(self) -> Bundle | None: ...


class BundleIterator:
    """Cursor over a :class:`BundleStream`.

    ``next`` is the only operation that advances the stream. Reaching the end is
    signalled by ``None`` and is never an error; once exhausted the iterator stays
    exhausted, so callers re-enumerate through a fresh ``list_bundles`` call.
    """

    __slots__ = ("_done", "_stream")

    def __init__(self, stream: BundleStream) -> None:
        self._stream = stream
        self._done = False

    def next(self) -> Bundle | None:
        if self._done:
            return None
        bundle = self._stream.recv()
        if bundle is None:
            self._done = True
        return bundle

    def __iter__(self) -> Iterator[Bundle]:
        while (bundle := self.next()) is not None:
            yield bundle


@runtime_checkable
class CatalogClient(Protocol):
    """Query surface shared by live and in-memory catalogs."""

    def get_bundle_in_package_channel(self, package_name: str, channel_name: str) -> Bundle: ...

    def get_package(self, package_name: str) -> Package: ...

    def get_replacement_bundle_in_package_channel(
        self, current_name: str, package_name: str, channel_name: str
    ) -> Bundle: ...

    def health_check(self, reconnect_timeout: float) -> bool: ...

    def list_bundles(self) -> BundleIterator: ...

    def close(self) -> None: ...


@runtime_checkable
class RegistryClientProvider(Protocol):
    """Hands resolvers the catalog clients relevant to a set of namespaces."""

    def clients_for_namespaces(self, *namespaces: str) -> Mapping[CatalogKey, CatalogClient]: ...


@runtime_checkable
class CatalogSourceLister(Protocol):
    """Read access to CatalogSource objects, used for catalog priority."""

    def list(self) -> list[CatalogSource]: ...

    def get(self, namespace: str, name: str) -> CatalogSource: ...


__all__ = [
    "BundleIterator",
    "BundleStream",
    "CatalogClient",
    "CatalogSourceLister",
    "RegistryClientProvider",
]
