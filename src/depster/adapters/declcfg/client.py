"""Catalog client backed by an in-memory declarative config model."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from depster.domain.model import Channel, Package
from depster.domain.ports import BundleIterator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from depster.domain.model import Bundle
    from depster.domain.ports import CatalogClient

    from .querier import ModelQuerier


class ModelBundleStream:
    """Finite, non-restartable stream over an already materialised bundle list.

    Each ``recv`` removes and returns the head element; ``None`` marks the end.
    """

    __slots__ = ("_bundles",)

    def __init__(self, bundles: Iterable[Bundle]) -> None:
        self._bundles = deque(bundles)

    def recv(self) -> Bundle | None:
        if not self._bundles:
            return None
        return self._bundles.popleft()


class ModelCatalogClient:
    """Serves the catalog client port from a :class:`ModelQuerier`."""

    def __init__(self, querier: ModelQuerier) -> None:
        self._querier = querier

    def get_bundle_in_package_channel(self, package_name: str, channel_name: str) -> Bundle:
        return self._querier.get_bundle_for_channel(package_name, channel_name)

    def get_package(self, package_name: str) -> Package:
        manifest = self._querier.get_package(package_name)
        return Package(
            name=manifest.package_name,
            channels=tuple(
                Channel(name=channel.name, csv_name=channel.current_csv_name)
                for channel in manifest.channels
            ),
            default_channel_name=manifest.default_channel_name,
        )

    def get_replacement_bundle_in_package_channel(
        self, current_name: str, package_name: str, channel_name: str
    ) -> Bundle:
        return self._querier.get_bundle_that_replaces(current_name, package_name, channel_name)

    def health_check(self, reconnect_timeout: float) -> bool:
        _ = reconnect_timeout
        return True

    def list_bundles(self) -> BundleIterator:
        return BundleIterator(ModelBundleStream(self._querier.list_bundles()))

    def close(self) -> None:
        return None


if TYPE_CHECKING:

    def _client_check(querier: ModelQuerier) -> CatalogClient:
        return ModelCatalogClient(querier)
