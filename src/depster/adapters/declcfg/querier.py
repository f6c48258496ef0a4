"""Query an in-memory catalog model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from depster.domain.errors import CatalogLookupError
from depster.domain.model import Bundle

if TYPE_CHECKING:
    from .model import CatalogModel, ModelBundle, ModelChannel, ModelPackage


@dataclass(frozen=True, slots=True)
class PackageChannel:
    name: str
    current_csv_name: str


@dataclass(frozen=True, slots=True)
class PackageManifest:
    """Package summary in the model's own shape."""

    package_name: str
    channels: tuple[PackageChannel, ...]
    default_channel_name: str


class ModelQuerier:
    def __init__(self, model: CatalogModel) -> None:
        self._model = model

    def list_packages(self) -> list[str]:
        return list(self._model.packages)

    def get_package(self, name: str) -> PackageManifest:
        package = self._package(name)
        return PackageManifest(
            package_name=package.name,
            channels=tuple(
                PackageChannel(name=channel.name, current_csv_name=channel.head)
                for channel in package.channels.values()
            ),
            default_channel_name=package.default_channel_name,
        )

    def get_bundle(self, package_name: str, channel_name: str, csv_name: str) -> Bundle:
        channel = self._channel(package_name, channel_name)
        bundle = channel.bundles.get(csv_name)
        if bundle is None:
            raise CatalogLookupError(
                f"bundle {csv_name!r} not found in package {package_name!r}, "
                f"channel {channel_name!r}"
            )
        return to_api_bundle(bundle)

    def get_bundle_for_channel(self, package_name: str, channel_name: str) -> Bundle:
        return to_api_bundle(self._channel(package_name, channel_name).head_bundle())

    def get_bundle_that_replaces(
        self, name: str, package_name: str, channel_name: str
    ) -> Bundle:
        channel = self._channel(package_name, channel_name)
        for bundle in channel.bundles.values():
            if bundle.replaces == name:
                return to_api_bundle(bundle)
        for bundle in channel.bundles.values():
            if name in bundle.skips:
                return to_api_bundle(bundle)
        raise CatalogLookupError(
            f"no entry found that replaces {name!r} in package {package_name!r}, "
            f"channel {channel_name!r}"
        )

    def list_bundles(self) -> list[Bundle]:
        return [
            to_api_bundle(bundle)
            for package in self._model.packages.values()
            for channel in package.channels.values()
            for bundle in channel.bundles.values()
        ]

    def _package(self, name: str) -> ModelPackage:
        package = self._model.packages.get(name)
        if package is None:
            raise CatalogLookupError(f"package {name!r} not found")
        return package

    def _channel(self, package_name: str, channel_name: str) -> ModelChannel:
        channel = self._package(package_name).channels.get(channel_name)
        if channel is None:
            raise CatalogLookupError(
                f"package {package_name!r}, channel {channel_name!r} not found"
            )
        return channel


def to_api_bundle(bundle: ModelBundle) -> Bundle:
    return Bundle(
        csv_name=bundle.name,
        package_name=bundle.package,
        channel_name=bundle.channel,
        bundle_path=bundle.image,
        version=bundle.version,
        replaces=bundle.replaces,
        skips=bundle.skips,
        skip_range=bundle.skip_range,
        provided_apis=bundle.provided_apis,
        required_apis=bundle.required_apis,
        dependencies=bundle.dependencies,
        properties=bundle.properties,
        csv_json=bundle.csv_json,
        objects=bundle.objects,
    )
