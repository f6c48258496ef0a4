"""Convert declarative config blobs into a validated in-memory catalog model."""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, cast

from depster.domain.errors import DeclarativeConfigError
from depster.domain.model import APIKey, Dependency, Property

from .schema import (
    PROPERTY_BUNDLE_OBJECT,
    PROPERTY_GVK,
    PROPERTY_GVK_REQUIRED,
    PROPERTY_PACKAGE,
    PROPERTY_PACKAGE_REQUIRED,
)

if TYPE_CHECKING:
    from .schema import (
        ChannelEntry,
        DeclarativeBundle,
        DeclarativeChannel,
        DeclarativeConfig,
        DeclarativePackage,
    )


@dataclass(frozen=True, slots=True)
class ModelBundle:
    """A bundle as it appears in one channel of the model."""

    name: str
    package: str
    channel: str
    image: str
    version: str
    replaces: str = ""
    skips: tuple[str, ...] = ()
    skip_range: str = ""
    properties: tuple[Property, ...] = ()
    provided_apis: tuple[APIKey, ...] = ()
    required_apis: tuple[APIKey, ...] = ()
    dependencies: tuple[Dependency, ...] = ()
    objects: tuple[str, ...] = ()
    csv_json: str = ""


@dataclass(slots=True)
class ModelChannel:
    name: str
    package: str
    head: str = ""
    bundles: dict[str, ModelBundle] = field(default_factory=dict)

    def head_bundle(self) -> ModelBundle:
        return self.bundles[self.head]


@dataclass(slots=True)
class ModelPackage:
    name: str
    default_channel_name: str
    description: str = ""
    channels: dict[str, ModelChannel] = field(default_factory=dict)


@dataclass(slots=True)
class CatalogModel:
    packages: dict[str, ModelPackage] = field(default_factory=dict)


def convert_to_model(cfg: DeclarativeConfig) -> CatalogModel:
    """Validate ``cfg`` and assemble it into packages, channels and bundles.

    Packages and channels are ordered by name; bundles keep channel entry order.
    """

    packages = _packages(cfg.packages)
    bundles = _bundles(cfg.bundles, packages)
    used: set[tuple[str, str]] = set()

    for declared in cfg.channels:
        package = packages.get(declared.package)
        if package is None:
            raise DeclarativeConfigError(
                f"unknown package {declared.package!r} for channel {declared.name!r}"
            )
        if declared.name in package.channels:
            raise DeclarativeConfigError(
                f"package {package.name!r}: duplicate channel {declared.name!r}"
            )
        package.channels[declared.name] = _channel(declared, bundles, used)

    for package_name, bundle_name in bundles:
        if (package_name, bundle_name) not in used:
            raise DeclarativeConfigError(
                f"package {package_name!r}, bundle {bundle_name!r} "
                "not found in any channel entries"
            )

    model = CatalogModel()
    for name in sorted(packages):
        package = packages[name]
        if not package.channels:
            raise DeclarativeConfigError(f"package {name!r} has no channels")
        if package.default_channel_name not in package.channels:
            raise DeclarativeConfigError(
                f"package {name!r}: default channel {package.default_channel_name!r} not found"
            )
        package.channels = {key: package.channels[key] for key in sorted(package.channels)}
        model.packages[name] = package
    return model


def _packages(declared: list[DeclarativePackage]) -> dict[str, ModelPackage]:
    packages: dict[str, ModelPackage] = {}
    for package in declared:
        if not package.name:
            raise DeclarativeConfigError("package name must be set")
        if package.name in packages:
            raise DeclarativeConfigError(f"duplicate package {package.name!r}")
        packages[package.name] = ModelPackage(
            name=package.name,
            default_channel_name=package.default_channel,
            description=package.description,
        )
    return packages


def _bundles(
    declared: list[DeclarativeBundle], packages: Mapping[str, ModelPackage]
) -> dict[tuple[str, str], DeclarativeBundle]:
    bundles: dict[tuple[str, str], DeclarativeBundle] = {}
    for bundle in declared:
        if bundle.package not in packages:
            raise DeclarativeConfigError(
                f"unknown package {bundle.package!r} for bundle {bundle.name!r}"
            )
        key = (bundle.package, bundle.name)
        if key in bundles:
            raise DeclarativeConfigError(
                f"package {bundle.package!r}: duplicate bundle {bundle.name!r}"
            )
        bundles[key] = bundle
    return bundles


def _channel(
    declared: DeclarativeChannel,
    bundles: Mapping[tuple[str, str], DeclarativeBundle],
    used: set[tuple[str, str]],
) -> ModelChannel:
    channel = ModelChannel(name=declared.name, package=declared.package)
    for entry in declared.entries:
        key = (declared.package, entry.name)
        bundle = bundles.get(key)
        if bundle is None:
            raise DeclarativeConfigError(
                f"channel {declared.name!r}: bundle {entry.name!r} not found "
                f"in package {declared.package!r}"
            )
        if entry.name in channel.bundles:
            raise DeclarativeConfigError(
                f"channel {declared.name!r}: duplicate entry {entry.name!r}"
            )
        used.add(key)
        channel.bundles[entry.name] = _model_bundle(bundle, declared.name, entry)

    channel.head = _channel_head(declared)
    return channel


def _channel_head(declared: DeclarativeChannel) -> str:
    if not declared.entries:
        raise DeclarativeConfigError(f"channel {declared.name!r} has no entries")
    superseded: set[str] = set()
    for entry in declared.entries:
        if entry.replaces:
            superseded.add(entry.replaces)
        superseded.update(entry.skips)
    heads = [entry.name for entry in declared.entries if entry.name not in superseded]
    if len(heads) != 1:
        found = ", ".join(heads) if heads else "none"
        raise DeclarativeConfigError(
            f"channel {declared.name!r} must have exactly one head, found: {found}"
        )
    return heads[0]


def _model_bundle(bundle: DeclarativeBundle, channel: str, entry: ChannelEntry) -> ModelBundle:
    versions = [
        _as_mapping(value, bundle, PROPERTY_PACKAGE)
        for value in bundle.property_values(PROPERTY_PACKAGE)
    ]
    if len(versions) != 1:
        raise DeclarativeConfigError(
            f"bundle {bundle.name!r} must have exactly one {PROPERTY_PACKAGE!r} property"
        )
    package_property = versions[0]
    if package_property.get("packageName") != bundle.package:
        raise DeclarativeConfigError(
            f"bundle {bundle.name!r}: {PROPERTY_PACKAGE!r} property names package "
            f"{package_property.get('packageName')!r}, expected {bundle.package!r}"
        )

    objects = tuple(
        _decode_object(_as_mapping(value, bundle, PROPERTY_BUNDLE_OBJECT), bundle)
        for value in bundle.property_values(PROPERTY_BUNDLE_OBJECT)
    )
    required_apis = tuple(
        _api_key(_as_mapping(value, bundle, PROPERTY_GVK_REQUIRED))
        for value in bundle.property_values(PROPERTY_GVK_REQUIRED)
    )
    dependencies = tuple(
        Dependency(type=prop.type, value=_compact_json(prop.value))
        for prop in bundle.properties
        if prop.type in {PROPERTY_GVK_REQUIRED, PROPERTY_PACKAGE_REQUIRED}
    )

    return ModelBundle(
        name=bundle.name,
        package=bundle.package,
        channel=channel,
        image=bundle.image,
        version=str(package_property.get("version", "")),
        replaces=entry.replaces,
        skips=tuple(entry.skips),
        skip_range=entry.skip_range,
        properties=tuple(
            Property(type=prop.type, value=_compact_json(prop.value)) for prop in bundle.properties
        ),
        provided_apis=tuple(
            _api_key(_as_mapping(value, bundle, PROPERTY_GVK))
            for value in bundle.property_values(PROPERTY_GVK)
        ),
        required_apis=required_apis,
        dependencies=dependencies,
        objects=objects,
        csv_json=next((obj for obj in objects if _is_csv(obj)), ""),
    )


def _as_mapping(value: object, bundle: DeclarativeBundle, property_type: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DeclarativeConfigError(
            f"bundle {bundle.name!r}: {property_type!r} property value must be an object"
        )
    return cast(Mapping[str, Any], value)


def _api_key(value: Mapping[str, Any]) -> APIKey:
    return APIKey(
        group=str(value.get("group", "")),
        version=str(value.get("version", "")),
        kind=str(value.get("kind", "")),
    )


def _decode_object(value: Mapping[str, Any], bundle: DeclarativeBundle) -> str:
    data = value.get("data")
    if not isinstance(data, str):
        raise DeclarativeConfigError(f"bundle {bundle.name!r}: bundle object has no data")
    try:
        return base64.b64decode(data, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise DeclarativeConfigError(
            f"bundle {bundle.name!r}: bundle object is not valid base64: {exc}"
        ) from exc


def _is_csv(obj: str) -> bool:
    try:
        decoded = json.loads(obj)
    except json.JSONDecodeError:
        return False
    if not isinstance(decoded, Mapping):
        return False
    return cast(Mapping[str, object], decoded).get("kind") == "ClusterServiceVersion"


def _compact_json(value: object) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True)
