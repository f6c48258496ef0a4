"""Translate registry wire messages into domain catalog models."""

from __future__ import annotations

from typing import Any

from depster.domain.model import APIKey, Bundle, Channel, Dependency, Package, Property


def to_package(message: Any) -> Package:
    return Package(
        name=message.name,
        channels=tuple(
            Channel(name=channel.name, csv_name=channel.csvName) for channel in message.channels
        ),
        default_channel_name=message.defaultChannelName,
    )


def to_bundle(message: Any) -> Bundle:
    return Bundle(
        csv_name=message.csvName,
        package_name=message.packageName,
        channel_name=message.channelName,
        bundle_path=message.bundlePath,
        version=message.version,
        replaces=message.replaces,
        skips=tuple(message.skips),
        skip_range=message.skipRange,
        provided_apis=tuple(_api_key(gvk) for gvk in message.providedApis),
        required_apis=tuple(_api_key(gvk) for gvk in message.requiredApis),
        dependencies=tuple(
            Dependency(type=dependency.type, value=dependency.value)
            for dependency in message.dependencies
        ),
        properties=tuple(Property(type=prop.type, value=prop.value) for prop in message.properties),
        csv_json=message.csvJson,
        objects=tuple(message.object),
    )


def _api_key(message: Any) -> APIKey:
    return APIKey(
        group=message.group,
        version=message.version,
        kind=message.kind,
        plural=message.plural,
    )
