from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from depster.adapters.declcfg import convert_to_model, load_declarative_config
from depster.adapters.declcfg.schema import (
    DeclarativeBundle,
    DeclarativeChannel,
    DeclarativeConfig,
    DeclarativePackage,
)
from depster.domain.errors import DeclarativeConfigError
from depster.domain.model import Dependency
from tests.support.catalogs import ETCD_CLUSTER, PROMETHEUS
from tests.support.fbc import ETCD_CSV, bundle_blob, channel_blob, package_blob

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def _config(blobs: Sequence[dict[str, Any]]) -> DeclarativeConfig:
    cfg = DeclarativeConfig()
    for blob in blobs:
        match blob["schema"]:
            case "olm.package":
                cfg.packages.append(DeclarativePackage.model_validate(blob))
            case "olm.channel":
                cfg.channels.append(DeclarativeChannel.model_validate(blob))
            case "olm.bundle":
                cfg.bundles.append(DeclarativeBundle.model_validate(blob))
    return cfg


def _single_bundle_package(**bundle_kwargs: Any) -> list[dict[str, Any]]:
    return [
        package_blob("etcd", "alpha"),
        channel_blob("etcd", "alpha", [{"name": "etcdoperator.v0.6.1"}]),
        bundle_blob("etcd", "etcdoperator.v0.6.1", "0.6.1", **bundle_kwargs),
    ]


def test_model_orders_packages_and_channels_by_name(fbc_root: Path) -> None:
    model = convert_to_model(load_declarative_config(fbc_root))

    assert list(model.packages) == ["etcd", "prometheus"]
    assert list(model.packages["etcd"].channels) == ["alpha", "stable"]
    stable = model.packages["etcd"].channels["stable"]
    assert stable.head == "etcdoperator.v0.9.4"
    assert list(stable.bundles) == [
        "etcdoperator.v0.9.0",
        "etcdoperator.v0.9.2",
        "etcdoperator.v0.9.4",
    ]


def test_model_bundle_carries_entry_and_properties(fbc_root: Path) -> None:
    model = convert_to_model(load_declarative_config(fbc_root))

    head = model.packages["etcd"].channels["stable"].head_bundle()
    assert head.version == "0.9.4"
    assert head.replaces == "etcdoperator.v0.9.2"
    assert head.skips == ("etcdoperator.v0.9.3",)
    assert head.image == "quay.io/example/etcdoperator.v0.9.4:latest"
    assert head.provided_apis == (ETCD_CLUSTER,)
    assert head.objects == (json.dumps(ETCD_CSV),)
    assert head.csv_json == json.dumps(ETCD_CSV)


def test_model_bundle_records_required_apis_as_dependencies(fbc_root: Path) -> None:
    model = convert_to_model(load_declarative_config(fbc_root))

    bundle = model.packages["prometheus"].channels["beta"].head_bundle()
    assert bundle.provided_apis == (PROMETHEUS,)
    assert bundle.required_apis == (ETCD_CLUSTER,)
    assert bundle.dependencies == (
        Dependency(
            type="olm.gvk.required",
            value='{"group":"etcd.database.coreos.com","kind":"EtcdCluster","version":"v1beta2"}',
        ),
    )


@pytest.mark.parametrize(
    ("blobs", "message"),
    [
        (
            [*_single_bundle_package(), package_blob("etcd", "alpha")],
            "duplicate package 'etcd'",
        ),
        (
            [
                package_blob("etcd", "alpha"),
                channel_blob("vault", "alpha", [{"name": "etcdoperator.v0.6.1"}]),
            ],
            "unknown package 'vault' for channel",
        ),
        (
            [
                package_blob("etcd", "alpha"),
                channel_blob("etcd", "alpha", [{"name": "etcdoperator.v0.6.1"}]),
            ],
            "bundle 'etcdoperator.v0.6.1' not found",
        ),
        (
            [*_single_bundle_package(), bundle_blob("etcd", "etcdoperator.v0.9.0", "0.9.0")],
            "not found in any channel entries",
        ),
        (
            [
                package_blob("etcd", "alpha"),
                channel_blob(
                    "etcd",
                    "alpha",
                    [{"name": "etcdoperator.v0.6.1"}, {"name": "etcdoperator.v0.9.0"}],
                ),
                bundle_blob("etcd", "etcdoperator.v0.6.1", "0.6.1"),
                bundle_blob("etcd", "etcdoperator.v0.9.0", "0.9.0"),
            ],
            "must have exactly one head",
        ),
        (
            [package_blob("etcd", "alpha"), channel_blob("etcd", "alpha", [])],
            "has no entries",
        ),
        (
            [
                package_blob("etcd", "stable"),
                channel_blob("etcd", "alpha", [{"name": "etcdoperator.v0.6.1"}]),
                bundle_blob("etcd", "etcdoperator.v0.6.1", "0.6.1"),
            ],
            "default channel 'stable' not found",
        ),
        ([package_blob("etcd", "alpha")], "has no channels"),
    ],
)
def test_invalid_config_is_rejected(blobs: list[dict[str, Any]], message: str) -> None:
    with pytest.raises(DeclarativeConfigError, match=message):
        convert_to_model(_config(blobs))


def test_bundle_needs_matching_package_property() -> None:
    blobs = _single_bundle_package()
    blobs[2]["properties"][0]["value"]["packageName"] = "other"

    with pytest.raises(DeclarativeConfigError, match="expected 'etcd'"):
        convert_to_model(_config(blobs))


def test_bundle_object_must_be_base64() -> None:
    blobs = _single_bundle_package()
    blobs[2]["properties"].append({"type": "olm.bundle.object", "value": {"data": "%%%"}})

    with pytest.raises(DeclarativeConfigError, match="not valid base64"):
        convert_to_model(_config(blobs))
