from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from depster.adapters.declcfg import ModelQuerier, convert_to_model, load_declarative_config
from depster.config.catalog import CONNECT_TIMEOUT_ENV, HEALTH_TIMEOUT_ENV, REQUEST_TIMEOUT_ENV
from tests.support.catalogs import ETCD_CLUSTER, PROMETHEUS
from tests.support.fbc import ETCD_CSV, bundle_blob, channel_blob, package_blob, write_catalog

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clear_depster_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (CONNECT_TIMEOUT_ENV, REQUEST_TIMEOUT_ENV, HEALTH_TIMEOUT_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_catalog_blobs() -> list[dict[str, Any]]:
    """An ``etcd`` package with two channels and a ``prometheus`` package needing etcd."""

    return [
        package_blob("etcd", "stable"),
        channel_blob("etcd", "alpha", [{"name": "etcdoperator.v0.6.1"}]),
        channel_blob(
            "etcd",
            "stable",
            [
                {"name": "etcdoperator.v0.9.0"},
                {"name": "etcdoperator.v0.9.2", "replaces": "etcdoperator.v0.9.0"},
                {
                    "name": "etcdoperator.v0.9.4",
                    "replaces": "etcdoperator.v0.9.2",
                    "skips": ["etcdoperator.v0.9.3"],
                },
            ],
        ),
        bundle_blob("etcd", "etcdoperator.v0.6.1", "0.6.1"),
        bundle_blob("etcd", "etcdoperator.v0.9.0", "0.9.0", provides=[ETCD_CLUSTER]),
        bundle_blob("etcd", "etcdoperator.v0.9.2", "0.9.2", provides=[ETCD_CLUSTER]),
        bundle_blob(
            "etcd", "etcdoperator.v0.9.4", "0.9.4", provides=[ETCD_CLUSTER], csv=ETCD_CSV
        ),
        package_blob("prometheus", "beta"),
        channel_blob("prometheus", "beta", [{"name": "prometheusoperator.0.22.2"}]),
        bundle_blob(
            "prometheus",
            "prometheusoperator.0.22.2",
            "0.22.2",
            provides=[PROMETHEUS],
            requires=[ETCD_CLUSTER],
        ),
    ]


@pytest.fixture
def fbc_root(tmp_path: Path, sample_catalog_blobs: list[dict[str, Any]]) -> Path:
    root = tmp_path / "catalog"
    write_catalog(root, sample_catalog_blobs)
    return root


@pytest.fixture
def catalog_querier(fbc_root: Path) -> ModelQuerier:
    return ModelQuerier(convert_to_model(load_declarative_config(fbc_root)))
