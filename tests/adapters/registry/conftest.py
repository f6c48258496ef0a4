from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

import pytest

from depster.adapters.registry import GrpcCatalogClient, connect_catalog
from depster.config import CatalogClientConfig
from depster.domain.model import Dependency, Property
from tests.support.catalogs import ETCD_CLUSTER, FakeCatalogClient, make_bundle
from tests.support.registry_server import RegistryServer

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def registry_catalog() -> FakeCatalogClient:
    head = replace(
        make_bundle(
            "etcdoperator.v0.9.4",
            "etcd",
            "singlenamespace-alpha",
            version="0.9.4",
            replaces="etcdoperator.v0.9.2",
            skips=["etcdoperator.v0.9.3"],
            provides=[replace(ETCD_CLUSTER, plural="etcdclusters")],
        ),
        skip_range="<0.9.4",
        csv_json='{"kind":"ClusterServiceVersion"}',
        objects=('{"kind":"ClusterServiceVersion"}', '{"kind":"CustomResourceDefinition"}'),
        dependencies=(Dependency(type="olm.package", value='{"packageName":"vault"}'),),
        properties=(Property(type="olm.package", value='{"packageName":"etcd"}'),),
    )
    return FakeCatalogClient(
        [
            make_bundle(
                "etcdoperator.v0.9.2",
                "etcd",
                "singlenamespace-alpha",
                version="0.9.2",
                provides=[ETCD_CLUSTER],
            ),
            head,
        ]
    )


@pytest.fixture
def registry_server(registry_catalog: FakeCatalogClient) -> Iterator[RegistryServer]:
    server = RegistryServer(registry_catalog)
    server.start()
    try:
        yield server
    finally:
        server.stop()


@pytest.fixture
def catalog_config() -> CatalogClientConfig:
    return CatalogClientConfig(
        connect_timeout_seconds=5.0, request_timeout_seconds=5.0, health_timeout_seconds=2.0
    )


@pytest.fixture
def grpc_client(
    registry_server: RegistryServer, catalog_config: CatalogClientConfig
) -> Iterator[GrpcCatalogClient]:
    client = connect_catalog(registry_server.address, config=catalog_config)
    try:
        yield client
    finally:
        client.close()
