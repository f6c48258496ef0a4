from __future__ import annotations

import pytest

from depster.domain.errors import DuplicateCatalogError
from depster.domain.model import CatalogKey, CatalogSource
from depster.domain.registry import (
    CatalogRegistry,
    StaticClientProvider,
    catalog_key,
    ensure_unique_catalog_keys,
)
from tests.support.catalogs import FakeCatalogClient
from tests.support.manifests import catalog_source_manifest


def _catalog(name: str, namespace: str, address: str) -> CatalogSource:
    return CatalogSource.model_validate(catalog_source_manifest(name, namespace, address))


def test_register_and_lookup_by_namespace() -> None:
    registry = CatalogRegistry()
    first, second = FakeCatalogClient(), FakeCatalogClient()
    registry.register(CatalogKey("ns1", "cat1"), first)
    registry.register(CatalogKey("ns2", "cat2"), second)

    assert registry.lookup("ns1") == {CatalogKey("ns1", "cat1"): first}
    assert registry.clients_for_namespaces("ns2", "other") == {CatalogKey("ns2", "cat2"): second}
    assert registry.lookup() == {CatalogKey("ns1", "cat1"): first, CatalogKey("ns2", "cat2"): second}
    assert len(registry) == 2
    assert CatalogKey("ns1", "cat1") in registry
    assert list(registry) == [CatalogKey("ns1", "cat1"), CatalogKey("ns2", "cat2")]


def test_duplicate_registration_fails_without_replacing() -> None:
    registry = CatalogRegistry()
    original = FakeCatalogClient()
    registry.register(CatalogKey("ns1", "cat1"), original)

    with pytest.raises(DuplicateCatalogError) as excinfo:
        registry.register(CatalogKey("ns1", "cat1"), FakeCatalogClient())

    assert str(excinfo.value) == "duplicate catalog source: ns1/cat1"
    assert registry.lookup("ns1") == {CatalogKey("ns1", "cat1"): original}


def test_same_name_in_different_namespaces_is_allowed() -> None:
    registry = CatalogRegistry()
    registry.register(CatalogKey("ns1", "cat"), FakeCatalogClient())
    registry.register(CatalogKey("ns2", "cat"), FakeCatalogClient())

    assert len(registry) == 2


def test_context_manager_closes_every_client() -> None:
    clients = [FakeCatalogClient(), FakeCatalogClient()]

    with CatalogRegistry() as registry:
        registry.register(CatalogKey("ns1", "a"), clients[0])
        registry.register(CatalogKey("ns1", "b"), clients[1])

    assert all(client.closed for client in clients)
    assert len(registry) == 0


def test_static_provider_ignores_requested_namespaces() -> None:
    registry = CatalogRegistry()
    client = FakeCatalogClient()
    registry.register(CatalogKey(), client)
    provider = StaticClientProvider(registry)

    assert provider.clients_for_namespaces("test") == {CatalogKey(): client}
    assert provider.clients_for_namespaces() == {CatalogKey(): client}


def test_catalog_key_uses_metadata() -> None:
    assert catalog_key(_catalog("cat1", "ns1", "localhost:50051")) == CatalogKey("ns1", "cat1")


@pytest.mark.parametrize("reverse", [False, True])
def test_duplicate_identity_detected_regardless_of_order(reverse: bool) -> None:
    catalogs = [
        _catalog("cat1", "ns1", "localhost:50051"),
        _catalog("other", "ns1", "localhost:50053"),
        _catalog("cat1", "ns1", "localhost:50052"),
    ]
    if reverse:
        catalogs.reverse()

    with pytest.raises(DuplicateCatalogError, match="ns1/cat1"):
        ensure_unique_catalog_keys(catalogs)


def test_shared_address_with_distinct_identities_is_accepted() -> None:
    keys = ensure_unique_catalog_keys(
        [_catalog("cat1", "ns1", "localhost:50051"), _catalog("cat2", "ns1", "localhost:50051")]
    )

    assert keys == [CatalogKey("ns1", "cat1"), CatalogKey("ns1", "cat2")]
