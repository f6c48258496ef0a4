"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from depster.adapters.declcfg import FileBasedCatalogLoader, ModelCatalogClient
from depster.adapters.manifests import load_manifest
from depster.adapters.noop import NoopCatalogSourceLister
from depster.adapters.registry import connect_catalog
from depster.config import FILE_BASED_CATALOG_NAMESPACE, get_catalog_client_config
from depster.domain.classification import build_input
from depster.domain.errors import DepsterError
from depster.domain.model import CatalogKey
from depster.domain.registry import (
    CatalogRegistry,
    StaticClientProvider,
    catalog_key,
    ensure_unique_catalog_keys,
)
from depster.domain.resolution import resolve
from depster.domain.resolver import default_resolver_factory

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from depster.config import CatalogClientConfig
    from depster.domain.model import OperatorSet
    from depster.domain.ports import (
        CatalogClient,
        CatalogSourceLister,
        ManifestLoader,
        ResolverFactory,
    )

CatalogConnector = Callable[[str], "CatalogClient"]


log = getLogger(__name__)


class RunError(DepsterError):
    """Raised by an entry point; the message carries the resolution mode."""


def resolve_manifests_with_running_catalog(
    locators: Sequence[str],
    *,
    loaders: Mapping[str, ManifestLoader] | None = None,
    connect: CatalogConnector | None = None,
    lister: CatalogSourceLister | None = None,
    resolver_factory: ResolverFactory = default_resolver_factory,
    config: CatalogClientConfig | None = None,
) -> OperatorSet:
    """Resolve manifest locators against the live catalogs they declare."""

    try:
        return _resolve_running(
            locators,
            loaders=loaders,
            connect=connect or partial(connect_catalog, config=config or get_catalog_client_config()),
            lister=lister or NoopCatalogSourceLister(),
            resolver_factory=resolver_factory,
        )
    except DepsterError as exc:
        raise RunError(f"error while resolving manifests for running catalog: {exc}") from exc


def resolve_file_based_catalog(
    locator: str,
    *,
    lister: CatalogSourceLister | None = None,
    resolver_factory: ResolverFactory = default_resolver_factory,
) -> OperatorSet:
    """Resolve the subscription encoded in ``<dir>?bundle=..&channel=..``."""

    try:
        return _resolve_file_based(
            locator,
            lister=lister or NoopCatalogSourceLister(),
            resolver_factory=resolver_factory,
        )
    except DepsterError as exc:
        raise RunError(f"error while resolving file based catalog: {exc}") from exc


def _resolve_running(
    locators: Sequence[str],
    *,
    loaders: Mapping[str, ManifestLoader] | None,
    connect: CatalogConnector,
    lister: CatalogSourceLister,
    resolver_factory: ResolverFactory,
) -> OperatorSet:
    builder = build_input(load_manifest(locator, loaders=loaders) for locator in locators)
    log.info(
        "Loaded %s manifest(s): namespaces=%s, subscriptions=%s, catalogs=%s, installed=%s",
        len(locators),
        len(builder.namespaces),
        len(builder.subscriptions),
        len(builder.catalogs),
        len(builder.csvs),
    )
    ensure_unique_catalog_keys(builder.catalogs)

    with CatalogRegistry() as registry:
        for catalog in builder.catalogs:
            log.debug("Connecting to catalog %s at %s", catalog_key(catalog), catalog.spec.address)
            registry.register(catalog_key(catalog), connect(catalog.spec.address))

        return resolve(
            builder.namespace_names(),
            builder.csvs,
            builder.subscriptions,
            provider=registry,
            lister=lister,
            resolver_factory=resolver_factory,
        )


def _resolve_file_based(
    locator: str,
    *,
    lister: CatalogSourceLister,
    resolver_factory: ResolverFactory,
) -> OperatorSet:
    querier, subscription = FileBasedCatalogLoader().load_manifest(urlsplit(locator))
    log.info("Loaded file-based catalog for package %r", subscription.spec.package)

    with CatalogRegistry() as registry:
        registry.register(CatalogKey(), ModelCatalogClient(querier))
        return resolve(
            [FILE_BASED_CATALOG_NAMESPACE],
            [],
            [subscription],
            provider=StaticClientProvider(registry),
            lister=lister,
            resolver_factory=resolver_factory,
        )
