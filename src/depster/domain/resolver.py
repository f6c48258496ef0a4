"""Default resolver: channel heads plus greedy required-API closure.

A small stand-in for a SAT-based resolver. It honours the same contract
(``Resolver.solve_operators``), so a different engine can be plugged in through
the ``resolver_factory`` argument of the app entry points.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from depster.domain.errors import CatalogLookupError, UnsatisfiableError
from depster.domain.model import CatalogKey, Operator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from depster.domain.model import (
        APIKey,
        Bundle,
        ClusterServiceVersion,
        OperatorSet,
        Subscription,
    )
    from depster.domain.ports import CatalogClient, CatalogSourceLister, RegistryClientProvider

log = getLogger(__name__)

type _Candidate = tuple[CatalogKey, CatalogClient]


@dataclass(slots=True)
class _Selection:
    operators: dict[str, Operator] = field(default_factory=dict)
    packages: dict[str, str] = field(default_factory=dict)

    def add(self, operator: Operator) -> bool:
        """Record ``operator``; return ``False`` when it was already selected."""

        if operator.name in self.operators:
            return False
        if operator.package_name:
            existing = self.packages.get(operator.package_name)
            if existing is not None:
                raise UnsatisfiableError(
                    f"conflicting bundles {existing!r} and {operator.name!r} "
                    f"for package {operator.package_name!r}"
                )
            self.packages[operator.package_name] = operator.name
        self.operators[operator.name] = operator
        return True

    def provides(self, api: APIKey) -> bool:
        return any(
            provided.matches(api)
            for operator in self.operators.values()
            for provided in operator.provided_apis
        )


@dataclass(slots=True)
class DefaultResolver:
    provider: RegistryClientProvider
    lister: CatalogSourceLister

    def solve_operators(
        self,
        namespaces: Sequence[str],
        csvs: Sequence[ClusterServiceVersion],
        subscriptions: Sequence[Subscription],
    ) -> OperatorSet:
        selection = _Selection()
        installed_names = [csv.name for csv in csvs]
        search_namespaces = list(namespaces)

        for subscription in subscriptions:
            key, bundle = self._select_for_subscription(subscription, namespaces, installed_names)
            log.debug("Subscription %r selected %s from %s", subscription.name, bundle.csv_name, key)
            selection.add(Operator.from_bundle(bundle, source=key))
            # an empty namespace list already searches every catalog
            if search_namespaces and key.namespace not in search_namespaces:
                search_namespaces.append(key.namespace)

        superseded = {operator.replaces for operator in selection.operators.values()}
        for csv in csvs:
            if csv.name not in superseded and csv.name not in selection.operators:
                selection.operators[csv.name] = Operator.from_installed(csv)

        self._satisfy_required_apis(selection, search_namespaces)
        return selection.operators

    def _candidates(
        self, namespaces: Sequence[str], subscription: Subscription | None = None
    ) -> list[_Candidate]:
        requested = list(namespaces)
        if subscription is not None:
            source_namespace = subscription.spec.source_namespace or subscription.namespace
            if source_namespace and source_namespace not in requested:
                requested.append(source_namespace)
        clients = self.provider.clients_for_namespaces(*requested)

        if subscription is not None and subscription.spec.source:
            key = CatalogKey(
                namespace=subscription.spec.source_namespace or subscription.namespace,
                name=subscription.spec.source,
            )
            client = clients.get(key)
            return [(key, client)] if client is not None else []

        priorities = {
            CatalogKey(namespace=catalog.namespace, name=catalog.name): catalog.spec.priority
            for catalog in self.lister.list()
        }
        return sorted(clients.items(), key=lambda item: (-priorities.get(item[0], 0), item[0]))

    def _select_for_subscription(
        self,
        subscription: Subscription,
        namespaces: Sequence[str],
        installed_names: Sequence[str],
    ) -> tuple[CatalogKey, Bundle]:
        spec = subscription.spec
        candidates = self._candidates(namespaces, subscription)
        if not candidates:
            raise UnsatisfiableError(f"no catalog available for subscription {subscription.name!r}")

        misses: list[str] = []
        for key, client in candidates:
            try:
                package = client.get_package(spec.package)
            except CatalogLookupError as exc:
                misses.append(f"{key}: {exc}")
                continue

            channel_name = spec.channel or package.default_channel_name
            if package.channel(channel_name) is None:
                raise UnsatisfiableError(
                    f"package {spec.package!r} in catalog {key} has no channel {channel_name!r}"
                )
            return key, self._upgrade_or_head(client, spec.package, channel_name, installed_names)

        detail = "; ".join(misses)
        raise UnsatisfiableError(
            f"no catalog provides package {spec.package!r} "
            f"for subscription {subscription.name!r} ({detail})"
        )

    def _upgrade_or_head(
        self,
        client: CatalogClient,
        package_name: str,
        channel_name: str,
        installed_names: Sequence[str],
    ) -> Bundle:
        for name in installed_names:
            try:
                return client.get_replacement_bundle_in_package_channel(
                    name, package_name, channel_name
                )
            except CatalogLookupError:
                continue
        return client.get_bundle_in_package_channel(package_name, channel_name)

    def _satisfy_required_apis(self, selection: _Selection, namespaces: Sequence[str]) -> None:
        pending: deque[APIKey] = deque(
            api for operator in list(selection.operators.values()) for api in operator.required_apis
        )
        while pending:
            api = pending.popleft()
            if selection.provides(api):
                continue
            key, bundle = self._find_provider(api, namespaces, selection)
            log.debug("Required API %s provided by %s from %s", api, bundle.csv_name, key)
            if selection.add(Operator.from_bundle(bundle, source=key)):
                pending.extend(bundle.required_apis)

    def _find_provider(
        self, api: APIKey, namespaces: Sequence[str], selection: _Selection
    ) -> tuple[CatalogKey, Bundle]:
        fallback: tuple[CatalogKey, Bundle] | None = None
        for key, client in self._candidates(namespaces):
            heads: dict[str, set[str]] = {}
            for bundle in client.list_bundles():
                if not bundle.provides(api):
                    continue
                if bundle.package_name in selection.packages:
                    continue
                if bundle.csv_name in self._channel_heads(client, bundle.package_name, heads):
                    return key, bundle
                if fallback is None:
                    fallback = (key, bundle)
        if fallback is None:
            raise UnsatisfiableError(f"no bundle provides required API {api}")
        return fallback

    def _channel_heads(
        self, client: CatalogClient, package_name: str, cache: dict[str, set[str]]
    ) -> set[str]:
        if package_name not in cache:
            package = client.get_package(package_name)
            cache[package_name] = {channel.csv_name for channel in package.channels}
        return cache[package_name]


def default_resolver_factory(
    provider: RegistryClientProvider, lister: CatalogSourceLister
) -> DefaultResolver:
    return DefaultResolver(provider=provider, lister=lister)
