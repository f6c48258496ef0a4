"""Drive a single resolver call over assembled inputs."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from depster.domain.errors import DepsterError, ResolutionError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from depster.domain.model import ClusterServiceVersion, OperatorSet, Subscription
    from depster.domain.ports import CatalogSourceLister, RegistryClientProvider, ResolverFactory

log = getLogger(__name__)


def resolve(
    namespaces: Sequence[str],
    csvs: Sequence[ClusterServiceVersion],
    subscriptions: Sequence[Subscription],
    *,
    provider: RegistryClientProvider,
    lister: CatalogSourceLister,
    resolver_factory: ResolverFactory,
) -> OperatorSet:
    """Solve for an operator set exactly once.

    The resolver receives the provider itself, not a materialised client map, so it
    can ask for clients on demand. Its result is returned unmodified; a ``DepsterError``
    is wrapped in ``ResolutionError`` and never retried.
    """

    resolver = resolver_factory(provider, lister)
    log.debug(
        "Resolving: namespaces=%s, installed=%s, subscriptions=%s",
        list(namespaces),
        len(csvs),
        len(subscriptions),
    )
    try:
        operators = resolver.solve_operators(namespaces, csvs, subscriptions)
    except DepsterError as exc:
        raise ResolutionError(f"resolution failed: {exc}") from exc

    log.debug("Resolved %s operator(s)", len(operators))
    return operators
