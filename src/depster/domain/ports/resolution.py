"""Ports for the dependency resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from depster.domain.model import ClusterServiceVersion, OperatorSet, Subscription

    from .catalog import CatalogSourceLister, RegistryClientProvider


@runtime_checkable
class Resolver(Protocol):
    """Derives a consistent operator set from subscriptions and catalog access.

    Failures are raised as ``DepsterError`` subclasses, typically
    ``UnsatisfiableError`` or a catalog query error. Any other exception is a
    defect in the resolver and propagates unwrapped.
    """

    def solve_operators(
        self,
        namespaces: Sequence[str],
        csvs: Sequence[ClusterServiceVersion],
        subscriptions: Sequence[Subscription],
    ) -> OperatorSet: ...


class ResolverFactory(Protocol):
    def __call__(
        self, provider: RegistryClientProvider, lister: CatalogSourceLister
    ) -> Resolver: ...


__all__ = ["Resolver", "ResolverFactory"]
