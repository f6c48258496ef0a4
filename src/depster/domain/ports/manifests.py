"""Ports for loading raw manifests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from urllib.parse import SplitResult

    from depster.domain.model import Unstructured


@runtime_checkable
class ManifestLoader(Protocol):
    """Fetch exactly one generic manifest from a parsed locator."""

    def load_manifest(self, src: SplitResult) -> Unstructured: ...


__all__ = ["ManifestLoader"]
