"""Error taxonomy for manifest ingestion, catalog access and resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model.catalog import CatalogKey


class DepsterError(RuntimeError):
    """Base class for every failure that aborts a resolution run."""


# Input-shape errors


class ManifestError(DepsterError):
    """Raised when a manifest cannot be loaded or classified."""


class NoManifestLoaderError(ManifestError):
    def __init__(self, scheme: str) -> None:
        super().__init__(f'no manifest loader for scheme "{scheme}"')
        self.scheme = scheme


class ManifestLoadError(ManifestError):
    """Raised when the resource behind a locator cannot be opened or read."""


class ManifestDecodeError(ManifestError):
    """Raised when a manifest payload is neither valid YAML nor JSON."""


class UnrecognizedManifestError(ManifestError):
    def __init__(self, gvk: str) -> None:
        super().__init__(f'gvk "{gvk}" not recognized')
        self.gvk = gvk


class ManifestConversionError(ManifestError):
    """Raised when a recognized manifest does not fit its typed shape."""


class UnsupportedCatalogSourceError(ManifestError):
    def __init__(self, source_type: str) -> None:
        super().__init__(f'unsupported catalog source type: "{source_type}"')
        self.source_type = source_type


# Configuration errors


class FileBasedCatalogQueryError(DepsterError):
    """Raised when a file-based catalog locator does not name a package or channel."""


class DeclarativeConfigError(DepsterError):
    """Raised when a declarative config tree cannot be loaded or modelled."""


# Catalog errors


class CatalogError(DepsterError):
    """Base class for catalog registry and client failures."""


class DuplicateCatalogError(CatalogError):
    def __init__(self, key: CatalogKey) -> None:
        super().__init__(f"duplicate catalog source: {key}")
        self.key = key


class CatalogConnectionError(CatalogError):
    """Raised when a live catalog address cannot be reached."""


class CatalogQueryError(CatalogError):
    """Raised when a catalog rejects or fails a query."""


class CatalogLookupError(CatalogQueryError):
    """Raised when a queried package, channel or bundle does not exist."""


# Resolution errors


class UnsatisfiableError(DepsterError):
    """Raised by a resolver when no consistent operator set exists."""


class ResolutionError(DepsterError):
    """Raised when a resolution run fails; wraps the resolver's own error."""
