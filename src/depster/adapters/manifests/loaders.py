"""Manifest loaders keyed by locator scheme."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from depster.domain.errors import ManifestDecodeError, ManifestLoadError, NoManifestLoaderError
from depster.domain.model import Unstructured

from .decoding import decode_yaml_or_json

if TYPE_CHECKING:
    from collections.abc import Mapping
    from urllib.parse import SplitResult

    from depster.domain.ports import ManifestLoader

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileLoader:
    """Load a manifest addressed by a ``file://`` locator."""

    encoding: str = "utf-8"

    def load_manifest(self, src: SplitResult) -> Unstructured:
        path = Path(unquote(src.path))
        log.debug("Loading manifest from %s", path)
        try:
            with path.open(encoding=self.encoding) as handle:
                text = handle.read()
        except OSError as exc:
            raise ManifestLoadError(f'failed to open file "{path}": {exc}') from exc
        except UnicodeDecodeError as exc:
            raise ManifestDecodeError(f'failed to decode file "{path}": {exc}') from exc

        try:
            content = decode_yaml_or_json(text)
        except ManifestDecodeError as exc:
            raise ManifestDecodeError(f'failed to decode file "{path}": {exc}') from exc
        return Unstructured(content)


@dataclass(frozen=True, slots=True)
class SchemelessLoader:
    """Treat a bare locator as a path relative to the working directory."""

    delegate: FileLoader = FileLoader()

    def load_manifest(self, src: SplitResult) -> Unstructured:
        return self.delegate.load_manifest(urlsplit(canonical_file_locator(src.geturl())))


def canonical_file_locator(locator: str) -> str:
    """Return ``file://<absolute path>`` for a schemeless path locator."""

    try:
        absolute = Path(locator).absolute()
    except OSError as exc:
        raise ManifestLoadError(
            f"could not interpret schemeless argument as file path: {exc}"
        ) from exc
    return urlunsplit(("file", "", quote(absolute.as_posix()), "", ""))


def default_manifest_loaders() -> dict[str, ManifestLoader]:
    return {"": SchemelessLoader(), "file": FileLoader()}


def loader_for(src: SplitResult, loaders: Mapping[str, ManifestLoader]) -> ManifestLoader:
    loader = loaders.get(src.scheme)
    if loader is None:
        raise NoManifestLoaderError(src.scheme)
    return loader


def load_manifest(
    locator: str, *, loaders: Mapping[str, ManifestLoader] | None = None
) -> Unstructured:
    """Parse ``locator``, pick the loader for its scheme and load one manifest."""

    src = urlsplit(locator)
    loader = loader_for(src, loaders if loaders is not None else default_manifest_loaders())
    try:
        return loader.load_manifest(src)
    except (ManifestLoadError, ManifestDecodeError) as exc:
        raise type(exc)(f'error loading manifest from "{locator}": {exc}') from exc
