"""Read a declarative config directory tree into typed blobs."""

from __future__ import annotations

import json
from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

import yaml
from pydantic import ValidationError

from depster.domain.errors import DeclarativeConfigError

from .schema import (
    SCHEMA_BUNDLE,
    SCHEMA_CHANNEL,
    SCHEMA_PACKAGE,
    DeclarativeBundle,
    DeclarativeChannel,
    DeclarativeConfig,
    DeclarativePackage,
    Meta,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = getLogger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})
_JSON_SUFFIXES = frozenset({".json"})


def load_declarative_config(root: Path) -> DeclarativeConfig:
    """Load every YAML/JSON file below ``root``; hidden entries are skipped."""

    if not root.is_dir():
        raise DeclarativeConfigError(f'"{root}" is not a directory')

    cfg = DeclarativeConfig()
    for path in _config_files(root):
        log.debug("Reading declarative config file %s", path)
        for blob in _read_blobs(path):
            _add_blob(cfg, blob, path)
    return cfg


def _config_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file() and path.suffix in _YAML_SUFFIXES | _JSON_SUFFIXES:
            yield path


def _read_blobs(path: Path) -> list[object]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DeclarativeConfigError(f'failed to read "{path}": {exc}') from exc
    except UnicodeDecodeError as exc:
        raise DeclarativeConfigError(f'failed to decode "{path}": {exc}') from exc

    try:
        if path.suffix in _JSON_SUFFIXES:
            return list(_json_stream(text))
        return [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DeclarativeConfigError(f'failed to parse "{path}": {exc}') from exc


def _json_stream(text: str) -> Iterator[object]:
    """Yield each top-level value of a stream of concatenated JSON documents."""

    decoder = json.JSONDecoder()
    index = 0
    while True:
        while index < len(text) and text[index].isspace():
            index += 1
        if index >= len(text):
            return
        value, index = decoder.raw_decode(text, index)
        yield value


def _add_blob(cfg: DeclarativeConfig, blob: object, path: Path) -> None:
    if not isinstance(blob, Mapping):
        raise DeclarativeConfigError(f'"{path}": expected an object, got {type(blob).__name__}')
    data = cast(Mapping[str, Any], blob)
    schema = data.get("schema")
    if not isinstance(schema, str) or not schema:
        raise DeclarativeConfigError(f'"{path}": blob is missing a schema')

    try:
        if schema == SCHEMA_PACKAGE:
            cfg.packages.append(DeclarativePackage.model_validate(data))
        elif schema == SCHEMA_CHANNEL:
            cfg.channels.append(DeclarativeChannel.model_validate(data))
        elif schema == SCHEMA_BUNDLE:
            cfg.bundles.append(DeclarativeBundle.model_validate(data))
        else:
            package = data.get("package")
            cfg.others.append(
                Meta(
                    schema=schema,
                    package=package if isinstance(package, str) else "",
                    blob=dict(data),
                )
            )
    except ValidationError as exc:
        raise DeclarativeConfigError(f'"{path}": invalid {schema} blob: {exc}') from exc
