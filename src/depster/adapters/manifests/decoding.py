"""Decode manifest bytes framed as either YAML or JSON."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, cast

import yaml

from depster.domain.errors import ManifestDecodeError


def decode_yaml_or_json(text: str) -> dict[str, Any]:
    """Return the first document in ``text`` as a mapping.

    A leading ``{`` selects JSON; anything else is read as YAML, which also
    accepts most JSON.
    """

    stripped = text.lstrip()
    if stripped.startswith("{"):
        try:
            document, _ = json.JSONDecoder().raw_decode(stripped)
        except json.JSONDecodeError as exc:
            raise ManifestDecodeError(f"invalid JSON: {exc}") from exc
    else:
        try:
            document = next(
                (doc for doc in yaml.safe_load_all(stripped) if doc is not None), None
            )
        except yaml.YAMLError as exc:
            raise ManifestDecodeError(f"invalid YAML: {exc}") from exc

    if document is None:
        raise ManifestDecodeError("no document found")
    if not isinstance(document, Mapping):
        raise ManifestDecodeError(f"expected an object, got {type(document).__name__}")
    return dict(cast(Mapping[str, Any], document))
