"""Load a file-based catalog locator into a querier and a subscription."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, unquote

from depster.config import FILE_BASED_SUBSCRIPTION_NAME_TEMPLATE
from depster.domain.errors import DeclarativeConfigError, FileBasedCatalogQueryError
from depster.domain.model import ObjectMeta, Subscription, SubscriptionSpec

from .loader import load_declarative_config
from .model import convert_to_model
from .querier import ModelQuerier

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from urllib.parse import SplitResult

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileBasedCatalogLoader:
    """Turns ``<dir>?bundle=<package>&channel=<channel>`` into a catalog and a request."""

    def load_manifest(self, src: SplitResult) -> tuple[ModelQuerier, Subscription]:
        root = Path(unquote(src.path))
        log.debug("Loading file-based catalog from %s", root)
        try:
            cfg = load_declarative_config(root)
        except DeclarativeConfigError as exc:
            raise DeclarativeConfigError(f"error forming declarative config: {exc}") from exc

        try:
            model = convert_to_model(cfg)
        except DeclarativeConfigError as exc:
            raise DeclarativeConfigError(f"error converting fbc to model: {exc}") from exc

        subscription = build_subscription(parse_qs(src.query))
        return ModelQuerier(model), subscription


def build_subscription(query: Mapping[str, Sequence[str]]) -> Subscription:
    """Synthesize the subscription requested by a locator's query parameters."""

    package = _first(query, "bundle")
    channel = _first(query, "channel")
    if not package and not channel:
        raise FileBasedCatalogQueryError(
            "must define a bundle and channel when using a file based catalog"
        )
    return Subscription(
        metadata=ObjectMeta(name=FILE_BASED_SUBSCRIPTION_NAME_TEMPLATE.format(package=package)),
        spec=SubscriptionSpec(package=package, channel=channel),
    )


def _first(query: Mapping[str, Sequence[str]], name: str) -> str:
    values = query.get(name)
    return values[0] if values else ""
