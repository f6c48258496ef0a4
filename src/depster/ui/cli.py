from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from depster.app import resolve_file_based_catalog, resolve_manifests_with_running_catalog
from depster.config import ConfigurationError, configure_logging
from depster.domain.errors import DepsterError
from depster.ui.printing import format_operator_table

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="depster", description="Resolve operator dependencies offline"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve = subparsers.add_parser(
        "resolve",
        help="Resolve manifests against catalogs",
        description=(
            "Resolve Namespace, Subscription, CatalogSource and ClusterServiceVersion "
            "manifests against the running catalogs they declare, or resolve one "
            "package from a file-based catalog directory."
        ),
    )
    resolve.add_argument(
        "-f",
        "--file-based-catalog",
        action="store_true",
        help="Treat the single argument as <dir>?bundle=<package>&channel=<channel>",
    )
    resolve.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    resolve.add_argument(
        "locators",
        nargs="+",
        metavar="LOCATOR",
        help="Manifest path or file:// URL (or a file-based catalog locator with -f)",
    )

    args = parser.parse_args(list(argv))
    if args.file_based_catalog and len(args.locators) != 1:
        raise ValueError("--file-based-catalog takes exactly one locator")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.WARNING)

    try:
        if parsed_args.file_based_catalog:
            operators = resolve_file_based_catalog(parsed_args.locators[0])
        else:
            operators = resolve_manifests_with_running_catalog(parsed_args.locators)
    except (DepsterError, ConfigurationError) as exc:
        log.debug("Resolution failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    print(format_operator_table(operators))  # noqa: T201


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)", file=sys.stderr)  # noqa: T201
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
