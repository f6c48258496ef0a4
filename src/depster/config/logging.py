"""Shared logging helpers for depster."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.WARNING, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to WARNING so a plain ``resolve`` run only prints the operator table, and a
    terse format suitable for CLI output. Pass ``force=True`` to reconfigure during
    tests or when ``--verbose`` switches the level after startup.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
