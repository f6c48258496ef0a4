"""Tabular rendering of resolved operator sets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from depster.domain.model import Operator

COLUMNS: Final[tuple[str, ...]] = ("NAME", "VERSION", "PACKAGE", "CHANNEL", "CATALOG", "REPLACES")
INSTALLED: Final[str] = "installed"
EMPTY: Final[str] = "-"


def operator_row(operator: Operator) -> tuple[str, ...]:
    if operator.source is None:
        catalog = INSTALLED
    elif operator.source.namespace or operator.source.name:
        catalog = str(operator.source)
    else:
        catalog = EMPTY
    cells = (
        operator.name,
        operator.version,
        operator.package_name,
        operator.channel_name,
        catalog,
        operator.replaces,
    )
    return tuple(cell or EMPTY for cell in cells)


def format_operator_table(operators: Mapping[str, Operator]) -> str:
    """Render ``operators`` sorted by name, one column per field, space aligned."""

    rows = [COLUMNS, *(operator_row(operators[name]) for name in sorted(operators))]
    widths = [max(len(row[index]) for row in rows) for index in range(len(COLUMNS))]
    lines = [
        "   ".join(cell.ljust(width) for cell, width in zip(row, widths, strict=True)).rstrip()
        for row in rows
    ]
    return "\n".join(lines)
