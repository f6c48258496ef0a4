"""Resolution settings shared by both catalog modes."""

from __future__ import annotations

from typing import Final

# Namespace the file-based mode resolves into; declarative configs carry none.
FILE_BASED_CATALOG_NAMESPACE: Final[str] = "test"

FILE_BASED_SUBSCRIPTION_NAME_TEMPLATE: Final[str] = "sample-{package}-subscription"
