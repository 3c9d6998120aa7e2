"""Utilities for emitting consistent deprecation guidance for legacy rendering paths."""

from __future__ import annotations

import warnings
from typing import Final

_RULES_MIGRATION_REFERENCE: Final[
    str
] = "Declare cell styling with [[rules]] entries (CellFormattingRule) instead."


def warn_legacy_attributes(prefix: str) -> None:
    """Emit a :class:`DeprecationWarning` for the reserved-prefix attribute channel."""

    warnings.warn(
        (
            f"Record fields starting with {prefix!r} carry per-cell HTML attributes "
            "through a legacy side channel that will be removed. "
            f"{_RULES_MIGRATION_REFERENCE}"
        ),
        DeprecationWarning,
        stacklevel=3,
    )


__all__ = ["warn_legacy_attributes"]
