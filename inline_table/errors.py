"""Exception types raised by inline_table."""
from __future__ import annotations


class ConfigError(ValueError):
    """Raised when render options or formatting rules are invalid."""


__all__ = ["ConfigError"]
