"""Render uniformly shaped records as an inline-styled HTML table."""
from __future__ import annotations

from .config import ConfigError, RenderOptions, load_config
from .records import table_to_records
from .render import TableRenderer, render_table, resolve_columns
from .rules import CellFormattingRule, RowSelector

__version__ = "0.1.0"

__all__ = [
    "CellFormattingRule",
    "ConfigError",
    "RenderOptions",
    "RowSelector",
    "TableRenderer",
    "__version__",
    "load_config",
    "render_table",
    "resolve_columns",
    "table_to_records",
]
