"""Configuration loading for inline_table."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Sequence

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore

from .errors import ConfigError
from .rules import CellFormattingRule, parse_rules

DEFAULT_TABLE_STYLE = "font-family:Arial, sans-serif;font-size:13px;border-collapse:collapse"

_COLOR_FIELDS = (
    "title_background",
    "title_foreground",
    "header_background",
    "header_foreground",
    "row_background_a",
    "row_background_b",
    "empty_foreground",
)


@dataclass(slots=True)
class RenderOptions:
    """Style and column configuration for a single rendered table."""

    title: str | None = None
    columns: Sequence[str] | None = None
    empty_message: str = "No records"
    table_style_default: str = DEFAULT_TABLE_STYLE
    table_style_override: str | None = None
    title_background: str = "#1f4e79"
    title_foreground: str = "#ffffff"
    header_background: str = "#d9e1f2"
    header_foreground: str = "#1f2937"
    row_background_a: str = "#ffffff"
    row_background_b: str = "#f2f2f2"
    empty_foreground: str = "#2563eb"
    cell_formatting: Sequence[CellFormattingRule] = field(default_factory=tuple)
    legacy_attributes: bool = False

    @property
    def table_style(self) -> str:
        """Default table style with the override appended, never replaced."""

        parts = [self.table_style_default, self.table_style_override]
        return ";".join(part.strip().rstrip(";") for part in parts if part and part.strip())


def _load_toml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        try:
            return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path} is not valid TOML: {exc}") from exc


def load_config(path: str | Path | None = None) -> RenderOptions:
    """Load render options from ``path`` if provided, otherwise defaults.

    Parameters
    ----------
    path:
        Path to a ``table.toml`` file. When ``None`` or missing the default
        options are returned.
    """

    options = RenderOptions()
    if path is None:
        return options

    data = _load_toml(Path(path))
    return parse_options(data, base=options)


def parse_options(data: Mapping[str, Any], base: RenderOptions | None = None) -> RenderOptions:
    """Apply a TOML-shaped mapping (``[table]``, ``[table.colors]``, ``[[rules]]``) to ``base``."""

    options = base or RenderOptions()
    table_data = data.get("table")
    if table_data is not None:
        if not isinstance(table_data, Mapping):
            raise ConfigError("table must be a TOML table")
        options = _parse_table(table_data, base=options)
    if "rules" in data:
        options = replace(options, cell_formatting=parse_rules(data["rules"]))
    return options


def _parse_table(data: Mapping[str, Any], base: RenderOptions) -> RenderOptions:
    overrides: MutableMapping[str, Any] = {}
    if "title" in data:
        overrides["title"] = _optional_str(data["title"], "table.title")
    if "columns" in data:
        overrides["columns"] = _parse_columns(data["columns"])
    if "empty_message" in data:
        overrides["empty_message"] = _require_str(data["empty_message"], "table.empty_message")
    if "style_default" in data:
        overrides["table_style_default"] = _require_str(data["style_default"], "table.style_default")
    if "style_override" in data:
        overrides["table_style_override"] = _optional_str(data["style_override"], "table.style_override")
    if "legacy_attributes" in data:
        if not isinstance(data["legacy_attributes"], bool):
            raise ConfigError("table.legacy_attributes must be true or false")
        overrides["legacy_attributes"] = data["legacy_attributes"]
    colors = data.get("colors")
    if colors is not None:
        if not isinstance(colors, Mapping):
            raise ConfigError("table.colors must be a TOML table")
        unknown = set(colors) - set(_COLOR_FIELDS)
        if unknown:
            raise ConfigError(f"table.colors has unknown keys: {', '.join(sorted(unknown))}")
        for name, value in colors.items():
            overrides[name] = _require_str(value, f"table.colors.{name}")
    if not overrides:
        return base
    return replace(base, **overrides)


def _parse_columns(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigError("table.columns must be an array of field names")
    return [_require_str(item, f"table.columns[{index}]") for index, item in enumerate(value)]


def _require_str(value: Any, context: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{context} must be a string")
    return value


def _optional_str(value: Any, context: str) -> str | None:
    if value is None:
        return None
    return _require_str(value, context)


__all__ = [
    "ConfigError",
    "DEFAULT_TABLE_STYLE",
    "RenderOptions",
    "load_config",
    "parse_options",
]
