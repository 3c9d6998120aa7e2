"""Declarative per-cell formatting rules."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from .errors import ConfigError

ANY_COLUMN = "*"


class RowSelector(str, Enum):
    ANY = "any"
    ODD = "odd"
    EVEN = "even"

    @classmethod
    def parse(cls, value: "RowSelector | str", *, context: str = "row") -> "RowSelector":
        if isinstance(value, RowSelector):
            return value
        text = str(value).strip().lower()
        # oddRow / evenRow spellings are accepted alongside the short names
        if text.endswith("row"):
            text = text[: -len("row")].rstrip("_-")
        try:
            return cls(text)
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ConfigError(f"{context} must be one of {allowed}; got {value!r}") from exc

    def matches(self, index: int) -> bool:
        if self is RowSelector.ANY:
            return True
        if self is RowSelector.ODD:
            return index % 2 == 1
        return index % 2 == 0


@dataclass(frozen=True, slots=True)
class CellFormattingRule:
    """Append ``property:value;`` to the style of every matching cell.

    ``column`` of ``None`` matches every column; ``"*"`` is only read as
    "any column" by :func:`parse_rule`. Rules never override each
    other: all matches are emitted in declaration order.
    """

    row: RowSelector
    column: str | None
    property: str
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "row", RowSelector.parse(self.row))
        if not str(self.property).strip():
            raise ConfigError("rule property must be a non-empty CSS property name")

    def applies_to(self, index: int, column: str) -> bool:
        if self.column is not None and self.column != column:
            return False
        return self.row.matches(index)

    def declaration(self) -> str:
        return f"{self.property}:{self.value};"


def parse_rule(data: Mapping[str, Any] | Sequence[Any], *, context: str = "rule") -> CellFormattingRule:
    """Build a rule from a TOML table or a ``(row, column, property, value)`` tuple."""

    if isinstance(data, CellFormattingRule):
        return data
    if isinstance(data, Mapping):
        unknown = set(data) - {"row", "column", "property", "value"}
        if unknown:
            raise ConfigError(f"{context} has unknown keys: {', '.join(sorted(unknown))}")
        missing = [key for key in ("property", "value") if key not in data]
        if missing:
            raise ConfigError(f"{context} is missing {', '.join(missing)}")
        row = data.get("row", RowSelector.ANY.value)
        column = data.get("column")
        prop = data["property"]
        value = data["value"]
    elif isinstance(data, Sequence) and not isinstance(data, str) and len(data) == 4:
        row, column, prop, value = data
    else:
        raise ConfigError(f"{context} must be a table or a (row, column, property, value) tuple")

    if column == ANY_COLUMN:
        column = None
    if column is not None and not isinstance(column, str):
        raise ConfigError(f"{context}.column must be a string")
    return CellFormattingRule(
        row=RowSelector.parse(row, context=f"{context}.row"),
        column=column,
        property=str(prop),
        value=str(value),
    )


def parse_rules(items: Iterable[Any] | None, *, context: str = "rules") -> tuple[CellFormattingRule, ...]:
    if items is None:
        return ()
    if isinstance(items, (str, Mapping)):
        raise ConfigError(f"{context} must be an array of rule tables")
    return tuple(parse_rule(item, context=f"{context}[{index}]") for index, item in enumerate(items))


def resolve_style(rules: Sequence[CellFormattingRule], index: int, column: str) -> str:
    """Concatenate the declarations of every rule matching ``(index, column)``."""

    return "".join(rule.declaration() for rule in rules if rule.applies_to(index, column))


__all__ = [
    "ANY_COLUMN",
    "CellFormattingRule",
    "RowSelector",
    "parse_rule",
    "parse_rules",
    "resolve_style",
]
