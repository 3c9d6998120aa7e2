"""Render records into a single inline-styled HTML table."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

import pyarrow as pa

from ._deprecation import warn_legacy_attributes
from .config import RenderOptions
from .records import Record, iter_records
from .rules import CellFormattingRule, parse_rules, resolve_style

logger = logging.getLogger(__name__)

LEGACY_ATTRIBUTE_PREFIX = "HTMLATTR_"
LEGACY_ATTRIBUTE_SEPARATOR = "_"

_LegacyAttribute = tuple[str, "str | None", object]


def is_reserved_field(name: str) -> bool:
    return str(name).startswith(LEGACY_ATTRIBUTE_PREFIX)


def resolve_columns(first: Record, requested: Sequence[str] | None = None) -> list[str]:
    """Return the display columns for a table whose first record is ``first``.

    Requested names keep their requested order and are dropped when the first
    record lacks them. Reserved-prefix fields are never display columns.
    """

    names = list(first.keys())
    if requested is not None:
        present = set(names)
        names = [name for name in dict.fromkeys(requested) if name in present]
    return [name for name in names if not is_reserved_field(name)]


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


class TableRenderer:
    """Incrementally build one ``<table>`` fragment.

    Nothing is written for the title or header until the first record arrives
    (or :meth:`finish` is called on an empty stream), because the column list
    and the title's column span both depend on that first record.
    """

    def __init__(
        self,
        options: RenderOptions | None = None,
        *,
        columns: Sequence[str] | None = None,
        cell_formatting: Iterable[Any] | None = None,
    ) -> None:
        self.options = options or RenderOptions()
        self._requested = columns if columns is not None else self.options.columns
        rules = cell_formatting if cell_formatting is not None else self.options.cell_formatting
        self._rules: tuple[CellFormattingRule, ...] = parse_rules(rules)
        self._columns: list[str] | None = None
        self._parts: list[str] = []
        self._rows = 0
        self._legacy_warned = False
        self._result: str | None = None

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._columns or ())

    @property
    def row_count(self) -> int:
        return self._rows

    def add(self, record: Record) -> None:
        if self._result is not None:
            raise RuntimeError("TableRenderer.finish() was already called")
        if self._columns is None:
            self._columns = resolve_columns(record, self._requested)
            logger.debug("Resolved columns %s from first record", self._columns)
            self._open(max(len(self._columns), 1))
            self._emit_header()
        self._emit_row(record)

    def finish(self) -> str:
        if self._result is not None:
            return self._result
        if self._columns is None:
            self._open(1)
            self._emit_empty()
        self._parts.append("</table>")
        self._result = "".join(self._parts)
        self._parts = []
        logger.debug("Rendered table with %d row(s)", self._rows)
        return self._result

    def _open(self, span: int) -> None:
        options = self.options
        self._parts.append(f'<table style="{options.table_style}">')
        if options.title is None:
            return
        self._parts.append(
            f'<tr><td colspan="{span}" style="background-color:{options.title_background};'
            f'color:{options.title_foreground};font-weight:bold;text-align:center">'
            f"{options.title}</td></tr>"
        )

    def _emit_header(self) -> None:
        options = self.options
        style = (
            f"background-color:{options.header_background};color:{options.header_foreground};"
            "text-align:center;font-weight:bold"
        )
        cells = "".join(f'<td style="{style}">{name}</td>' for name in self._columns or ())
        self._parts.append(f"<tr>{cells}</tr>")

    def _emit_empty(self) -> None:
        self._parts.append(
            f'<tr><td style="text-align:center;color:{self.options.empty_foreground}">'
            f"{self.options.empty_message}</td></tr>"
        )

    def _emit_row(self, record: Record) -> None:
        index = self._rows
        self._rows += 1
        background = self.options.row_background_a if index % 2 == 0 else self.options.row_background_b
        legacy = self._legacy_attributes(record) if self.options.legacy_attributes else []
        cells = "".join(self._cell(record, index, column, legacy) for column in self._columns or ())
        self._parts.append(f'<tr style="background-color:{background}">{cells}</tr>')

    def _cell(self, record: Record, index: int, column: str, legacy: Sequence[_LegacyAttribute]) -> str:
        value = record.get(column)
        attributes: list[str] = []
        styles: list[str] = []
        aligned = False
        for name, target, attr_value in legacy:
            if target is not None and target != column:
                continue
            lowered = name.lower()
            # merged into the single style attribute
            if lowered == "style":
                styles.append(_cell_text(attr_value).strip().rstrip(";"))
                aligned = aligned or "text-align" in styles[-1].lower()
                continue
            attributes.append(f' {name}="{_cell_text(attr_value)}"')
            aligned = aligned or lowered == "align"

        declarations = resolve_style(self._rules, index, column)
        if declarations:
            styles.append(declarations)
        aligned = aligned or any(
            rule.property.strip().lower() == "text-align" and rule.applies_to(index, column) for rule in self._rules
        )

        if not aligned and not isinstance(value, str):
            attributes.append(' align="center"')
        style = ";".join(part for part in styles if part)
        if style:
            attributes.append(f' style="{style}"')
        return f"<td{''.join(attributes)}>{_cell_text(value)}</td>"

    def _legacy_attributes(self, record: Record) -> list[_LegacyAttribute]:
        found: list[_LegacyAttribute] = []
        for field_name, value in record.items():
            if not is_reserved_field(field_name):
                continue
            rest = field_name[len(LEGACY_ATTRIBUTE_PREFIX):]
            name, separator, target = rest.partition(LEGACY_ATTRIBUTE_SEPARATOR)
            if not name:
                continue
            found.append((name, target if separator else None, value))
        if found and not self._legacy_warned:
            self._legacy_warned = True
            warn_legacy_attributes(LEGACY_ATTRIBUTE_PREFIX)
        return found


def render_table(
    records: pa.Table | Iterable[Record],
    options: RenderOptions | None = None,
    columns: Sequence[str] | None = None,
    cell_formatting: Iterable[Any] | None = None,
) -> str:
    """Render ``records`` as one HTML ``<table>`` string.

    ``columns`` and ``cell_formatting`` take precedence over the matching
    fields of ``options``. Records are consumed in a single pass.
    """

    renderer = TableRenderer(options, columns=columns, cell_formatting=cell_formatting)
    for record in iter_records(records):
        renderer.add(record)
    return renderer.finish()


__all__ = [
    "LEGACY_ATTRIBUTE_PREFIX",
    "LEGACY_ATTRIBUTE_SEPARATOR",
    "TableRenderer",
    "is_reserved_field",
    "render_table",
    "resolve_columns",
]
