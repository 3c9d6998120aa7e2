"""Property checks over generated record sets."""
from __future__ import annotations

import pytest

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given, strategies as st  # noqa: E402

from inline_table import CellFormattingRule, RenderOptions, RowSelector, render_table  # noqa: E402
from tests.utils.html import data_rows, rows  # noqa: E402

_TEXT = st.text(alphabet="abcdefghij ", max_size=8)
_RECORDS = st.lists(
    st.fixed_dictionaries(
        {
            "name": _TEXT,
            "qty": st.integers(min_value=-1000, max_value=1000),
            "ok": st.booleans(),
            "note": st.none() | _TEXT,
        }
    ),
    min_size=1,
    max_size=12,
)
_COLUMNS = st.none() | st.lists(st.sampled_from(["name", "qty", "ok", "note", "absent"]), max_size=6)


@given(records=_RECORDS, columns=_COLUMNS)
def test_every_row_has_one_cell_per_resolved_column(records, columns) -> None:
    html = render_table(records, columns=columns)
    parsed = rows(html)
    expected = len([name for name in dict.fromkeys(columns) if name != "absent"]) if columns is not None else 4

    assert len(parsed) == len(records) + 1
    assert {len(cells) for _attrs, cells in parsed} <= {expected}
    if expected:
        assert all(len(cells) == expected for _attrs, cells in parsed)


@given(records=_RECORDS)
def test_parity_rule_marks_only_odd_rows(records) -> None:
    rule = CellFormattingRule(RowSelector.ODD, None, "color", "red")
    parsed = data_rows(render_table(records, cell_formatting=[rule]))

    for index, (_attrs, cells) in enumerate(parsed):
        marked = ["color:red;" in attrs for attrs, _text in cells]
        assert all(marked) if index % 2 else not any(marked)


@given(records=st.lists(st.dictionaries(_TEXT, _TEXT | st.integers(), max_size=4), max_size=6))
def test_rendering_is_pure(records) -> None:
    options = RenderOptions(title="Pure", table_style_override="width:100%")

    assert render_table(records, options) == render_table(records, options)


def test_sample_records_render_with_title(sample_records) -> None:
    html = render_table(sample_records, RenderOptions(title="Net worth"))

    assert len(data_rows(html, title=True)) == 3
    assert all(cells[2][0] == ' align="center"' for _attrs, cells in data_rows(html, title=True))
