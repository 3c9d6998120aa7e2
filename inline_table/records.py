"""Normalise caller data into ordered records."""
from __future__ import annotations

from typing import Iterable, Iterator, Mapping

import pyarrow as pa

Record = Mapping[str, object]


def table_to_records(table: pa.Table) -> list[dict[str, object]]:
    """Convert ``table`` into dicts keyed in column order.

    Values keep their native Python types so dates and decimals are still
    recognised as non-textual when cells are aligned.
    """

    return [dict(row) for row in table.to_pylist()]


def iter_records(source: pa.Table | Iterable[Record]) -> Iterator[Record]:
    if isinstance(source, pa.RecordBatch):
        source = pa.Table.from_batches([source])
    if isinstance(source, pa.Table):
        for batch in source.to_batches():
            yield from batch.to_pylist()
        return
    for record in source:
        if not isinstance(record, Mapping):
            raise TypeError(f"records must be mappings of field name to value, got {type(record).__name__}")
        yield record


__all__ = ["Record", "iter_records", "table_to_records"]
