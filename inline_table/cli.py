"""Command line interface for inline_table."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Sequence

import pyarrow as pa
import pyarrow.csv as pa_csv
import pyarrow.parquet as pq

from .config import ConfigError, load_config
from .records import Record
from .render import render_table

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {
    ".json": "json",
    ".csv": "csv",
    ".parquet": "parquet",
    ".pq": "parquet",
}


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="inline-table", description="Render records as an inline-styled HTML table")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render a JSON, CSV or Parquet file to HTML")
    render_parser.add_argument("input", help="Path to the records file")
    render_parser.add_argument(
        "--format",
        choices=("auto", "json", "csv", "parquet"),
        default="auto",
        help="Input format (default: from the file suffix)",
    )
    render_parser.add_argument("--config", default=None, help="Path to a TOML file with [table] options and [[rules]]")
    render_parser.add_argument("--title", default=None, help="Override the table title")
    render_parser.add_argument("--columns", default=None, help="Comma separated column order")
    render_parser.add_argument("--output", "-o", default=None, help="Write HTML here instead of stdout")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command == "render":
        return _cmd_render(args)

    parser.print_help()
    return 1


def _cmd_render(args: argparse.Namespace) -> int:
    try:
        options = load_config(args.config)
    except ConfigError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc
    if args.title is not None:
        options = replace(options, title=args.title)
    if args.columns is not None:
        options = replace(options, columns=_parse_columns(args.columns))

    path = Path(args.input)
    fmt = _detect_format(path, args.format)
    logger.info("Loading %s records from %s", fmt, path)
    records = _load_records(path, fmt)

    html = render_table(records, options)
    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(html + "\n")
    return 0


def _parse_columns(value: str) -> list[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


def _detect_format(path: Path, requested: str) -> str:
    if requested != "auto":
        return requested
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise SystemExit(f"Cannot infer input format from {path.name}; pass --format")
    return fmt


def _load_records(path: Path, fmt: str) -> pa.Table | list[Record]:
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    if fmt in ("csv", "parquet"):
        try:
            if fmt == "csv":
                return pa_csv.read_csv(str(path))
            return pq.read_table(str(path))
        except (pa.ArrowInvalid, OSError) as exc:
            raise SystemExit(f"Cannot read {path}: {exc}") from exc
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, Mapping) for item in data):
        raise SystemExit(f"{path} must contain a JSON array of objects")
    return data


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
