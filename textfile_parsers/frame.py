"""
pandas bridge for textfile-parsers.

Collects FieldSets into a string-typed ``pandas.DataFrame``: one row per
parsed line, one column per field ordinal.  Values stay strings, the same
way pandas itself is used with ``dtype=str, keep_default_na=False``; typed
conversion is left to the FieldSet getters or to the caller.

Rows with fewer fields than the widest row are padded with ``""``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Literal

import pandas as pd

from textfile_parsers.config import ParserConfig
from textfile_parsers.fields import FieldSet
from textfile_parsers.reader import FieldReader, Source

logger = logging.getLogger(__name__)


def fields_to_frame(
    rows: Iterable[FieldSet],
    columns: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Build a DataFrame from already-parsed FieldSets.

    Args:
        rows: FieldSets, one per output row.
        columns: Column names.  Defaults to ``0..n-1``.  When given, the
            frame has exactly these columns: extra fields are dropped and
            missing ones are padded with ``""``.

    Returns:
        DataFrame of strings.
    """
    records = [fs.to_array() for fs in rows]
    width = len(columns) if columns is not None else max((len(r) for r in records), default=0)
    padded = [(r + [""] * (width - len(r)))[:width] for r in records]
    index = list(columns) if columns is not None else range(width)
    return pd.DataFrame(padded, columns=index, dtype=str)


def read_frame(
    source: Source | FieldReader,
    config: ParserConfig | None = None,
    columns: Sequence[str] | None = None,
    on_error: Literal["raise", "skip"] = "raise",
) -> pd.DataFrame:
    """Read every remaining line of *source* into a DataFrame.

    Args:
        source: A path, stream or iterable of lines (read with *config*),
            or an already configured ``FieldReader``.  A reader passed in
            is left open; anything else is closed when done.
        config: Parser configuration; defaults to ``ParserConfig()``.
            Ignored when *source* is a ``FieldReader``.
        columns: Optional column names (see ``fields_to_frame``).
        on_error: ``"raise"`` propagates the first ``MalformedLineError``;
            ``"skip"`` logs a warning and drops the line.

    Returns:
        DataFrame of strings, one row per parsed line.
    """
    if on_error not in ("raise", "skip"):
        raise ValueError(f"on_error must be 'raise' or 'skip', got {on_error!r}")

    if isinstance(source, FieldReader):
        reader, owned = source, False
    else:
        reader, owned = FieldReader.from_config(source, config or ParserConfig()), True

    rows: list[FieldSet] = []
    skipped = 0
    try:
        while True:
            if on_error == "raise":
                fields = reader.read_fields()
                if fields is None:
                    break
                rows.append(fields)
                continue

            result = reader.try_read_fields()
            if result.end_of_input:
                break
            if result.error is not None:
                skipped += 1
                logger.warning("Skipping malformed line: %s", result.error)
                continue
            rows.append(result.fields)
    finally:
        if owned:
            reader.close()

    logger.info("Read %d rows (%d malformed line(s) skipped)", len(rows), skipped)
    return fields_to_frame(rows, columns)
