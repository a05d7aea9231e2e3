"""
textfile-parsers: split structured text lines into typed fields.

Public API surface:

- ``open(source, config=None, **overrides)`` -- **recommended entry
  point**.  Returns a ``FieldReader`` over a path, a text stream or an
  iterable of lines, configured from a ``ParserConfig`` (or a YAML config
  path) plus keyword overrides.

- ``FieldReader`` -- reads lines, skips comments/blank lines, counts line
  numbers, and yields one ``FieldSet`` per line.

- ``FieldSet`` -- immutable fields of one line with typed getters
  (``get_int32``, ``get_double``, ``get_datetime``, ...).

- ``FixedWidthSplitter`` / ``DelimitedSplitter`` and the pure functions
  ``split_fixed_width`` / ``split_delimited`` for callers that manage
  their own lines.

- ``read_frame(...)`` -- collect every line into a pandas DataFrame.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from textfile_parsers.config import (
    DelimitedLayout,
    FixedWidthLayout,
    ParserConfig,
    SourceConfig,
    load_config,
    save_config,
)
from textfile_parsers.culture import INVARIANT_CULTURE, Culture
from textfile_parsers.exceptions import (
    ConfigValidationError,
    ExpectedDelimiterMissingError,
    FieldFormatError,
    FieldIndexError,
    FieldOverflowError,
    LineTooShortError,
    MalformedLineError,
    TextFileParsersError,
    UnexpectedQuoteError,
    UnterminatedQuoteError,
)
from textfile_parsers.fields import FieldSet
from textfile_parsers.frame import fields_to_frame, read_frame
from textfile_parsers.reader import FieldReader, LineResult, Source
from textfile_parsers.splitters import (
    DelimitedSplitter,
    FixedWidthSplitter,
    make_splitter,
    split_delimited,
    split_fixed_width,
)
from textfile_parsers.transforms.whitespace import trim_fields

__all__ = [
    "open",
    "read_frame",
    "fields_to_frame",
    "FieldReader",
    "FieldSet",
    "LineResult",
    "FixedWidthSplitter",
    "DelimitedSplitter",
    "make_splitter",
    "split_fixed_width",
    "split_delimited",
    "trim_fields",
    "ParserConfig",
    "FixedWidthLayout",
    "DelimitedLayout",
    "SourceConfig",
    "Culture",
    "INVARIANT_CULTURE",
    "load_config",
    "save_config",
    "TextFileParsersError",
    "MalformedLineError",
    "LineTooShortError",
    "UnexpectedQuoteError",
    "UnterminatedQuoteError",
    "ExpectedDelimiterMissingError",
    "FieldIndexError",
    "FieldFormatError",
    "FieldOverflowError",
    "ConfigValidationError",
]

logger = logging.getLogger(__name__)


def open(
    source: Source,
    config: ParserConfig | str | Path | None = None,
    /,
    **overrides: Any,
) -> FieldReader:
    """Open a field reader over *source*.

    Args:
        source: A filesystem path, a text stream, or an iterable of lines.
        config: A ``ParserConfig``, a path to a YAML config file, or
            ``None`` for the defaults (comma-delimited, invariant culture).
        **overrides: Top-level ``ParserConfig`` fields to replace, e.g.
            ``layout=FixedWidthLayout(field_widths=(5, 15, 0))`` or
            ``trim_whitespace=True``.  Validated like the config itself.
            ``source`` and ``config`` are positional-only, so
            ``source=SourceConfig(...)`` is an override like any other.

    Returns:
        A ``FieldReader``; use it as a context manager so paths get closed.

    Examples::

        with textfile_parsers.open("contacts.csv", "contacts.yaml") as reader:
            while (fields := reader.read_fields()) is not None:
                print(fields.get_string(1), fields.get_int32(0))

        reader = textfile_parsers.open(
            io.StringIO("a  bb  ccc"),
            layout=DelimitedLayout(delimiters=" ", squeeze_delimiters=True),
        )

    Raises:
        FileNotFoundError: If *source* or the config path does not exist.
        IsADirectoryError: If *source* is a directory.
        pydantic.ValidationError: If the config or an override is invalid.
    """
    if config is None:
        config = ParserConfig()
    elif not isinstance(config, ParserConfig):
        config = load_config(config)

    if overrides:
        data = config.model_dump()
        data.update(overrides)
        config = ParserConfig.model_validate(data)
        logger.debug("open() -- applied overrides %s", sorted(overrides))

    return FieldReader.from_config(source, config)
