"""
Line reading for textfile-parsers.

``FieldReader`` is the line source that feeds a splitter.  It owns the
concerns the splitters deliberately ignore:

- Opening a path (and closing it again), or borrowing a text stream or an
  iterable of lines that the caller keeps ownership of.
- Removing line terminators (``\\n``, ``\\r\\n`` or ``\\r``).
- Skipping comment lines and, optionally, blank lines.
- Counting physical lines so that errors carry a line number.
- Trimming fields and wrapping them in a ``FieldSet``.

Two read styles are offered:

- ``read_fields()`` raises ``MalformedLineError`` for a bad line.
- ``try_read_fields()`` returns a ``LineResult`` carrying either the
  fields or the error, for loops that skip bad lines.

Either way the next read starts from a clean state.

Example::

    with FieldReader("contacts.dat", FixedWidthSplitter()) as reader:
        reader.splitter.set_field_widths(5, 15, 0)
        reader.trim_whitespace = True
        while not reader.end_of_file:
            fields = reader.read_fields()
            if fields is None:
                break
            ...
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO, Union

from textfile_parsers.config import ParserConfig, SourceConfig
from textfile_parsers.culture import INVARIANT_CULTURE, Culture
from textfile_parsers.exceptions import ConfigValidationError, MalformedLineError
from textfile_parsers.fields import FieldSet
from textfile_parsers.splitters import DelimitedSplitter, Splitter, make_splitter
from textfile_parsers.transforms.whitespace import trim_fields

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, TextIO, Iterable[str]]


@dataclass(frozen=True)
class LineResult:
    """Outcome of ``FieldReader.try_read_fields()``.

    Attributes:
        line_number: Line number of the line read (the last line read when
            the source was exhausted).
        fields: The parsed fields, or ``None`` on error / end of input.
        error: The structural error, or ``None``.
    """

    line_number: int
    fields: FieldSet | None = None
    error: MalformedLineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def end_of_input(self) -> bool:
        return self.fields is None and self.error is None


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


class FieldReader:
    """Reads lines from a text source and splits them into ``FieldSet``s.

    Args:
        source: A filesystem path (opened here and closed by ``close()``),
            a text stream, or any iterable of lines.  Streams and iterables
            are left open on ``close()``.
        splitter: The splitter to use; defaults to a comma
            ``DelimitedSplitter``.
        culture: Culture handed to every FieldSet.
        trim_whitespace: Strip whitespace around every field.
        comment_tokens: Lines starting with any of these are skipped.
        ignore_blank_lines: Skip empty and whitespace-only lines.
        encoding: Encoding used when *source* is a path.

    Raises:
        FileNotFoundError: If *source* is a path that does not exist.
        IsADirectoryError: If *source* is a path to a directory.

    Not thread-safe.  Configuration changes take effect on the next read.
    """

    def __init__(
        self,
        source: Source,
        splitter: Splitter | None = None,
        *,
        culture: Culture | None = None,
        trim_whitespace: bool = False,
        comment_tokens: Iterable[str] = (),
        ignore_blank_lines: bool = False,
        encoding: str = "utf-8-sig",
    ) -> None:
        self.splitter: Splitter = splitter if splitter is not None else DelimitedSplitter()
        self.culture = culture if culture is not None else INVARIANT_CULTURE
        self.trim_whitespace = trim_whitespace
        self.ignore_blank_lines = ignore_blank_lines
        self._comment_tokens: tuple[str, ...] = ()
        self.set_comment_tokens(*comment_tokens)

        self.line_number = 0
        self._pending: str | None = None
        self._exhausted = False
        self._closed = False

        if isinstance(source, (str, os.PathLike)):
            path = Path(source)
            self._stream: TextIO | None = open(path, "r", encoding=encoding, newline="")
            self._owns_stream = True
            self._lines: Iterator[str] = iter(self._stream)
            logger.info("Opened %s for reading (encoding=%s)", path, encoding)
        else:
            self._stream = None
            self._owns_stream = False
            self._lines = iter(source)

    @classmethod
    def from_config(cls, source: Source, config: ParserConfig) -> FieldReader:
        """Build a reader whose splitter, culture and source options come from *config*."""
        return cls(
            source,
            make_splitter(config.layout),
            culture=config.culture,
            trim_whitespace=config.trim_whitespace,
            comment_tokens=config.source.comment_tokens,
            ignore_blank_lines=config.source.ignore_blank_lines,
            encoding=config.source.encoding,
        )

    def __repr__(self) -> str:
        return f"FieldReader(splitter={self.splitter!r}, line_number={self.line_number})"

    # -- Context manager ----------------------------------------------------

    def __enter__(self) -> FieldReader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the source.  Streams passed in by the caller stay open."""
        if self._closed:
            return
        self._closed = True
        if self._owns_stream and self._stream is not None:
            self._stream.close()

    @property
    def closed(self) -> bool:
        return self._closed

    # -- Configuration ------------------------------------------------------

    def get_comment_tokens(self) -> list[str]:
        """Return a copy of the comment tokens."""
        return list(self._comment_tokens)

    def set_comment_tokens(self, *tokens: str) -> None:
        """Replace the comment tokens; call with no arguments to clear them.

        Raises:
            ConfigValidationError: If a token is empty.  The previous
                tokens are kept.
        """
        try:
            validated = SourceConfig(comment_tokens=tokens).comment_tokens
        except ValueError as exc:
            raise ConfigValidationError(f"Invalid comment tokens {list(tokens)}: {exc}") from exc
        self._comment_tokens = validated

    # -- Line source --------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on a closed FieldReader")

    def _next_physical(self) -> str | None:
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line
        if self._exhausted:
            return None
        try:
            return _strip_terminator(next(self._lines))
        except StopIteration:
            self._exhausted = True
            return None

    @property
    def end_of_file(self) -> bool:
        """True once the source has no more physical lines.

        Comment and blank lines still count as lines here, so ``read_line()``
        may return ``None`` even when this was False.
        """
        self._check_open()
        if self._pending is None:
            self._pending = self._next_physical()
        return self._pending is None

    def read_line(self) -> str | None:
        """Return the next line to parse, or ``None`` at end of input.

        Comment lines (and blank lines, if ignored) are consumed and
        counted but not returned.
        """
        self._check_open()
        while True:
            line = self._next_physical()
            if line is None:
                return None
            self.line_number += 1
            if self._comment_tokens and line.startswith(self._comment_tokens):
                logger.debug("Skipping comment line %d", self.line_number)
                continue
            if self.ignore_blank_lines and not line.strip():
                logger.debug("Skipping blank line %d", self.line_number)
                continue
            return line

    def read_to_end(self) -> str:
        """Return the rest of the source as raw text, lines joined by ``\\n``."""
        self._check_open()
        lines: list[str] = []
        while (line := self._next_physical()) is not None:
            self.line_number += 1
            lines.append(line)
        return "\n".join(lines)

    # -- Field reading ------------------------------------------------------

    def _to_field_set(self, line: str) -> FieldSet:
        fields = self.splitter.split(line, self.line_number)
        if self.trim_whitespace:
            fields = trim_fields(fields)
        return FieldSet(fields, self.culture)

    def read_fields(self) -> FieldSet | None:
        """Read the next line and split it.

        Returns:
            The line's fields, or ``None`` at end of input.

        Raises:
            MalformedLineError: If the line does not fit the splitter's layout.
        """
        line = self.read_line()
        if line is None:
            return None
        return self._to_field_set(line)

    def try_read_fields(self) -> LineResult:
        """Like ``read_fields()``, but return structural errors instead of raising."""
        line = self.read_line()
        if line is None:
            return LineResult(self.line_number)
        try:
            return LineResult(self.line_number, fields=self._to_field_set(line))
        except MalformedLineError as exc:
            return LineResult(self.line_number, error=exc)
