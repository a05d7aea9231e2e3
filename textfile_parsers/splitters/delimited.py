"""
Delimited splitter for textfile-parsers.

Walks a line once, left to right, with no lookahead, classifying every
character as delimiter, quote or ordinary text.  A four-state automaton
decides what each character means:

- IN_DELIMITER: no field text seen since the last delimiter.
- IN_TEXT_DATA: inside an unquoted field.
- IN_QUOTED_TEXT: inside quotes; delimiters are literal text.
- IN_CLOSING_QUOTES: just saw the closing quote; a delimiter (or another
  quoted run) must follow.

Transition table (quote is ``"``; with quoting disabled it is ordinary text)::

    state              delimiter          quote                other
    IN_DELIMITER       emit (*)           -> IN_QUOTED_TEXT    append, -> IN_TEXT_DATA
    IN_TEXT_DATA       emit, -> IN_DELIM  UnexpectedQuote      append
    IN_QUOTED_TEXT     append             -> IN_CLOSING_QUOTES append
    IN_CLOSING_QUOTES  emit, -> IN_DELIM  emit, -> IN_QUOTED   ExpectedDelimiterMissing

    (*) nothing is emitted when squeezing delimiters.

At end of line the pending field is emitted, except inside quotes, which
raises ``UnterminatedQuoteError``.  Every line yields at least one field.

Quotes are not escaped by doubling: ``"a""b"`` is two fields, ``a`` and
``b``.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection, Iterable

from textfile_parsers.config import DelimitedLayout
from textfile_parsers.exceptions import (
    UNKNOWN_LINE_NUMBER,
    ConfigValidationError,
    ExpectedDelimiterMissingError,
    UnexpectedQuoteError,
    UnterminatedQuoteError,
)

logger = logging.getLogger(__name__)

QUOTE = '"'


class State(enum.Enum):
    IN_DELIMITER = enum.auto()
    IN_TEXT_DATA = enum.auto()
    IN_QUOTED_TEXT = enum.auto()
    IN_CLOSING_QUOTES = enum.auto()


def split_delimited(
    line: str | None,
    delimiters: Collection[str],
    enclosed_in_quotes: bool = False,
    squeeze_delimiters: bool = False,
    line_number: int = UNKNOWN_LINE_NUMBER,
) -> list[str]:
    """Split *line* on any of *delimiters*.

    Args:
        line: The line to split, or ``None`` at end of input.
        delimiters: Delimiter characters (set membership, order irrelevant).
        enclosed_in_quotes: If True, ``"`` opens and closes quoted fields.
        squeeze_delimiters: If True, consecutive delimiters count as one.
        line_number: 1-based line number reported on failure.

    Returns:
        The fields in order; ``[]`` when *line* is ``None``.

    Raises:
        UnexpectedQuoteError: Quote inside unquoted field text.
        ExpectedDelimiterMissingError: Text right after a closing quote.
        UnterminatedQuoteError: Line ended inside quotes.
    """
    if line is None:
        return []

    delimiter_set = frozenset(delimiters)
    fields: list[str] = []
    current: list[str] = []
    state = State.IN_DELIMITER

    def emit() -> None:
        fields.append("".join(current))
        current.clear()

    for position, c in enumerate(line):
        if c in delimiter_set:
            if state is State.IN_DELIMITER:
                if not squeeze_delimiters:
                    emit()
            elif state is State.IN_QUOTED_TEXT:
                current.append(c)
            else:
                emit()
                state = State.IN_DELIMITER

        elif c == QUOTE and enclosed_in_quotes:
            if state is State.IN_DELIMITER:
                state = State.IN_QUOTED_TEXT
            elif state is State.IN_TEXT_DATA:
                raise UnexpectedQuoteError(
                    f"Unexpected quote at column {position + 1}", line_number
                )
            elif state is State.IN_QUOTED_TEXT:
                state = State.IN_CLOSING_QUOTES
            else:
                emit()
                state = State.IN_QUOTED_TEXT

        else:
            if state is State.IN_DELIMITER:
                current.append(c)
                state = State.IN_TEXT_DATA
            elif state is State.IN_CLOSING_QUOTES:
                raise ExpectedDelimiterMissingError(
                    f"Expected delimiter not found at column {position + 1}", line_number
                )
            else:
                current.append(c)

    if state is State.IN_QUOTED_TEXT:
        raise UnterminatedQuoteError("Closing quote was expected", line_number)
    emit()
    return fields


class DelimitedSplitter:
    """Splits lines using a ``DelimitedLayout``.

    Delimiters and flags can be changed between lines; every update is
    validated first and, on failure, the previous layout is kept.
    Not thread-safe: give each thread its own splitter.
    """

    def __init__(self, layout: DelimitedLayout | None = None) -> None:
        self.layout = layout if layout is not None else DelimitedLayout()

    def __repr__(self) -> str:
        return (
            f"DelimitedSplitter(delimiters={list(self.layout.delimiters)}, "
            f"enclosed_in_quotes={self.layout.enclosed_in_quotes}, "
            f"squeeze_delimiters={self.layout.squeeze_delimiters})"
        )

    def _update(self, **changes) -> None:
        data = self.layout.model_dump()
        data.update(changes)
        try:
            layout = DelimitedLayout.model_validate(data)
        except ValueError as exc:
            raise ConfigValidationError(f"Invalid delimited layout {changes}: {exc}") from exc
        self.layout = layout
        logger.debug("Delimited layout updated: %s", changes)

    def get_delimiters(self) -> list[str]:
        """Return a copy of the configured delimiters."""
        return list(self.layout.delimiters)

    def set_delimiters(self, *delimiters: str) -> None:
        """Replace the configured delimiters.

        Accepts characters as separate arguments or a single iterable
        (a list, a set, or a string of characters).

        Raises:
            ConfigValidationError: If no delimiter is given, or one is CR,
                LF, or not a single character.
        """
        if len(delimiters) == 1 and isinstance(delimiters[0], Iterable):
            delimiters = tuple(delimiters[0])
        self._update(delimiters=delimiters)

    @property
    def enclosed_in_quotes(self) -> bool:
        return self.layout.enclosed_in_quotes

    @enclosed_in_quotes.setter
    def enclosed_in_quotes(self, value: bool) -> None:
        self._update(enclosed_in_quotes=value)

    @property
    def squeeze_delimiters(self) -> bool:
        return self.layout.squeeze_delimiters

    @squeeze_delimiters.setter
    def squeeze_delimiters(self, value: bool) -> None:
        self._update(squeeze_delimiters=value)

    def split(self, line: str | None, line_number: int = UNKNOWN_LINE_NUMBER) -> list[str]:
        return split_delimited(
            line,
            self.layout.delimiters,
            enclosed_in_quotes=self.layout.enclosed_in_quotes,
            squeeze_delimiters=self.layout.squeeze_delimiters,
            line_number=line_number,
        )
