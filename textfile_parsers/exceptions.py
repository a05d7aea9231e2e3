"""
Custom exception hierarchy for textfile-parsers.

Three families, matching where a failure can happen:

- **Structural line errors** (``MalformedLineError`` and subclasses): the
  current line cannot be split under the configured layout.  They always
  carry the 1-based line number (``-1`` when unknown).  The splitters keep
  no state between lines, so callers can log, skip and keep reading.
- **Accessor errors** (``FieldIndexError``, ``FieldFormatError``): raised by
  the typed getters of a ``FieldSet``.  The FieldSet stays valid.
- **Configuration errors** (``ConfigValidationError``): raised when a
  setter or a config file is rejected.  The previous configuration is kept.

The accessor and structural errors also derive from the matching builtin
(``IndexError`` / ``ValueError``) so generic handlers keep working.
"""

UNKNOWN_LINE_NUMBER = -1


class TextFileParsersError(Exception):
    """Base exception for all textfile-parsers errors."""


class MalformedLineError(TextFileParsersError, ValueError):
    """Raised when a line cannot be split using the configured layout.

    Attributes:
        line_number: 1-based number of the offending line, or ``-1``
            when the caller did not track line numbers.
    """

    kind = "malformed_line"

    def __init__(self, message: str, line_number: int = UNKNOWN_LINE_NUMBER) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number == UNKNOWN_LINE_NUMBER:
            return self.message
        return f"{self.message} (line {self.line_number})"

    def __reduce__(self):
        return (self.__class__, (self.message, self.line_number))


class LineTooShortError(MalformedLineError):
    """The line ended before every fixed-width field could be read."""

    kind = "line_too_short"


class UnexpectedQuoteError(MalformedLineError):
    """A quote appeared in the middle of unquoted field text."""

    kind = "unexpected_quote"


class UnterminatedQuoteError(MalformedLineError):
    """The line ended inside a quoted field."""

    kind = "unterminated_quote"


class ExpectedDelimiterMissingError(MalformedLineError):
    """Something other than a delimiter followed a closing quote."""

    kind = "expected_delimiter_missing"


class FieldIndexError(TextFileParsersError, IndexError):
    """Raised when a field ordinal is outside ``[0, count)``."""


class FieldFormatError(TextFileParsersError, ValueError):
    """Raised when a field does not hold a valid value of the requested type."""


class FieldOverflowError(FieldFormatError):
    """Raised when a field parses but does not fit the requested type.

    For example ``"300"`` read as a byte, or ``"1e39"`` read as a single.
    """


class ConfigValidationError(TextFileParsersError, ValueError):
    """Raised when a configuration update or config file is rejected.

    This can happen if:
    - The field-width or delimiter sequence is empty.
    - An open (``<= 0``) width is not the last one.
    - A delimiter is CR, LF, or longer than one character.
    - The config file is empty.
    """
