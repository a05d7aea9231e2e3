"""
Typed parsing transform for textfile-parsers.

Converts a single field string to a Python value under a ``Culture``.
Every parser here is strict: the whole string must be a valid value of the
target type (surrounding whitespace aside), otherwise ``FieldFormatError``
is raised.  Values that parse but do not fit the target width raise
``FieldOverflowError``.

Integer widths follow numpy's fixed-size types so that range checks match
the ``byte`` / ``int16`` / ``int32`` / ``int64`` / ``single`` names exposed
by ``FieldSet``.
"""

from __future__ import annotations

import math
import re
import string
from datetime import datetime
from decimal import Decimal
from functools import lru_cache

import numpy as np
from babel.numbers import NumberFormatError
from babel.numbers import parse_decimal as babel_parse_decimal

from textfile_parsers.culture import INVARIANT_CULTURE, Culture
from textfile_parsers.exceptions import FieldFormatError, FieldOverflowError

_BOOL_STRIP = string.whitespace + "\0"
_FLOAT32_MAX = float(np.finfo(np.float32).max)


def parse_boolean(text: str) -> bool:
    """Parse ``true`` / ``false`` (any case, surrounding whitespace ignored)."""
    value = text.strip(_BOOL_STRIP).lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise FieldFormatError(f"'{text}' is not a valid boolean")


def parse_char(text: str) -> str:
    """Return the single character held by *text*."""
    if len(text) != 1:
        raise FieldFormatError(f"'{text}' is not a single character")
    return text


@lru_cache(maxsize=None)
def _integer_pattern(sign_symbols: frozenset[str]) -> re.Pattern[str]:
    signs = "".join(re.escape(s) for s in sorted(sign_symbols))
    return re.compile(rf"\s*(?P<sign>[{signs}])?(?P<digits>[0-9]+)\s*")


def parse_integer(text: str, dtype: type[np.integer], culture: Culture = INVARIANT_CULTURE) -> int:
    """Parse an integer and check that it fits *dtype*.

    Accepts an optional leading sign and ASCII digits only: no group
    separators, no decimal point, no exponent.

    Args:
        text: The field string.
        dtype: numpy integer type giving the allowed range (e.g. ``np.int16``).
        culture: Supplies the locale's plus/minus symbols.

    Returns:
        The parsed value as a Python ``int``.
    """
    match = _integer_pattern(culture.sign_symbols).fullmatch(text)
    if match is None:
        raise FieldFormatError(f"'{text}' is not a valid integer")
    value = int(match.group("digits"))
    sign = match.group("sign")
    if sign in ("-", culture.minus_sign):
        value = -value
    info = np.iinfo(dtype)
    if not info.min <= value <= info.max:
        raise FieldOverflowError(
            f"'{text}' is outside the range of {np.dtype(dtype).name} "
            f"[{info.min}, {info.max}]"
        )
    return value


def _parse_number(text: str, culture: Culture) -> Decimal:
    stripped = text.strip()
    # Decimal() itself tolerates digit-group underscores
    if not stripped or "_" in stripped:
        raise FieldFormatError(f"'{text}' is not a valid number")
    try:
        return babel_parse_decimal(stripped, locale=culture.locale, strict=True)
    except NumberFormatError as exc:
        raise FieldFormatError(f"'{text}' is not a valid number: {exc}") from exc


def parse_decimal(text: str, culture: Culture = INVARIANT_CULTURE) -> Decimal:
    """Parse a finite decimal using the culture's decimal and group symbols."""
    value = _parse_number(text, culture)
    if not value.is_finite():
        raise FieldFormatError(f"'{text}' is not a finite decimal")
    return value


def parse_double(text: str, culture: Culture = INVARIANT_CULTURE) -> float:
    """Parse a double-precision float.

    ``NaN`` and ``Infinity`` are accepted; a finite value too large for
    float64 raises ``FieldOverflowError``.
    """
    value = _parse_number(text, culture)
    if value.is_snan():
        raise FieldFormatError(f"'{text}' is not a valid number")
    result = float(value)
    if value.is_finite() and math.isinf(result):
        raise FieldOverflowError(f"'{text}' is outside the range of float64")
    return result


def parse_single(text: str, culture: Culture = INVARIANT_CULTURE) -> np.float32:
    """Parse a single-precision float."""
    value = parse_double(text, culture)
    if math.isfinite(value) and abs(value) > _FLOAT32_MAX:
        raise FieldOverflowError(f"'{text}' is outside the range of float32")
    return np.float32(value)


def parse_datetime(text: str, culture: Culture = INVARIANT_CULTURE) -> datetime:
    """Parse a date/time value.

    ISO 8601 is tried first, then each of the culture's date formats
    (see ``Culture.get_date_formats()``).  The first full match wins.
    """
    stripped = text.strip()
    if not stripped:
        raise FieldFormatError(f"'{text}' is not a valid date/time")
    try:
        return datetime.fromisoformat(stripped)
    except ValueError:
        pass
    for fmt in culture.get_date_formats():
        try:
            return datetime.strptime(stripped, fmt)
        except ValueError:
            continue
    raise FieldFormatError(
        f"'{text}' is not a valid date/time for culture '{culture.name}'"
    )
