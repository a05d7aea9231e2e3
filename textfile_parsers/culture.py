"""
Locale/culture context for typed field parsing.

A ``Culture`` names a CLDR locale (via Babel) and optionally overrides the
two conventions CLDR does not pin down for us:

- ``list_separator``: the separator used by ``FieldSet.to_string()`` when
  no explicit separator is given.
- ``date_formats``: strptime patterns tried by ``get_datetime()``.

The special name ``"invariant"`` is the culture-neutral default.  It reads
numbers with ``.`` as decimal point and ``,`` as group separator, dates as
month/day/year, and joins with ``,``.  It is backed by the ``en_US`` CLDR
data, which follows the same conventions.

Why Babel:
- CLDR data gives per-locale decimal/group/sign symbols and date patterns
  without touching the process-wide ``locale`` module state.
- ``babel.numbers.parse_decimal(strict=True)`` rejects misplaced group
  separators, which keeps number parsing strict.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel.numbers import (
    get_decimal_symbol,
    get_group_symbol,
    get_minus_sign_symbol,
    get_plus_sign_symbol,
)
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

INVARIANT = "invariant"
_INVARIANT_LOCALE = "en_US"

_TIME_SUFFIXES = (" %H:%M:%S", " %H:%M", " %I:%M:%S %p", " %I:%M %p")

# CLDR pattern letters we can express with strptime directives
_CLDR_TOKEN = re.compile(r"'[^']*'|([a-zA-Z])\1*")
_CLDR_TO_STRPTIME = {
    "M": "%m",
    "MM": "%m",
    "MMM": "%b",
    "MMMM": "%B",
    "L": "%m",
    "LL": "%m",
    "d": "%d",
    "dd": "%d",
    "EEE": "%a",
    "EEEE": "%A",
    "H": "%H",
    "HH": "%H",
    "h": "%I",
    "hh": "%I",
    "m": "%M",
    "mm": "%M",
    "s": "%S",
    "ss": "%S",
    "a": "%p",
}


@lru_cache(maxsize=None)
def _resolve_locale(name: str) -> Locale:
    identifier = _INVARIANT_LOCALE if name == INVARIANT else name.replace("-", "_")
    return Locale.parse(identifier)


def cldr_to_strptime(pattern: str) -> list[str]:
    """Translate a CLDR date pattern into equivalent strptime formats.

    Two-letter years produce two formats (``%y`` and ``%Y``) so that both
    ``5/11/02`` and ``5/11/2002`` are accepted.  Patterns using letters
    strptime cannot express (eras, week numbers, ...) yield ``[]``.
    """
    pieces: list[str] = []
    two_digit_year = False
    pos = 0
    for match in _CLDR_TOKEN.finditer(pattern):
        pieces.append(pattern[pos:match.start()].replace("%", "%%"))
        pos = match.end()
        token = match.group(0)
        if token.startswith("'"):
            literal = token[1:-1] or "'"
            pieces.append(literal.replace("%", "%%"))
        elif token[0] == "y":
            two_digit_year = len(token) == 2
            pieces.append("\0")
        elif token in _CLDR_TO_STRPTIME:
            pieces.append(_CLDR_TO_STRPTIME[token])
        else:
            return []
    pieces.append(pattern[pos:].replace("%", "%%"))
    template = "".join(pieces)
    if "\0" not in template:
        return [template]
    formats = [template.replace("\0", "%Y")]
    if two_digit_year:
        formats.insert(0, template.replace("\0", "%y"))
    return formats


class Culture(BaseModel):
    """Formatting conventions used by typed parsing and default joining."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        INVARIANT,
        description="CLDR locale identifier (e.g. 'de_DE', 'es-AR') or 'invariant'",
    )
    list_separator: str | None = Field(
        None,
        min_length=1,
        description="Separator for FieldSet.to_string(); derived from the locale if unset",
    )
    date_formats: tuple[str, ...] | None = Field(
        None,
        description="strptime formats for get_datetime(); derived from CLDR if unset",
    )

    @field_validator("name")
    @classmethod
    def _check_locale(cls, v: str) -> str:
        try:
            _resolve_locale(v)
        except (UnknownLocaleError, ValueError) as exc:
            raise ValueError(f"Unknown locale '{v}'") from exc
        return v

    @field_validator("date_formats")
    @classmethod
    def _check_date_formats(cls, v: tuple[str, ...] | None) -> tuple[str, ...] | None:
        if v is not None and not v:
            raise ValueError("date_formats cannot be empty; omit it to use the locale's")
        return v

    # -- Derived conventions ------------------------------------------------

    @property
    def locale(self) -> Locale:
        """The Babel ``Locale`` backing this culture."""
        return _resolve_locale(self.name)

    @property
    def decimal_symbol(self) -> str:
        return get_decimal_symbol(self.locale)

    @property
    def group_symbol(self) -> str:
        return get_group_symbol(self.locale)

    @property
    def plus_sign(self) -> str:
        return get_plus_sign_symbol(self.locale)

    @property
    def minus_sign(self) -> str:
        return get_minus_sign_symbol(self.locale)

    @property
    def sign_symbols(self) -> frozenset[str]:
        """Accepted leading signs: the locale's own plus ASCII ``+``/``-``."""
        return frozenset({"+", "-", self.plus_sign, self.minus_sign})

    def get_list_separator(self) -> str:
        """Return the separator used to join fields for display.

        Locales whose decimal symbol is a comma conventionally separate
        list items with a semicolon; everything else uses a comma.
        """
        if self.list_separator is not None:
            return self.list_separator
        if self.name != INVARIANT and self.decimal_symbol == ",":
            return ";"
        return ","

    def get_date_formats(self) -> list[str]:
        """Return the strptime formats tried, in order, by ``get_datetime()``."""
        if self.date_formats is not None:
            return list(self.date_formats)
        return list(_derived_date_formats(self.name))


@lru_cache(maxsize=None)
def _derived_date_formats(name: str) -> tuple[str, ...]:
    locale = _resolve_locale(name)
    dates: list[str] = []
    for length in ("short", "medium"):
        for fmt in cldr_to_strptime(locale.date_formats[length].pattern):
            if fmt not in dates:
                dates.append(fmt)
    formats = list(dates)
    for fmt in dates:
        formats.extend(fmt + suffix for suffix in _TIME_SUFFIXES)
    logger.debug("Derived %d date formats for culture %s", len(formats), name)
    return tuple(formats)


INVARIANT_CULTURE = Culture()
