"""
FieldSet: the fields of one parsed line.

A ``FieldSet`` is an immutable, ordered sequence of field strings plus the
``Culture`` used to read them as typed values.  Splitters produce plain
lists of strings; the reader wraps each list in a FieldSet.

Contract:
- The values are copied at construction; later changes to the caller's
  list do not show up here, and ``to_array()`` returns a fresh copy.
- Ordinals must lie in ``[0, count)``.  Negative ordinals are rejected,
  they do not count from the end.
- Typed getters check the ordinal first (``FieldIndexError``), then parse
  strictly (``FieldFormatError``).  A failed call leaves the FieldSet
  untouched, so other calls keep working.

Example::

    fields = FieldSet(["01732", "Juan Perez", "0100.00", "11/05/2002"])
    fields.get_int32(0)      # 1732
    fields.get_double(2)     # 100.0
    fields.get_datetime(3)   # datetime(2002, 11, 5, 0, 0)
    fields.to_string(":")    # "01732:Juan Perez:0100.00:11/05/2002"
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from decimal import Decimal
from typing import TypeVar

import numpy as np

from textfile_parsers.culture import INVARIANT_CULTURE, Culture
from textfile_parsers.exceptions import FieldFormatError, FieldIndexError
from textfile_parsers.transforms import typed

T = TypeVar("T")


class FieldSet:
    """Immutable ordered collection of the fields parsed from one line."""

    __slots__ = ("_items", "_culture")

    def __init__(self, values: Iterable[str], culture: Culture | None = None) -> None:
        self._items: tuple[str, ...] = tuple(values)
        self._culture = culture if culture is not None else INVARIANT_CULTURE

    # -- Sequence-like access -----------------------------------------------

    @property
    def count(self) -> int:
        """Number of fields."""
        return len(self._items)

    @property
    def culture(self) -> Culture:
        return self._culture

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __getitem__(self, ordinal: int) -> str:
        return self.field(ordinal)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSet):
            return NotImplemented
        return self._items == other._items and self._culture == other._culture

    def __hash__(self) -> int:
        return hash((self._items, self._culture))

    def __repr__(self) -> str:
        return f"FieldSet({list(self._items)!r}, culture={self._culture.name!r})"

    def __str__(self) -> str:
        return self.to_string()

    def field(self, ordinal: int) -> str:
        """Return the raw string at *ordinal*.

        Raises:
            FieldIndexError: If *ordinal* is outside ``[0, count)``.
        """
        ordinal = operator.index(ordinal)
        if not 0 <= ordinal < len(self._items):
            raise FieldIndexError(
                f"Field ordinal {ordinal} is out of range; "
                f"the line has {len(self._items)} field(s)"
            )
        return self._items[ordinal]

    get_string = field

    # -- Typed getters ------------------------------------------------------

    def _convert(self, ordinal: int, parse: Callable[[str], T]) -> T:
        text = self.field(ordinal)
        try:
            return parse(text)
        except FieldFormatError as exc:
            raise type(exc)(f"Field {ordinal}: {exc}") from exc

    def get_boolean(self, ordinal: int) -> bool:
        return self._convert(ordinal, typed.parse_boolean)

    def get_byte(self, ordinal: int) -> int:
        """Return the field as an unsigned 8-bit integer (0-255)."""
        return self._convert(ordinal, lambda s: typed.parse_integer(s, np.uint8, self._culture))

    def get_char(self, ordinal: int) -> str:
        """Return the field's single character."""
        return self._convert(ordinal, typed.parse_char)

    def get_datetime(self, ordinal: int) -> datetime:
        """Return the field as a datetime (ISO 8601 or the culture's date formats)."""
        return self._convert(ordinal, lambda s: typed.parse_datetime(s, self._culture))

    def get_decimal(self, ordinal: int) -> Decimal:
        return self._convert(ordinal, lambda s: typed.parse_decimal(s, self._culture))

    def get_double(self, ordinal: int) -> float:
        return self._convert(ordinal, lambda s: typed.parse_double(s, self._culture))

    def get_int16(self, ordinal: int) -> int:
        return self._convert(ordinal, lambda s: typed.parse_integer(s, np.int16, self._culture))

    def get_int32(self, ordinal: int) -> int:
        return self._convert(ordinal, lambda s: typed.parse_integer(s, np.int32, self._culture))

    def get_int64(self, ordinal: int) -> int:
        return self._convert(ordinal, lambda s: typed.parse_integer(s, np.int64, self._culture))

    def get_single(self, ordinal: int) -> np.float32:
        """Return the field as a single-precision float."""
        return self._convert(ordinal, lambda s: typed.parse_single(s, self._culture))

    # -- Conversion ---------------------------------------------------------

    def to_array(self) -> list[str]:
        """Return a new list holding the field strings."""
        return list(self._items)

    def to_string(self, separator: str | None = None) -> str:
        """Join the fields with *separator*, or the culture's list separator."""
        if separator is None:
            separator = self._culture.get_list_separator()
        return separator.join(self._items)
