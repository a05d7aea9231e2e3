"""
Fixed-width splitter for textfile-parsers.

Slices a line into fields at configured character widths.

Input structure (widths ``[5, 15, 8]``)::

    01732Juan Perez     11052002
    |---||-------------||------|

Output: ``["01732", "Juan Perez     ", "11052002"]``.

The last width may be ``<= 0``: that field takes the rest of the line, with
any trailing CR/LF removed, and is empty when nothing is left.  A line
shorter than a positive width raises ``LineTooShortError``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from textfile_parsers.config import FixedWidthLayout
from textfile_parsers.exceptions import (
    UNKNOWN_LINE_NUMBER,
    ConfigValidationError,
    LineTooShortError,
)

logger = logging.getLogger(__name__)


def split_fixed_width(
    line: str | None,
    widths: Sequence[int],
    line_number: int = UNKNOWN_LINE_NUMBER,
) -> list[str] | None:
    """Split *line* into ``len(widths)`` fields.

    Args:
        line: The line to split, or ``None`` at end of input.
        widths: Field widths; only the last one may be ``<= 0``.
        line_number: 1-based line number reported on failure.

    Returns:
        The fields in order, or ``None`` when *line* is ``None``.

    Raises:
        LineTooShortError: If the line ends before a positive-width field.
    """
    if line is None:
        return None

    fields: list[str] = []
    index = 0
    for width in widths:
        if width > 0:
            if len(line) < index + width:
                raise LineTooShortError(
                    f"The line was shorter than expected: field {len(fields)} needs "
                    f"characters {index}-{index + width - 1}, line has {len(line)}",
                    line_number,
                )
            fields.append(line[index:index + width])
            index += width
        elif index >= len(line):
            fields.append("")
        else:
            fields.append(line[index:].rstrip("\r\n"))
    return fields


class FixedWidthSplitter:
    """Splits lines using a ``FixedWidthLayout``.

    The layout can be replaced between lines with ``set_field_widths()``.
    Not thread-safe: give each thread its own splitter.
    """

    def __init__(self, layout: FixedWidthLayout | None = None) -> None:
        self.layout = layout if layout is not None else FixedWidthLayout()

    def __repr__(self) -> str:
        return f"FixedWidthSplitter(field_widths={list(self.layout.field_widths)})"

    def get_field_widths(self) -> list[int]:
        """Return a copy of the configured widths."""
        return list(self.layout.field_widths)

    def set_field_widths(self, *widths: int) -> None:
        """Replace the configured widths.

        Accepts the widths as separate arguments or as a single sequence.
        On failure the previous widths are kept.

        Raises:
            ConfigValidationError: If the widths are empty or an open
                width is not last.
        """
        if len(widths) == 1 and isinstance(widths[0], Sequence):
            widths = tuple(widths[0])
        try:
            layout = FixedWidthLayout(field_widths=widths)
        except ValueError as exc:
            raise ConfigValidationError(f"Invalid field widths {list(widths)}: {exc}") from exc
        self.layout = layout
        logger.debug("Field widths set to %s", list(widths))

    def split(self, line: str | None, line_number: int = UNKNOWN_LINE_NUMBER) -> list[str] | None:
        return split_fixed_width(line, self.layout.field_widths, line_number)
