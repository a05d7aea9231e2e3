"""
Splitters sub-package for textfile-parsers.

Contains the two field-splitting disciplines that turn one raw line into
an ordered list of field strings.

Design: tagged variant, not a class hierarchy
- fixed_width.py implements FixedWidthSplitter (character offsets, open last field).
- delimited.py implements DelimitedSplitter (quote-aware four-state automaton).

The two splitters share no base class.  ``make_splitter()`` dispatches on
the layout's ``kind`` tag, which is how the reader picks one at runtime.
"""

from __future__ import annotations

from textfile_parsers.config import DelimitedLayout, FixedWidthLayout
from textfile_parsers.splitters.delimited import DelimitedSplitter, split_delimited
from textfile_parsers.splitters.fixed_width import FixedWidthSplitter, split_fixed_width

Splitter = FixedWidthSplitter | DelimitedSplitter

__all__ = [
    "DelimitedSplitter",
    "FixedWidthSplitter",
    "Splitter",
    "make_splitter",
    "split_delimited",
    "split_fixed_width",
]


def make_splitter(layout: FixedWidthLayout | DelimitedLayout) -> Splitter:
    """Build the splitter matching *layout*'s ``kind``.

    Raises:
        TypeError: If *layout* is not one of the two layout models.
    """
    if isinstance(layout, FixedWidthLayout):
        return FixedWidthSplitter(layout)
    if isinstance(layout, DelimitedLayout):
        return DelimitedSplitter(layout)
    raise TypeError(f"Unsupported layout: {type(layout).__name__}")
