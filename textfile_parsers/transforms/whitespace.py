"""
Whitespace trimming transform for textfile-parsers.

Applied after either splitter when ``trim_whitespace`` is enabled, before
the fields are wrapped in a ``FieldSet``.  Fixed-width layouts usually need
it: ``"Juan Perez     "`` in a 15-character column becomes ``"Juan Perez"``.
"""

from __future__ import annotations

from collections.abc import Sequence


def trim_fields(fields: Sequence[str]) -> list[str]:
    """Strip leading/trailing whitespace from every field.

    Returns a new list in the same order; the input is not modified.
    """
    return [f.strip() for f in fields]
