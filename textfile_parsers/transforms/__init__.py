"""
Transforms sub-package for textfile-parsers.

Small, independently testable steps applied to split fields:

- whitespace.py: Trim leading/trailing whitespace from every field.
- typed.py: Convert one field string to a bool, int, float, Decimal,
  datetime or single character under a ``Culture``.

Neither step knows which splitter produced the fields.
"""
