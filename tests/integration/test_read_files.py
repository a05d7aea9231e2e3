"""
Integration tests: read files written to disk end to end.

Uses the ``contacts_file`` (fixed-width, CRLF) and ``csv_file`` (UTF-8 BOM,
quoted, commented) fixtures from conftest.py together with YAML configs,
``textfile_parsers.open()`` and ``read_frame()``.
"""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path

import pytest

import textfile_parsers
from textfile_parsers import (
    DelimitedLayout,
    FixedWidthLayout,
    ParserConfig,
    SourceConfig,
    read_frame,
    save_config,
)

pytestmark = pytest.mark.integration

ORDERS_YAML = """\
layout:
  kind: delimited
  delimiters: ","
  enclosed_in_quotes: true
source:
  comment_tokens: ["#"]
  ignore_blank_lines: true
"""


@pytest.fixture()
def orders_config(tmp_path: Path) -> Path:
    path = tmp_path / "orders.yaml"
    path.write_text(ORDERS_YAML, encoding="utf-8")
    return path


class TestFixedWidthFile:
    """Reading the fixed-width contacts file."""

    def test_contacts(self, contacts_file: Path):
        layout = FixedWidthLayout(field_widths=(5, 15, 0))
        with textfile_parsers.open(contacts_file, layout=layout, trim_whitespace=True) as reader:
            first = reader.read_fields()
            second = reader.read_fields()
            assert reader.read_fields() is None
            assert reader.end_of_file

        assert first.to_array() == ["01732", "Juan Perez", "jperez@mail.com"]
        assert second.get_int32(0) == 2310
        assert second.get_string(2) == "guillediez@mail.com"
        assert reader.closed

    def test_contacts_frame(self, contacts_file: Path):
        config = ParserConfig(layout=FixedWidthLayout(field_widths=(5, 15, 0)), trim_whitespace=True)
        df = read_frame(contacts_file, config, columns=["code", "name", "email"])
        assert df["name"].tolist() == ["Juan Perez", "Guillermo Diez"]


class TestDelimitedFile:
    """Reading the quoted, commented CSV file."""

    def test_orders_with_yaml_config(self, csv_file: Path, orders_config: Path):
        with textfile_parsers.open(csv_file, orders_config) as reader:
            rows = []
            while (fields := reader.read_fields()) is not None:
                rows.append(fields)
            last_line = reader.line_number

        assert [r.get_string(1) for r in rows] == ["Perez, Juan", "Diez, Guillermo", "Gomez, Ana"]
        assert rows[0].get_int32(0) == 1001
        assert rows[0].get_double(2) == 100.0
        assert rows[0].get_datetime(3) == datetime(2002, 11, 5)
        assert rows[1].get_datetime(3) == datetime(2002, 12, 24)
        assert last_line == 5

    def test_bom_kept_without_sig_encoding(self, csv_file: Path):
        """A plain utf-8 encoding leaves the BOM on the first line."""
        source = SourceConfig(encoding="utf-8", comment_tokens=("#",))
        with textfile_parsers.open(csv_file, source=source) as reader:
            first = reader.read_fields()
        assert first.get_string(0).startswith("\ufeff#")

    def test_orders_frame(self, csv_file: Path, orders_config: Path):
        config = textfile_parsers.load_config(orders_config)
        df = read_frame(csv_file, config, columns=["id", "name", "amount", "date"])
        assert len(df) == 3
        assert df["amount"].tolist() == ["0100.00", "2500.50", "75.25"]

    def test_saved_config_reads_same_rows(self, csv_file: Path, orders_config: Path, tmp_path: Path):
        copy = tmp_path / "copy.yaml"
        save_config(textfile_parsers.load_config(orders_config), copy)
        original = read_frame(csv_file, textfile_parsers.load_config(orders_config))
        again = read_frame(csv_file, textfile_parsers.load_config(copy))
        assert original.equals(again)


class TestOpen:
    """Tests for textfile_parsers.open() argument handling."""

    def test_stream_with_overrides(self):
        reader = textfile_parsers.open(
            io.StringIO("a  bb  ccc\n"),
            layout=DelimitedLayout(delimiters=" ", squeeze_delimiters=True),
        )
        assert reader.read_fields().to_array() == ["a", "bb", "ccc"]

    def test_source_override(self):
        """``source=`` is a config override, not the positional input."""
        reader = textfile_parsers.open(
            io.StringIO("#c\na,b\n"), source=SourceConfig(comment_tokens=("#",))
        )
        assert reader.get_comment_tokens() == ["#"]
        assert reader.read_fields().to_array() == ["a", "b"]
        assert reader.line_number == 2

    def test_trimmed_fixed_width_join(self, tmp_path: Path):
        path = tmp_path / "record.dat"
        path.write_text("01732Juan Perez     11052002\n", encoding="utf-8")
        with textfile_parsers.open(
            path, layout=FixedWidthLayout(field_widths=(5, 15, 8)), trim_whitespace=True
        ) as reader:
            assert reader.read_fields().to_string(":") == "01732:Juan Perez:11052002"

    def test_missing_source(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            textfile_parsers.open(tmp_path / "missing.csv")

    def test_missing_config(self, csv_file: Path, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            textfile_parsers.open(csv_file, tmp_path / "missing.yaml")
