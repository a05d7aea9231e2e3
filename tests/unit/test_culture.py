"""
Unit tests for culture handling (textfile_parsers.culture).

Babel supplies the CLDR data; these tests pin the conventions the typed
getters and FieldSet.to_string() rely on.
"""

from __future__ import annotations

import pydantic
import pytest

from textfile_parsers.culture import INVARIANT_CULTURE, Culture, cldr_to_strptime


class TestCulture:
    """Tests for the Culture model."""

    # -----------------------------------------------------------------
    # Invariant culture
    # -----------------------------------------------------------------

    def test_invariant_is_default(self):
        assert Culture().name == "invariant"
        assert INVARIANT_CULTURE == Culture()

    def test_invariant_number_symbols(self):
        assert INVARIANT_CULTURE.decimal_symbol == "."
        assert INVARIANT_CULTURE.group_symbol == ","

    def test_invariant_list_separator(self):
        assert INVARIANT_CULTURE.get_list_separator() == ","

    def test_sign_symbols_include_ascii(self):
        assert {"+", "-"} <= INVARIANT_CULTURE.sign_symbols

    # -----------------------------------------------------------------
    # Named locales
    # -----------------------------------------------------------------

    def test_german_symbols(self):
        culture = Culture(name="de_DE")
        assert culture.decimal_symbol == ","
        assert culture.group_symbol == "."

    def test_comma_decimal_locale_uses_semicolon(self):
        assert Culture(name="de_DE").get_list_separator() == ";"

    def test_point_decimal_locale_uses_comma(self):
        assert Culture(name="en_US").get_list_separator() == ","

    def test_hyphenated_name_accepted(self):
        assert Culture(name="es-AR").locale.language == "es"

    def test_explicit_list_separator_wins(self):
        assert Culture(name="de_DE", list_separator="|").get_list_separator() == "|"

    def test_unknown_locale_rejected(self):
        with pytest.raises(pydantic.ValidationError, match="Unknown locale"):
            Culture(name="xx_YY")

    # -----------------------------------------------------------------
    # Date formats
    # -----------------------------------------------------------------

    def test_invariant_date_formats_month_first(self):
        formats = INVARIANT_CULTURE.get_date_formats()
        assert formats[:2] == ["%m/%d/%y", "%m/%d/%Y"]

    def test_date_formats_include_time_variants(self):
        assert "%m/%d/%Y %H:%M:%S" in INVARIANT_CULTURE.get_date_formats()

    def test_german_date_formats_day_first(self):
        assert "%d.%m.%Y" in Culture(name="de_DE").get_date_formats()

    def test_explicit_date_formats(self):
        culture = Culture(date_formats=("%Y|%m|%d",))
        assert culture.get_date_formats() == ["%Y|%m|%d"]

    def test_get_date_formats_returns_copy(self):
        formats = INVARIANT_CULTURE.get_date_formats()
        formats.clear()
        assert INVARIANT_CULTURE.get_date_formats()

    def test_empty_date_formats_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Culture(date_formats=())

    def test_frozen(self):
        with pytest.raises(pydantic.ValidationError):
            INVARIANT_CULTURE.name = "de_DE"


class TestCldrToStrptime:
    """Tests for cldr_to_strptime()."""

    def test_two_digit_year_gives_both(self):
        assert cldr_to_strptime("M/d/yy") == ["%m/%d/%y", "%m/%d/%Y"]

    def test_four_digit_year(self):
        assert cldr_to_strptime("dd.MM.yyyy") == ["%d.%m.%Y"]

    def test_quoted_literal(self):
        assert cldr_to_strptime("d 'de' MMMM 'de' y") == ["%d de %B de %Y"]

    def test_month_name(self):
        assert cldr_to_strptime("MMM d, y") == ["%b %d, %Y"]

    def test_unsupported_letter(self):
        assert cldr_to_strptime("G y") == []

    def test_percent_escaped(self):
        assert cldr_to_strptime("d%M") == ["%d%%%m"]
