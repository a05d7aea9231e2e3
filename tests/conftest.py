"""
Shared test fixtures and sample lines for textfile-parsers tests.

The sample records mirror the fixed-width contact layout used throughout
the suite: a 5-character code, a 15-character name, then either an
8-character date (``ddMMyyyy``) or a variable-width e-mail address.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample lines -- edit here if the fixtures need to change
# ---------------------------------------------------------------------------
CONTACT_LINES = [
    "01732Juan Perez     jperez@mail.com",
    "02310Guillermo Diez guillediez@mail.com",
]

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def contacts_file(tmp_path: Path) -> Path:
    """A fixed-width contacts file with Windows line endings."""
    path = tmp_path / "contacts.dat"
    path.write_text("\r\n".join(CONTACT_LINES) + "\r\n", encoding="utf-8", newline="")
    return path


@pytest.fixture()
def csv_file(tmp_path: Path) -> Path:
    """A quoted, commented CSV file written with a UTF-8 BOM."""
    path = tmp_path / "orders.csv"
    path.write_text(
        "# order export\n"
        "1001,\"Perez, Juan\",0100.00,11/05/2002\n"
        "1002,\"Diez, Guillermo\",2500.50,12/24/2002\n"
        "\n"
        "1003,\"Gomez, Ana\",75.25,01/02/2003\n",
        encoding="utf-8-sig",
    )
    return path


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads files written to tmp_path)",
    )
