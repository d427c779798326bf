"""Unit tests for lenient numeric parsing and rendering."""

from __future__ import annotations

import pytest

from core.numeric import format_number, json_number, parse_number


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("1,234.5", 1234.5),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("-20", -20.0),
        ("12 gp", 12.0),
    ],
)
def test_parse_number_handles_export_cells(raw_value, expected) -> None:
    """Parsing should strip separators and default junk to zero."""
    assert parse_number(raw_value) == expected


def test_format_number_drops_integral_fraction() -> None:
    """Integral floats should render without a trailing .0."""
    assert format_number(100.0) == "100"


def test_format_number_keeps_fractional_digits() -> None:
    """Fractional values should render in plain decimal form."""
    assert format_number(12.5) == "12.5"


def test_json_number_returns_int_for_integral_values() -> None:
    """JSON output should carry integral values as ints."""
    assert isinstance(json_number(500.0), int)


def test_format_number_accepts_int_arguments() -> None:
    """Plain ints should render without relying on float-only methods."""
    assert format_number(5) == "5"


def test_json_number_accepts_int_arguments() -> None:
    """Plain ints should pass through as ints."""
    assert json_number(5) == 5


def test_format_number_avoids_exponent_notation() -> None:
    """Tiny values should render as plain decimals, not exponents."""
    assert format_number(5e-07) == "0.0000005"
