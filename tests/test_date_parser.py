"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from ecolage.utils.date_parser import parse_date, school_year_for


def test_parse_absolute_date():
    """Test parsing ISO dates."""
    assert parse_date("2025-09-01") == date(2025, 9, 1)
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_day_first():
    """Slash dates are read day first."""
    assert parse_date("01/09/2025") == date(2025, 9, 1)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_parse_written_date():
    """Test parsing written-out dates."""
    assert parse_date("1 September 2025") == date(2025, 9, 1)


def test_parse_relative_dates():
    """Test parsing 'today', 'yesterday' and 'tomorrow'."""
    assert parse_date("today") == date.today()
    assert parse_date(" Yesterday ") == date.today() - timedelta(days=1)
    assert parse_date("tomorrow") == date.today() + timedelta(days=1)


def test_parse_invalid_date():
    """Test parsing invalid date raises ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2025, 9, 1), "2025-2026"),
        (date(2025, 12, 31), "2025-2026"),
        (date(2026, 1, 1), "2025-2026"),
        (date(2026, 6, 30), "2025-2026"),
        (date(2026, 8, 31), "2025-2026"),
    ],
)
def test_school_year_for(day, expected):
    """The school year starts in September."""
    assert school_year_for(day) == expected
