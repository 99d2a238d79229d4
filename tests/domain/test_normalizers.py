from datetime import date, datetime
from decimal import Decimal

import pytest

from satsflow.domain.normalizers import parse_flexible_date, parse_locale_decimal
from satsflow.errors import InvalidDate, InvalidNumber


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56", Decimal("1234.56")),
        ("1234.56", Decimal("1234.56")),
        ("R$ 1.234,56", Decimal("1234.56")),
        ("US$ 1,234.56", Decimal("1234.56")),
        ("0,00012345", Decimal("0.00012345")),
        ("0,01 BTC", Decimal("0.01")),
        ("1.234.567,8", Decimal("1234567.8")),
        ("1000", Decimal("1000")),
        (" 1 000,50 ", Decimal("1000.50")),
        ("1e-05", Decimal("0.00001")),
        (1000, Decimal("1000")),
        (0.1, Decimal("0.1")),
    ],
)
def test_parse_locale_decimal(raw, expected):
    assert parse_locale_decimal(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,234,567", Decimal("1234567")),
        ("1.234.567", Decimal("1234567")),
        ("1.000.000", Decimal("1000000")),
        ("R$ 1.000.000", Decimal("1000000")),
        ("1.000", Decimal("1.000")),
        ("1,5", Decimal("1.5")),
    ],
)
def test_repeated_separator_is_grouping(raw, expected):
    assert parse_locale_decimal(raw) == expected


@pytest.mark.parametrize("raw", ["2024-01-05", "12abc34", "100/200", "1 2a", "--5", "R$ 10 EUR"])
def test_parse_locale_decimal_rejects_text_between_digits(raw):
    with pytest.raises(InvalidNumber):
        parse_locale_decimal(raw)


def test_parse_locale_decimal_negative_forms():
    assert parse_locale_decimal("-0,01") == Decimal("-0.01")
    assert parse_locale_decimal("R$ -150,00") == Decimal("-150.00")
    assert parse_locale_decimal("(150,00)") == Decimal("-150.00")


@pytest.mark.parametrize("raw", ["", "   ", "abc", "R$", ".", None, float("nan"), True])
def test_parse_locale_decimal_rejects_values_without_digits(raw):
    with pytest.raises(InvalidNumber):
        parse_locale_decimal(raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("31/01/2024", date(2024, 1, 31)),
        ("05/01/2024", date(2024, 1, 5)),
        ("5/1/2024", date(2024, 1, 5)),
        ("31-01-2024", date(2024, 1, 31)),
        ("31.01.2024", date(2024, 1, 31)),
        ("01/13/2024", date(2024, 1, 13)),
        ("2024-01-31", date(2024, 1, 31)),
        ("2024-01-05 00:00:00", date(2024, 1, 5)),
        ("2024-01-05T10:30:00", date(2024, 1, 5)),
        (45292, date(2024, 1, 1)),
        (45292.75, date(2024, 1, 1)),
        ("45292", date(2024, 1, 1)),
        (datetime(2024, 3, 2, 14, 0), date(2024, 3, 2)),
        (date(2024, 3, 2), date(2024, 3, 2)),
    ],
)
def test_parse_flexible_date(raw, expected):
    assert parse_flexible_date(raw) == expected


def test_day_first_when_both_tokens_could_be_months():
    assert parse_flexible_date("03/04/2024") == date(2024, 4, 3)


@pytest.mark.parametrize("raw", ["31/02/2024", "13/13/2024", "2024-02-30", "yesterday", "", None, 0, -5])
def test_parse_flexible_date_rejects_invalid_dates(raw):
    with pytest.raises(InvalidDate):
        parse_flexible_date(raw)
