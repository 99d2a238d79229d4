"""Locale-tolerant conversion of raw spreadsheet cells into typed values.

These functions know nothing about which field a cell feeds; they only turn
text (or spreadsheet-native numbers and dates) into ``Decimal`` and ``date``.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
import math
import re

from satsflow.errors import InvalidDate, InvalidNumber

SERIAL_EPOCH = date(1899, 12, 30)

_EXPONENT_RE = re.compile(r"^[+-]?\d+(\.\d+)?[eE][+-]?\d+$")
_SERIAL_RE = re.compile(r"^\d+(\.\d+)?$")
_UNIT = r"(?:R\$|US\$|\$|BRL|USD|BTC|satoshis|sats)"
_AMOUNT_RE = re.compile(
    rf"^(?P<lead>[+-]?){_UNIT}?(?P<sign>[+-]?)(?P<body>[\d.,]+){_UNIT}?$", re.IGNORECASE
)
_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_REGIONAL_RE = re.compile(r"^(\d{1,2})[/.-](\d{1,2})[/.-](\d{4})$")


def is_blank(raw: object) -> bool:
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    return isinstance(raw, str) and not raw.strip()


def parse_locale_decimal(raw: object) -> Decimal:
    """Parse ``"R$ 1.234,56"``, ``"1,234.56"`` or ``"0,01 BTC"`` into a Decimal.

    The rightmost of ``,``/``.`` is the decimal separator; every separator to
    its left is a thousands separator. A separator that repeats while the
    other one is absent (``"1.000.000"``, ``"1,234,567"``) is grouping only.
    Only a currency or unit token may surround the digits; anything else,
    such as ``"2024-01-05"`` or ``"100/200"``, is rejected. A leading ``-``
    or surrounding parentheses make the value negative.
    """
    if isinstance(raw, bool):
        raise InvalidNumber(f"Not a number: {raw!r}")
    if isinstance(raw, Decimal):
        if not raw.is_finite():
            raise InvalidNumber(f"Not a finite number: {raw!r}")
        return raw
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise InvalidNumber(f"Not a finite number: {raw!r}")
        return Decimal(str(raw))
    if is_blank(raw):
        raise InvalidNumber("Empty value")

    text = "".join(str(raw).split())
    if _EXPONENT_RE.match(text):
        return Decimal(text)

    negative = False
    if text.startswith("(") and text.endswith(")"):
        negative = True
        text = text[1:-1]
    match = _AMOUNT_RE.match(text)
    if match is None or not re.search(r"\d", match.group("body")):
        raise InvalidNumber(f"Not a number: {raw!r}")
    signs = match.group("lead") + match.group("sign")
    if len(signs) > 1:
        raise InvalidNumber(f"Not a number: {raw!r}")
    if signs == "-":
        negative = True

    integral, fraction = _split_separators(match.group("body"))
    number = integral or "0"
    if fraction:
        number = f"{number}.{fraction}"
    try:
        result = Decimal(number)
    except InvalidOperation as exc:
        raise InvalidNumber(f"Not a number: {raw!r}") from exc
    if negative:
        result = -result
    return result


def _split_separators(body: str) -> tuple[str, str]:
    last_comma = body.rfind(",")
    last_dot = body.rfind(".")
    if last_comma < 0 and last_dot < 0:
        return body, ""
    separator = "," if last_comma > last_dot else "."
    other = "." if separator == "," else ","
    # A separator repeated without the other one present only groups thousands.
    if body.count(separator) > 1 and other not in body:
        return body.replace(separator, ""), ""
    position = body.rfind(separator)
    integral = re.sub(r"[,.]", "", body[:position])
    return integral, body[position + 1 :]


def _from_serial(serial: Decimal | float | int, raw: object) -> date:
    days = int(serial)
    if days < 1:
        raise InvalidDate(f"Spreadsheet serial out of range: {raw!r}")
    try:
        return SERIAL_EPOCH + timedelta(days=days)
    except OverflowError as exc:
        raise InvalidDate(f"Spreadsheet serial out of range: {raw!r}") from exc


def _build_date(year: int, month: int, day: int, raw: object) -> date:
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDate(f"Not a calendar date: {raw!r}") from exc


def parse_flexible_date(raw: object) -> date:
    """Parse a spreadsheet serial, ``DD/MM/YYYY``, ``DD-MM-YYYY`` or ISO date.

    When both leading tokens could be a month, the day-first regional
    convention applies. A first token above 12 is always a day; a second
    token above 12 flips the reading to month-first.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, bool):
        raise InvalidDate(f"Not a date: {raw!r}")
    if isinstance(raw, (int, float, Decimal)):
        if not math.isfinite(raw):
            raise InvalidDate(f"Not a date: {raw!r}")
        return _from_serial(raw, raw)
    if is_blank(raw):
        raise InvalidDate("Empty date")

    text = str(raw).strip()
    if _SERIAL_RE.match(text):
        return _from_serial(Decimal(text), raw)
    text = re.split(r"[\sT]", text, maxsplit=1)[0]

    iso = _ISO_RE.match(text)
    if iso:
        year, month, day = (int(part) for part in iso.groups())
        return _build_date(year, month, day, raw)

    regional = _REGIONAL_RE.match(text)
    if regional:
        first, second, year = (int(part) for part in regional.groups())
        if first <= 12 and second > 12:
            month, day = first, second
        else:
            day, month = first, second
        return _build_date(year, month, day, raw)

    raise InvalidDate(f"Unrecognized date format: {raw!r}")
