"""Satsflow exception hierarchy.

File-level failures abort an import; row-level failures are collected by the
ingestion pipeline and never stop the remaining rows.
"""

from __future__ import annotations

from typing import Iterable


class SatsflowError(Exception):
    """Base exception for all satsflow failures."""


class MissingRequiredColumn(SatsflowError):
    """Raised when a spreadsheet header lacks one or more required roles."""

    def __init__(self, roles: Iterable[str]) -> None:
        self.roles = tuple(roles)
        super().__init__(f"Missing required column(s): {', '.join(self.roles)}")


class RowValidationError(SatsflowError):
    """Base class for recoverable, per-row data errors."""

    kind = "InvalidRow"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidNumber(RowValidationError):
    """Raised when a cell holds no parseable decimal number."""

    kind = "InvalidNumber"


class InvalidDate(RowValidationError):
    """Raised when a cell matches no date rule or is not a real calendar date."""

    kind = "InvalidDate"


class NonPositiveAmount(RowValidationError):
    """Raised when an amount, quantity or derived rate is not strictly positive."""

    kind = "NonPositiveAmount"


class SpreadsheetReadError(SatsflowError):
    """Raised when an uploaded file cannot be turned into headers and rows."""
