"""Row validation and exchange-rate reconciliation.

A row becomes an ``InvestmentRecord`` only after its date, invested amount,
bitcoin quantity and derived rate pass in that order. The first failing
check is the one reported.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from satsflow.config import SETTINGS
from satsflow.errors import InvalidDate, InvalidNumber, NonPositiveAmount
from satsflow.logging_config import get_logger

from .columns import ColumnMapping
from .models import (
    BtcUnit,
    Currency,
    FieldRole,
    InvestmentRecord,
    Origin,
    RawRow,
    RegistrationSource,
    sats_to_btc,
)
from .normalizers import is_blank, parse_flexible_date, parse_locale_decimal

logger = get_logger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class RowCells:
    """Raw cells of one row, keyed by role instead of by header."""

    date: object
    amount_invested: object
    btc_amount: object
    exchange_rate: object = None
    currency: object = None
    origin: object = None
    note: object = None

    @classmethod
    def from_row(cls, row: RawRow, mapping: ColumnMapping) -> "RowCells":
        return cls(
            date=mapping.cell(row, FieldRole.DATE),
            amount_invested=mapping.cell(row, FieldRole.AMOUNT_INVESTED),
            btc_amount=mapping.cell(row, FieldRole.BTC_AMOUNT),
            exchange_rate=mapping.cell(row, FieldRole.EXCHANGE_RATE),
            currency=mapping.cell(row, FieldRole.CURRENCY),
            origin=mapping.cell(row, FieldRole.ORIGIN),
            note=mapping.cell(row, FieldRole.NOTE),
        )


def reconcile_rate(amount_invested: Decimal, btc_amount: Decimal) -> Decimal:
    """Price per whole bitcoin implied by an aporte."""
    with localcontext(SETTINGS.decimal_context):
        return amount_invested / btc_amount


def _parse_number(raw: object, field: str) -> Decimal:
    try:
        return parse_locale_decimal(raw)
    except InvalidNumber as exc:
        raise InvalidNumber(str(exc), field=field) from exc


class RecordValidator:
    def __init__(self, registration_source: RegistrationSource = RegistrationSource.SPREADSHEET) -> None:
        self._registration_source = registration_source

    def validate(
        self,
        cells: RowCells,
        origin: Origin,
        currency: Currency,
        btc_unit: BtcUnit = BtcUnit.BTC,
        row_index: int | None = None,
    ) -> InvestmentRecord:
        adjustment = origin is Origin.ADJUSTMENT

        try:
            entry_date = parse_flexible_date(cells.date)
        except InvalidDate as exc:
            raise InvalidDate(str(exc), field=FieldRole.DATE.value) from exc

        amount = self._amount(cells.amount_invested, adjustment)
        btc_amount = self._btc_amount(cells.btc_amount, btc_unit, adjustment)

        if adjustment and amount == ZERO:
            exchange_rate = ZERO
        else:
            exchange_rate = reconcile_rate(amount, btc_amount)
            if not exchange_rate.is_finite() or exchange_rate <= ZERO:
                raise NonPositiveAmount(
                    "Derived exchange rate must be greater than zero",
                    field=FieldRole.EXCHANGE_RATE.value,
                )
            self._check_supplied_rate(cells.exchange_rate, exchange_rate, row_index)

        note = None if is_blank(cells.note) else str(cells.note).strip()
        return InvestmentRecord(
            date=entry_date,
            amount_invested=amount,
            btc_amount=btc_amount,
            exchange_rate=exchange_rate,
            currency=currency,
            origin=origin,
            registration_source=self._registration_source,
            note=note,
        )

    @staticmethod
    def _amount(raw: object, adjustment: bool) -> Decimal:
        field = FieldRole.AMOUNT_INVESTED.value
        if adjustment and is_blank(raw):
            return ZERO
        amount = _parse_number(raw, field)
        if adjustment:
            if amount < ZERO:
                raise NonPositiveAmount("Adjustment amount cannot be negative", field=field)
        elif amount <= ZERO:
            raise NonPositiveAmount("Amount invested must be greater than zero", field=field)
        return amount

    @staticmethod
    def _btc_amount(raw: object, btc_unit: BtcUnit, adjustment: bool) -> Decimal:
        field = FieldRole.BTC_AMOUNT.value
        quantity = _parse_number(raw, field)
        if btc_unit is BtcUnit.SATS:
            with localcontext(SETTINGS.decimal_context):
                quantity = sats_to_btc(quantity)
        if adjustment:
            if quantity == ZERO:
                raise NonPositiveAmount("Adjustment bitcoin amount must be non-zero", field=field)
        elif quantity <= ZERO:
            raise NonPositiveAmount("Bitcoin amount must be greater than zero", field=field)
        return quantity

    @staticmethod
    def _check_supplied_rate(raw: object, derived: Decimal, row_index: int | None) -> None:
        if is_blank(raw):
            return
        try:
            supplied = parse_locale_decimal(raw)
        except InvalidNumber:
            logger.debug("supplied_rate_discarded", row_index=row_index, reason="unparseable")
            return
        if abs(supplied - derived) > SETTINGS.rate_tolerance:
            logger.info("supplied_rate_discarded", row_index=row_index, reason="diverges_from_derived")
