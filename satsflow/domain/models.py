"""Domain models for the aporte ingestion and cost-basis pipeline.

These dataclasses capture the canonical schema for normalized investment
records and the market snapshots they are valued against.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
import hashlib
from typing import Mapping

SATS_PER_BTC = Decimal("100000000")

# A single spreadsheet row: raw header -> raw cell value.
RawRow = Mapping[str, object]


class Currency(str, Enum):
    BRL = "BRL"
    USD = "USD"


PRIMARY_CURRENCY = Currency.BRL
SECONDARY_CURRENCY = Currency.USD


class Origin(str, Enum):
    """How a unit of bitcoin was acquired, or how a balance changed."""

    EXCHANGE = "corretora"
    PEER_TO_PEER = "p2p"
    SPREADSHEET = "planilha"
    ADJUSTMENT = "ajuste"


class RegistrationSource(str, Enum):
    """How a record entered the system, independent of its origin."""

    MANUAL = "manual"
    SPREADSHEET = "planilha"


class Period(str, Enum):
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class FieldRole(str, Enum):
    DATE = "date"
    AMOUNT_INVESTED = "amount_invested"
    BTC_AMOUNT = "btc_amount"
    EXCHANGE_RATE = "exchange_rate"
    CURRENCY = "currency"
    ORIGIN = "origin"
    NOTE = "note"


REQUIRED_ROLES = (FieldRole.DATE, FieldRole.AMOUNT_INVESTED, FieldRole.BTC_AMOUNT)


class BtcUnit(str, Enum):
    BTC = "btc"
    SATS = "sats"


@dataclass(frozen=True)
class InvestmentRecord:
    """Canonical aporte as produced by ingestion or manual entry.

    ``id`` stays ``None`` until a persistence adapter assigns one.
    """

    date: date
    amount_invested: Decimal
    btc_amount: Decimal
    exchange_rate: Decimal
    currency: Currency
    origin: Origin
    registration_source: RegistrationSource
    id: str | None = None
    note: str | None = None

    @property
    def is_adjustment(self) -> bool:
        return self.origin is Origin.ADJUSTMENT

    @property
    def sats(self) -> Decimal:
        return btc_to_sats(self.btc_amount)

    def dedup_key(self) -> tuple[date, Decimal, Decimal, Origin]:
        return (self.date, self.amount_invested, self.btc_amount, self.origin)

    def content_hash(self) -> str:
        payload = "|".join(
            [
                self.date.isoformat(),
                format(self.amount_invested.normalize(), "f"),
                format(self.btc_amount.normalize(), "f"),
                self.origin.value,
            ]
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CurrentRate:
    """Point-in-time BTC quote in both supported currencies."""

    primary: Decimal
    secondary: Decimal
    as_of: datetime

    def price_in(self, currency: Currency) -> Decimal:
        return self.primary if Currency(currency) is PRIMARY_CURRENCY else self.secondary


@dataclass(frozen=True)
class RowError:
    """A rejected spreadsheet row; ``row_index`` is 1-based over data rows."""

    row_index: int
    reason: str
    kind: str
    field: str | None = None


def btc_to_sats(btc_amount: Decimal) -> Decimal:
    return btc_amount * SATS_PER_BTC


def sats_to_btc(sats: Decimal) -> Decimal:
    return sats / SATS_PER_BTC
