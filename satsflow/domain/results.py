"""Domain-level results for ingestion and aggregation."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Sequence

from .models import Currency, InvestmentRecord, Period, RowError


@dataclass(frozen=True)
class IngestionResult:
    accepted: Sequence[InvestmentRecord] = field(default_factory=tuple)
    rejected: Sequence[RowError] = field(default_factory=tuple)

    @property
    def total_rows(self) -> int:
        return len(self.accepted) + len(self.rejected)

    def has_rejections(self) -> bool:
        return bool(self.rejected)

    def date_range(self) -> tuple[date, date] | None:
        if not self.accepted:
            return None
        dates = [record.date for record in self.accepted]
        return min(dates), max(dates)


@dataclass(frozen=True)
class AggregationResult:
    """Portfolio metrics for one period and currency.

    A ``0`` in ``weighted_average_rate``, ``cost_per_btc`` or
    ``percent_change`` means "no data for this period"; check
    ``purchase_count`` before showing it as a price.
    """

    period: Period
    currency: Currency
    total_btc: Decimal
    total_invested: Decimal
    weighted_average_rate: Decimal
    current_value: Decimal
    percent_change: Decimal
    cost_per_btc: Decimal = Decimal("0")
    purchase_count: int = 0

    @property
    def has_purchases(self) -> bool:
        return self.purchase_count > 0
