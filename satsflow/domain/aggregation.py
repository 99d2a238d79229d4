"""Cost-basis aggregation over investment records.

Balance adjustments move ``total_btc`` but never enter the average-cost
numerator or denominator. Cross-currency values are restated at the
snapshot's cross rate, not at each record's acquisition-time rate.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal, localcontext
from typing import Iterable, Mapping, Sequence

from satsflow.config import SETTINGS
from satsflow.logging_config import get_logger

from .models import Currency, CurrentRate, InvestmentRecord, Origin, Period
from .results import AggregationResult

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _reference_date(now: date | datetime | None, current_rate: CurrentRate) -> date:
    reference = now if now is not None else current_rate.as_of
    if isinstance(reference, datetime):
        return reference.date()
    return reference


def filter_by_period(
    records: Iterable[InvestmentRecord],
    period: Period | str,
    reference: date,
) -> list[InvestmentRecord]:
    period = Period(period)
    if period is Period.MONTH:
        return [
            record
            for record in records
            if record.date.year == reference.year and record.date.month == reference.month
        ]
    if period is Period.YEAR:
        return [record for record in records if record.date.year == reference.year]
    return list(records)


def conversion_factor(source: Currency, target: Currency, current_rate: CurrentRate) -> Decimal:
    """Multiplier restating ``source`` amounts in ``target`` at today's cross rate."""
    if Currency(source) is Currency(target):
        return Decimal("1")
    source_price = current_rate.price_in(source)
    if source_price == ZERO:
        logger.warning("cross_rate_unavailable", source=Currency(source).value, target=Currency(target).value)
        return ZERO
    with localcontext(SETTINGS.decimal_context):
        return current_rate.price_in(target) / source_price


def _safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == ZERO:
        return ZERO
    return numerator / denominator


class CostBasisAggregator:
    def aggregate(
        self,
        records: Sequence[InvestmentRecord],
        current_rate: CurrentRate,
        period: Period | str,
        target_currency: Currency | str,
        now: date | datetime | None = None,
    ) -> AggregationResult:
        period = Period(period)
        target = Currency(target_currency)
        reference = _reference_date(now, current_rate)
        selected = filter_by_period(records, period, reference)

        with localcontext(SETTINGS.decimal_context):
            total_btc = ZERO
            purchased_btc = ZERO
            total_invested = ZERO
            weighted_sum = ZERO
            purchases = 0
            factors: dict[Currency, Decimal] = {}

            for record in selected:
                total_btc += record.btc_amount
                if record.is_adjustment:
                    continue
                factor = factors.get(record.currency)
                if factor is None:
                    factor = factors[record.currency] = conversion_factor(record.currency, target, current_rate)
                amount = record.amount_invested * factor
                rate = record.exchange_rate * factor
                total_invested += amount
                weighted_sum += rate * amount
                purchased_btc += record.btc_amount
                purchases += 1

            current_value = total_btc * current_rate.price_in(target)
            result = AggregationResult(
                period=period,
                currency=target,
                total_btc=total_btc,
                total_invested=total_invested,
                weighted_average_rate=_safe_divide(weighted_sum, total_invested),
                current_value=current_value,
                percent_change=_safe_divide(current_value - total_invested, total_invested) * HUNDRED,
                cost_per_btc=_safe_divide(total_invested, purchased_btc),
                purchase_count=purchases,
            )

        logger.debug(
            "aggregation_completed",
            period=period.value,
            currency=target.value,
            records=len(selected),
            purchases=purchases,
        )
        return result

    def summarize_periods(
        self,
        records: Sequence[InvestmentRecord],
        current_rate: CurrentRate,
        target_currency: Currency | str,
        now: date | datetime | None = None,
    ) -> Mapping[Period, AggregationResult]:
        return {
            period: self.aggregate(records, current_rate, period, target_currency, now=now)
            for period in Period
        }


def aggregate(
    records: Sequence[InvestmentRecord],
    current_rate: CurrentRate,
    period: Period | str,
    target_currency: Currency | str,
    now: date | datetime | None = None,
) -> AggregationResult:
    return CostBasisAggregator().aggregate(records, current_rate, period, target_currency, now=now)


def summarize_periods(
    records: Sequence[InvestmentRecord],
    current_rate: CurrentRate,
    target_currency: Currency | str,
    now: date | datetime | None = None,
) -> Mapping[Period, AggregationResult]:
    return CostBasisAggregator().summarize_periods(records, current_rate, target_currency, now=now)


def distribution_by_origin(records: Iterable[InvestmentRecord]) -> dict[Origin, Decimal]:
    """Bitcoin held per origin, adjustments included."""
    totals: dict[Origin, Decimal] = defaultdict(lambda: ZERO)
    for record in records:
        totals[record.origin] += record.btc_amount
    return dict(totals)
