from datetime import date, datetime, timezone
from decimal import Decimal
import hashlib

import pytest

from satsflow.application.dto import ImportRequest, SummaryRequest
from satsflow.application.use_cases import (
    ImportSpreadsheetUseCase,
    PortfolioSummaryContext,
    PortfolioSummaryUseCase,
)
from satsflow.domain.aggregation import CostBasisAggregator
from satsflow.domain.models import (
    Currency,
    CurrentRate,
    InvestmentRecord,
    Origin,
    Period,
    RegistrationSource,
)
from satsflow.errors import MissingRequiredColumn

CSV = (
    "Data;Valor Investido;Bitcoin;Origem\n"
    "05/01/2024;1.000,00;0,01;Binance\n"
    "20/01/2024;500,00;0,004;P2P Satisfaction\n"
    "21/01/2024;-5,00;0,001;Binance\n"
).encode("utf-8")


class FakeRecordRepository:
    def __init__(self, records: list[InvestmentRecord]) -> None:
        self._records = records

    def list_records(self) -> list[InvestmentRecord]:
        return self._records


class FakeRateProvider:
    def __init__(self, rate: CurrentRate) -> None:
        self._rate = rate

    def current_rate(self) -> CurrentRate:
        return self._rate


def test_import_use_case_reports_accepted_and_rejected_rows():
    response = ImportSpreadsheetUseCase().execute(ImportRequest(content=CSV, filename="aportes.csv"))

    assert response.importable == 2
    assert response.file_hash == hashlib.sha256(CSV).hexdigest()
    assert [record.origin for record in response.result.accepted] == [Origin.EXCHANGE, Origin.PEER_TO_PEER]
    assert response.result.rejected[0].row_index == 3


def test_import_use_case_aborts_without_required_columns():
    content = b"Data,Valor\n2024-01-05,100\n"

    with pytest.raises(MissingRequiredColumn) as excinfo:
        ImportSpreadsheetUseCase().execute(ImportRequest(content=content, filename="aportes.csv"))

    assert excinfo.value.roles == ("btc_amount",)


def test_summary_use_case_aggregates_each_requested_period():
    records = [
        InvestmentRecord(
            date=date(2024, 1, 5),
            amount_invested=Decimal("1000"),
            btc_amount=Decimal("0.01"),
            exchange_rate=Decimal("100000"),
            currency=Currency.BRL,
            origin=Origin.EXCHANGE,
            registration_source=RegistrationSource.MANUAL,
        ),
        InvestmentRecord(
            date=date(2023, 3, 5),
            amount_invested=Decimal("800"),
            btc_amount=Decimal("0.02"),
            exchange_rate=Decimal("40000"),
            currency=Currency.BRL,
            origin=Origin.EXCHANGE,
            registration_source=RegistrationSource.SPREADSHEET,
        ),
    ]
    rate = CurrentRate(
        primary=Decimal("200000"),
        secondary=Decimal("40000"),
        as_of=datetime(2024, 1, 31, tzinfo=timezone.utc),
    )
    context = PortfolioSummaryContext(
        record_repository=FakeRecordRepository(records),
        rate_provider=FakeRateProvider(rate),
        aggregator=CostBasisAggregator(),
    )

    response = PortfolioSummaryUseCase(context).execute(SummaryRequest(currency=Currency.BRL))

    assert set(response.results) == set(Period)
    assert response.results[Period.MONTH].total_invested == Decimal("1000")
    assert response.results[Period.ALL].total_invested == Decimal("1800")
    assert response.results[Period.ALL].current_value == Decimal("6000")
    assert response.currency is Currency.BRL

    usd = PortfolioSummaryUseCase(context).execute(
        SummaryRequest(currency=Currency.USD, periods=(Period.YEAR,), now=date(2023, 6, 1))
    )
    assert list(usd.results) == [Period.YEAR]
    assert usd.results[Period.YEAR].total_invested == Decimal("160")
