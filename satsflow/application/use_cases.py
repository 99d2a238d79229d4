"""Application services orchestrating imports and portfolio summaries."""
from __future__ import annotations

from dataclasses import dataclass

from satsflow.application.dto import (
    ImportRequest,
    ImportResponse,
    SummaryRequest,
    SummaryResponse,
)
from satsflow.domain.aggregation import CostBasisAggregator
from satsflow.domain.repositories import CurrentRateProvider, InvestmentRecordRepository
from satsflow.domain.services import IngestionPipeline
from satsflow.infrastructure.parsing.spreadsheet import read_spreadsheet
from satsflow.infrastructure.parsing.utils import compute_file_hash


class ImportSpreadsheetUseCase:
    def __init__(self, pipeline: IngestionPipeline | None = None) -> None:
        self._pipeline = pipeline or IngestionPipeline()

    def execute(self, request: ImportRequest) -> ImportResponse:
        table = read_spreadsheet(request.content, filename=request.filename)
        result = self._pipeline.ingest(table.headers, table.rows)
        return ImportResponse(
            result=result,
            filename=request.filename,
            file_hash=compute_file_hash(request.content),
        )


@dataclass(slots=True)
class PortfolioSummaryContext:
    record_repository: InvestmentRecordRepository
    rate_provider: CurrentRateProvider
    aggregator: CostBasisAggregator


class PortfolioSummaryUseCase:
    def __init__(self, context: PortfolioSummaryContext) -> None:
        self._context = context

    def execute(self, request: SummaryRequest) -> SummaryResponse:
        records = self._context.record_repository.list_records()
        current_rate = self._context.rate_provider.current_rate()
        results = {
            period: self._context.aggregator.aggregate(
                records, current_rate, period, request.currency, now=request.now
            )
            for period in request.periods
        }
        return SummaryResponse(results=results, currency=request.currency)
