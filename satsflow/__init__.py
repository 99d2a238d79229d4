"""Bitcoin aporte ingestion and cost-basis toolkit."""
from satsflow.application.use_cases import (
    ImportSpreadsheetUseCase,
    PortfolioSummaryContext,
    PortfolioSummaryUseCase,
)
from satsflow.domain.aggregation import (
    CostBasisAggregator,
    aggregate,
    distribution_by_origin,
    summarize_periods,
)
from satsflow.domain.models import (
    Currency,
    CurrentRate,
    InvestmentRecord,
    Origin,
    Period,
    RegistrationSource,
    RowError,
)
from satsflow.domain.results import AggregationResult, IngestionResult
from satsflow.domain.services import IngestionPipeline, ingest

__all__ = [
    "ImportSpreadsheetUseCase",
    "PortfolioSummaryContext",
    "PortfolioSummaryUseCase",
    "CostBasisAggregator",
    "aggregate",
    "distribution_by_origin",
    "summarize_periods",
    "Currency",
    "CurrentRate",
    "InvestmentRecord",
    "Origin",
    "Period",
    "RegistrationSource",
    "RowError",
    "AggregationResult",
    "IngestionResult",
    "IngestionPipeline",
    "ingest",
]
