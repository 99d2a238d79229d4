"""Application-level DTOs for imports and portfolio summaries."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping

from satsflow.domain.models import Currency, Period
from satsflow.domain.results import AggregationResult, IngestionResult


@dataclass(slots=True, frozen=True)
class ImportRequest:
    content: bytes
    filename: str


@dataclass(slots=True, frozen=True)
class ImportResponse:
    result: IngestionResult
    filename: str
    file_hash: str

    @property
    def importable(self) -> int:
        return len(self.result.accepted)


@dataclass(slots=True, frozen=True)
class SummaryRequest:
    currency: Currency = Currency.BRL
    periods: tuple[Period, ...] = (Period.MONTH, Period.YEAR, Period.ALL)
    now: date | datetime | None = None


@dataclass(slots=True, frozen=True)
class SummaryResponse:
    results: Mapping[Period, AggregationResult]
    currency: Currency
