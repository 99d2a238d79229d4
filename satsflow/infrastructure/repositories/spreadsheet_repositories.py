"""Spreadsheet-backed record repository."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from satsflow.domain.models import InvestmentRecord
from satsflow.domain.repositories import InvestmentRecordRepository
from satsflow.domain.results import IngestionResult
from satsflow.domain.services import IngestionPipeline
from satsflow.infrastructure.parsing.spreadsheet import read_spreadsheet
from satsflow.infrastructure.parsing.utils import ensure_bytes


class SpreadsheetRecordRepository(InvestmentRecordRepository):
    """Serves the accepted rows of one spreadsheet as investment records."""

    def __init__(
        self,
        source: BytesIO | Path | bytes,
        filename: str | None = None,
        pipeline: IngestionPipeline | None = None,
    ) -> None:
        if filename is None and isinstance(source, Path):
            filename = source.name
        self._source = ensure_bytes(source)
        self._filename = filename
        self._pipeline = pipeline or IngestionPipeline()
        self._result: IngestionResult | None = None

    def ingestion_result(self) -> IngestionResult:
        if self._result is None:
            table = read_spreadsheet(self._source, filename=self._filename)
            self._result = self._pipeline.ingest(table.headers, table.rows)
        return self._result

    def list_records(self) -> Sequence[InvestmentRecord]:
        return self.ingestion_result().accepted
