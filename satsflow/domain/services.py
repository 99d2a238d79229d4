"""Ingestion pipeline turning raw spreadsheet rows into investment records."""
from __future__ import annotations

from typing import Sequence

from satsflow.errors import RowValidationError
from satsflow.logging_config import get_logger

from .classifiers import CurrencyClassifier, OriginClassifier
from .columns import ColumnMapping, ColumnResolver
from .models import InvestmentRecord, RawRow, RowError
from .results import IngestionResult
from .validation import RecordValidator, RowCells

logger = get_logger(__name__)


class IngestionPipeline:
    """Resolves columns once per file, then validates every row independently.

    A missing required column aborts the whole file. A bad row is reported in
    ``rejected`` and never blocks the rows around it. Re-ingesting the same
    rows yields duplicate records; identity belongs to the persistence layer.
    """

    def __init__(
        self,
        resolver: ColumnResolver | None = None,
        origin_classifier: OriginClassifier | None = None,
        currency_classifier: CurrencyClassifier | None = None,
        validator: RecordValidator | None = None,
    ) -> None:
        self._resolver = resolver or ColumnResolver()
        self._origins = origin_classifier or OriginClassifier()
        self._currencies = currency_classifier or CurrencyClassifier()
        self._validator = validator or RecordValidator()

    def ingest(self, headers: Sequence[str], rows: Sequence[RawRow]) -> IngestionResult:
        logger.info("ingestion_started", columns=len(headers), rows=len(rows))
        mapping = self._resolver.resolve(headers)
        logger.info(
            "columns_resolved",
            roles=sorted(role.value for role in mapping.columns),
            btc_unit=mapping.btc_unit.value,
        )
        return self.process(mapping, rows)

    def process(self, mapping: ColumnMapping, rows: Sequence[RawRow]) -> IngestionResult:
        accepted: list[InvestmentRecord] = []
        rejected: list[RowError] = []

        for row_index, row in enumerate(rows, start=1):
            try:
                accepted.append(self._build_record(mapping, row, row_index))
            except RowValidationError as exc:
                rejected.append(
                    RowError(row_index=row_index, reason=str(exc), kind=exc.kind, field=exc.field)
                )
                logger.warning("row_rejected", row_index=row_index, kind=exc.kind, field=exc.field)

        result = IngestionResult(accepted=tuple(accepted), rejected=tuple(rejected))
        span = result.date_range()
        logger.info(
            "ingestion_completed",
            accepted=len(accepted),
            rejected=len(rejected),
            first_date=span[0].isoformat() if span else None,
            last_date=span[1].isoformat() if span else None,
        )
        return result

    def _build_record(self, mapping: ColumnMapping, row: RawRow, row_index: int) -> InvestmentRecord:
        cells = RowCells.from_row(row, mapping)
        origin = self._origins.classify(cells.origin)
        currency = self._currencies.classify(cells.currency)
        return self._validator.validate(
            cells,
            origin=origin,
            currency=currency,
            btc_unit=mapping.btc_unit,
            row_index=row_index,
        )


def ingest(headers: Sequence[str], rows: Sequence[RawRow]) -> IngestionResult:
    return IngestionPipeline().ingest(headers, rows)
