"""Repository interfaces for the collaborators the core depends on."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import CurrentRate, InvestmentRecord


class InvestmentRecordRepository(Protocol):
    """Provides already-persisted or freshly ingested investment records."""

    def list_records(self) -> Sequence[InvestmentRecord]:
        ...


class CurrentRateProvider(Protocol):
    """Provides an already-fetched market quote snapshot."""

    def current_rate(self) -> CurrentRate:
        ...
