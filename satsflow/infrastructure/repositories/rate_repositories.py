"""Rate providers for already-resolved market quotes."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from satsflow.domain.models import CurrentRate
from satsflow.domain.repositories import CurrentRateProvider
from satsflow.domain.normalizers import parse_locale_decimal


class StaticRateProvider(CurrentRateProvider):
    """Serves a fixed quote, e.g. one passed on the command line."""

    def __init__(
        self,
        primary: Decimal | str,
        secondary: Decimal | str,
        as_of: datetime | None = None,
    ) -> None:
        self._rate = CurrentRate(
            primary=parse_locale_decimal(primary),
            secondary=parse_locale_decimal(secondary),
            as_of=as_of or datetime.now(timezone.utc),
        )

    def current_rate(self) -> CurrentRate:
        return self._rate
