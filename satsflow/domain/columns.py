"""Header-to-role resolution for user-supplied spreadsheets.

Matching is exact after case and accent folding. Each role carries an
ordered alias list; the first alias present in the header set wins, and a
header claimed by an earlier role is not offered to later ones.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from satsflow.config import SETTINGS
from satsflow.errors import MissingRequiredColumn

from .models import REQUIRED_ROLES, BtcUnit, FieldRole, RawRow
from .text import normalize_token


@dataclass(frozen=True)
class ColumnMapping:
    """Resolved header for each role present in one spreadsheet."""

    columns: Mapping[FieldRole, str] = field(default_factory=dict)
    btc_unit: BtcUnit = BtcUnit.BTC

    def header_for(self, role: FieldRole) -> str | None:
        return self.columns.get(role)

    def has(self, role: FieldRole) -> bool:
        return role in self.columns

    def cell(self, row: RawRow, role: FieldRole) -> object | None:
        header = self.columns.get(role)
        if header is None:
            return None
        return row.get(header)


class ColumnResolver:
    def __init__(
        self,
        aliases: Mapping[str, Sequence[str]] | None = None,
        sats_aliases: Sequence[str] | None = None,
    ) -> None:
        source = aliases if aliases is not None else SETTINGS.column_aliases
        self._rules: tuple[tuple[FieldRole, tuple[str, ...]], ...] = tuple(
            (role, tuple(normalize_token(alias) for alias in source.get(role.value, ())))
            for role in FieldRole
        )
        sats = sats_aliases if sats_aliases is not None else SETTINGS.sats_aliases
        self._sats_aliases = frozenset(normalize_token(alias) for alias in sats)

    def resolve(self, headers: Sequence[str]) -> ColumnMapping:
        folded = [(normalize_token(header), header) for header in headers if header is not None]
        claimed: set[str] = set()
        columns: dict[FieldRole, str] = {}
        btc_unit = BtcUnit.BTC

        for role, aliases in self._rules:
            match = self._first_match(aliases, folded, claimed)
            if match is None:
                continue
            alias, header = match
            columns[role] = header
            claimed.add(header)
            if role is FieldRole.BTC_AMOUNT and alias in self._sats_aliases:
                btc_unit = BtcUnit.SATS

        missing = [role.value for role in REQUIRED_ROLES if role not in columns]
        if missing:
            raise MissingRequiredColumn(missing)
        return ColumnMapping(columns=columns, btc_unit=btc_unit)

    @staticmethod
    def _first_match(
        aliases: Sequence[str],
        folded: Sequence[tuple[str, str]],
        claimed: set[str],
    ) -> tuple[str, str] | None:
        for alias in aliases:
            for token, header in folded:
                if token == alias and header not in claimed:
                    return alias, header
        return None


def resolve_columns(headers: Sequence[str]) -> ColumnMapping:
    return ColumnResolver().resolve(headers)
