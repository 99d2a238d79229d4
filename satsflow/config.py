"""Central configuration for the satsflow package."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal

from satsflow.infrastructure.storage.alias_store import load_aliases

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_EXTENSIONS = (".csv", ".xlsx", ".xls")


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    rate_tolerance: Decimal
    max_upload_bytes: int
    allowed_extensions: tuple[str, ...]
    column_aliases: dict[str, tuple[str, ...]]
    sats_aliases: frozenset[str]
    exchange_names: frozenset[str]
    p2p_phrases: tuple[str, ...]
    currency_tokens: dict[str, frozenset[str]]


def build_settings(tables: dict | None = None) -> Settings:
    tables = tables if tables is not None else load_aliases()
    return Settings(
        decimal_context=Context(prec=28),
        rate_tolerance=Decimal("0.01"),
        max_upload_bytes=MAX_UPLOAD_BYTES,
        allowed_extensions=ALLOWED_EXTENSIONS,
        column_aliases={role: tuple(aliases) for role, aliases in tables["column_aliases"].items()},
        sats_aliases=frozenset(tables["sats_aliases"]),
        exchange_names=frozenset(tables["exchange_names"]),
        p2p_phrases=tuple(tables["p2p_phrases"]),
        currency_tokens={code: frozenset(tokens) for code, tokens in tables["currency_tokens"].items()},
    )


SETTINGS = build_settings()
