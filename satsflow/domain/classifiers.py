"""Closed rule tables mapping free-text categorical cells to enumerations.

Rules are evaluated in order and the first one that yields a value wins.
Nothing here is fuzzy: a misclassified origin would silently move a record
in or out of the average-cost computation.
"""
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable, Iterable, Mapping, Sequence

from satsflow.config import SETTINGS
from satsflow.logging_config import get_logger

from .models import PRIMARY_CURRENCY, Currency, Origin
from .text import normalize_token

logger = get_logger(__name__)


@dataclass(frozen=True)
class OriginRule:
    name: str
    match: Callable[[str], Origin | None]


def _phrase_rule(phrases: Sequence[str]) -> OriginRule:
    patterns = [
        re.compile(rf"(?<![\w-]){re.escape(normalize_token(phrase))}(?![\w-])")
        for phrase in phrases
        if normalize_token(phrase)
    ]

    def match(token: str) -> Origin | None:
        if any(pattern.search(token) for pattern in patterns):
            return Origin.PEER_TO_PEER
        return None

    return OriginRule("p2p_phrase", match)


def _membership_rule(exchange_names: Iterable[str]) -> OriginRule:
    names = frozenset(normalize_token(name) for name in exchange_names)

    def match(token: str) -> Origin | None:
        return Origin.EXCHANGE if token in names else None

    return OriginRule("known_exchange", match)


def _canonical_rule() -> OriginRule:
    tokens = {origin.value: origin for origin in Origin}

    def match(token: str) -> Origin | None:
        return tokens.get(token)

    return OriginRule("canonical_token", match)


def _default_rule() -> OriginRule:
    return OriginRule("default", lambda token: Origin.EXCHANGE)


class OriginClassifier:
    """P2P phrase, then known exchange, then canonical token, then default."""

    def __init__(
        self,
        p2p_phrases: Sequence[str] | None = None,
        exchange_names: Iterable[str] | None = None,
    ) -> None:
        self.rules: tuple[OriginRule, ...] = (
            _phrase_rule(p2p_phrases if p2p_phrases is not None else SETTINGS.p2p_phrases),
            _membership_rule(exchange_names if exchange_names is not None else SETTINGS.exchange_names),
            _canonical_rule(),
            _default_rule(),
        )

    def classify(self, raw: object) -> Origin:
        token = _fold_cell(raw)
        for rule in self.rules:
            result = rule.match(token)
            if result is not None:
                return result
        return Origin.EXCHANGE


class CurrencyClassifier:
    def __init__(self, tokens: Mapping[str, Iterable[str]] | None = None) -> None:
        source = tokens if tokens is not None else SETTINGS.currency_tokens
        self._table: dict[str, Currency] = {}
        for code, aliases in source.items():
            if code.upper() not in Currency.__members__:
                continue
            currency = Currency[code.upper()]
            self._table[normalize_token(code)] = currency
            for alias in aliases:
                self._table.setdefault(normalize_token(alias), currency)

    def classify(self, raw: object) -> Currency:
        """Map a currency cell to a Currency; blank cells are the primary currency.

        An unrecognised non-blank value also falls back to the primary
        currency and emits ``currency_defaulted``.
        """
        token = _fold_cell(raw)
        currency = self._table.get(token)
        if currency is not None:
            return currency
        if token:
            logger.warning("currency_defaulted", value=token, currency=PRIMARY_CURRENCY.value)
        return PRIMARY_CURRENCY


def _fold_cell(raw: object) -> str:
    if raw is None or (isinstance(raw, float) and raw != raw):
        return ""
    return normalize_token(raw)
