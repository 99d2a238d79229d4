"""Text folding shared by header matching and categorical classification."""
from __future__ import annotations

import unicodedata


def normalize_token(value: object) -> str:
    """Casefold, strip accents and collapse whitespace.

    ``"  Cotação  BTC "`` and ``"cotacao btc"`` fold to the same token.
    """
    text = "" if value is None else str(value)
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.casefold().split())
