"""Storage helpers for import alias tables.

The shipped vocabularies in ``satsflow.alias_defaults`` can be extended per
installation with a JSON file. Lists from the file are appended after the
defaults, so shipped aliases keep their priority.
"""
from __future__ import annotations

from pathlib import Path
import json
from typing import Any

from satsflow import alias_defaults
from satsflow.domain.text import normalize_token


DEFAULT_PATH = Path(__file__).resolve().parents[3] / "alias_override.json"

LIST_KEYS = ("sats_aliases", "exchange_names", "p2p_phrases")
MAPPING_KEYS = ("column_aliases", "currency_tokens")


def _normalize_list(raw: Any) -> list[str]:
    if not isinstance(raw, (list, tuple)):
        return []
    normalized: list[str] = []
    for item in raw:
        token = normalize_token(item)
        if token and token not in normalized:
            normalized.append(token)
    return normalized


def _normalize_mapping(raw: Any) -> dict[str, list[str]]:
    normalized: dict[str, list[str]] = {}
    if not isinstance(raw, dict):
        return normalized
    for key, values in raw.items():
        if key is None:
            continue
        key_str = str(key).strip()
        if not key_str:
            continue
        normalized[key_str] = _normalize_list(values)
    return normalized


def _normalize_tables(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    tables: dict[str, Any] = {}
    for key in LIST_KEYS:
        if key in raw:
            tables[key] = _normalize_list(raw[key])
    for key in MAPPING_KEYS:
        if key in raw:
            tables[key] = _normalize_mapping(raw[key])
    return tables


def _defaults() -> dict[str, Any]:
    return _normalize_tables(
        {
            "column_aliases": alias_defaults.column_aliases,
            "sats_aliases": alias_defaults.sats_aliases,
            "exchange_names": alias_defaults.exchange_names,
            "p2p_phrases": alias_defaults.p2p_phrases,
            "currency_tokens": alias_defaults.currency_tokens,
        }
    )


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = {key: (dict(value) if isinstance(value, dict) else list(value)) for key, value in base.items()}
    for key in LIST_KEYS:
        for token in override.get(key, []):
            if token not in merged[key]:
                merged[key].append(token)
    for key in MAPPING_KEYS:
        for name, tokens in override.get(key, {}).items():
            current = list(merged[key].get(name, []))
            current.extend(token for token in tokens if token not in current)
            merged[key][name] = current
    return merged


def load_aliases(path: Path | None = None) -> dict[str, Any]:
    override_path = path or DEFAULT_PATH
    defaults = _defaults()
    if not override_path.exists():
        return defaults
    try:
        data = json.loads(override_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return defaults
    return _merge(defaults, _normalize_tables(data))


def save_aliases(tables: dict[str, Any], path: Path | None = None) -> dict[str, Any]:
    override_path = path or DEFAULT_PATH
    normalized = _normalize_tables(tables)
    override_path.write_text(
        json.dumps(normalized, ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return _merge(_defaults(), normalized)
