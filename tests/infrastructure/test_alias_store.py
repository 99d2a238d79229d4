from pathlib import Path
import json

from satsflow.config import build_settings
from satsflow.infrastructure.storage.alias_store import load_aliases, save_aliases


def test_save_and_load_aliases(tmp_path: Path):
    path = tmp_path / "alias_override.json"
    merged = save_aliases(
        {"exchange_names": ["  Bybit "], "column_aliases": {"date": ["Dia da Compra"]}},
        path=path,
    )
    assert "bybit" in merged["exchange_names"]
    assert merged["exchange_names"][0] == "binance"
    assert merged["column_aliases"]["date"][-1] == "dia da compra"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "column_aliases": {"date": ["dia da compra"]},
        "exchange_names": ["bybit"],
    }

    loaded = load_aliases(path=path)
    assert loaded == merged


def test_missing_or_invalid_override_falls_back_to_defaults(tmp_path: Path):
    defaults = load_aliases(path=tmp_path / "absent.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    assert load_aliases(path=broken) == defaults
    assert "p2p satisfaction" in defaults["p2p_phrases"]


def test_override_reaches_settings(tmp_path: Path):
    path = tmp_path / "alias_override.json"
    tables = save_aliases({"sats_aliases": ["Satoshi"]}, path=path)

    settings = build_settings(tables)

    assert "satoshi" in settings.sats_aliases
    assert "sats" in settings.sats_aliases
