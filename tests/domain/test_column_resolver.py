import pytest

from satsflow.domain.columns import ColumnResolver, resolve_columns
from satsflow.domain.models import BtcUnit, FieldRole
from satsflow.errors import MissingRequiredColumn


def test_resolves_portuguese_headers():
    mapping = resolve_columns(["Data", "Valor Investido", "Bitcoin", "Origem"])

    assert mapping.header_for(FieldRole.DATE) == "Data"
    assert mapping.header_for(FieldRole.AMOUNT_INVESTED) == "Valor Investido"
    assert mapping.header_for(FieldRole.BTC_AMOUNT) == "Bitcoin"
    assert mapping.header_for(FieldRole.ORIGIN) == "Origem"
    assert mapping.header_for(FieldRole.EXCHANGE_RATE) is None
    assert mapping.btc_unit is BtcUnit.BTC


def test_matching_ignores_case_accents_and_spacing():
    mapping = resolve_columns([" DATA ", "VALOR", "BTC", "Cotação", "Câmbio"])

    assert mapping.header_for(FieldRole.EXCHANGE_RATE) == "Cotação"
    assert mapping.header_for(FieldRole.CURRENCY) == "Câmbio"


def test_first_alias_in_priority_order_wins():
    mapping = resolve_columns(["valor", "valor investido", "btc", "data"])

    assert mapping.header_for(FieldRole.AMOUNT_INVESTED) == "valor investido"


def test_english_headers():
    mapping = resolve_columns(["date", "amount", "btc amount", "rate", "currency", "source"])

    assert mapping.header_for(FieldRole.AMOUNT_INVESTED) == "amount"
    assert mapping.header_for(FieldRole.BTC_AMOUNT) == "btc amount"
    assert mapping.header_for(FieldRole.ORIGIN) == "source"


def test_sats_column_switches_unit():
    mapping = resolve_columns(["date", "amount", "Sats"])

    assert mapping.header_for(FieldRole.BTC_AMOUNT) == "Sats"
    assert mapping.btc_unit is BtcUnit.SATS


def test_missing_btc_column_names_the_role():
    with pytest.raises(MissingRequiredColumn) as excinfo:
        resolve_columns(["data", "valor", "cotacao"])

    assert excinfo.value.roles == ("btc_amount",)


def test_missing_roles_are_all_reported():
    with pytest.raises(MissingRequiredColumn) as excinfo:
        resolve_columns(["origem"])

    assert excinfo.value.roles == ("date", "amount_invested", "btc_amount")


def test_no_typo_tolerance():
    with pytest.raises(MissingRequiredColumn) as excinfo:
        resolve_columns(["dataa", "valor", "btc"])

    assert excinfo.value.roles == ("date",)


def test_custom_alias_table():
    resolver = ColumnResolver(
        aliases={"date": ["when"], "amount_invested": ["paid"], "btc_amount": ["got"]},
        sats_aliases=[],
    )

    mapping = resolver.resolve(["When", "Paid", "Got"])

    assert mapping.header_for(FieldRole.DATE) == "When"
    assert mapping.header_for(FieldRole.BTC_AMOUNT) == "Got"


def test_header_is_claimed_by_one_role_only():
    resolver = ColumnResolver(
        aliases={"date": ["data"], "amount_invested": ["amount"], "btc_amount": ["amount", "btc"]},
        sats_aliases=[],
    )

    mapping = resolver.resolve(["data", "amount", "btc"])

    assert mapping.header_for(FieldRole.AMOUNT_INVESTED) == "amount"
    assert mapping.header_for(FieldRole.BTC_AMOUNT) == "btc"
