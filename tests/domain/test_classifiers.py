import pytest
from structlog.testing import capture_logs

from satsflow.domain.classifiers import CurrencyClassifier, OriginClassifier
from satsflow.domain.models import Currency, Origin


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("P2P Satisfaction", Origin.PEER_TO_PEER),
        ("compra via Bisq", Origin.PEER_TO_PEER),
        ("p2p", Origin.PEER_TO_PEER),
        ("Binance", Origin.EXCHANGE),
        ("Mercado Bitcoin", Origin.EXCHANGE),
        ("crypto.com", Origin.EXCHANGE),
        ("corretora", Origin.EXCHANGE),
        ("planilha", Origin.SPREADSHEET),
        ("Ajuste", Origin.ADJUSTMENT),
        ("loja da esquina", Origin.EXCHANGE),
        ("", Origin.EXCHANGE),
        (None, Origin.EXCHANGE),
        (float("nan"), Origin.EXCHANGE),
    ],
)
def test_origin_classification(raw, expected):
    assert OriginClassifier().classify(raw) is expected


def test_rules_are_ordered_and_named():
    classifier = OriginClassifier()

    assert [rule.name for rule in classifier.rules] == [
        "p2p_phrase",
        "known_exchange",
        "canonical_token",
        "default",
    ]


def test_p2p_phrase_beats_exchange_membership():
    classifier = OriginClassifier(p2p_phrases=["binance p2p"], exchange_names=["binance p2p"])

    assert classifier.classify("Binance P2P") is Origin.PEER_TO_PEER


def test_phrase_must_match_whole_words():
    classifier = OriginClassifier(p2p_phrases=["peer"], exchange_names=[])

    assert classifier.classify("peerless exchange") is Origin.EXCHANGE


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("USD", Currency.USD),
        ("US$", Currency.USD),
        ("Dólar", Currency.USD),
        ("$", Currency.USD),
        ("R$", Currency.BRL),
        ("brl", Currency.BRL),
        ("EUR", Currency.BRL),
        ("", Currency.BRL),
        (None, Currency.BRL),
    ],
)
def test_currency_classification(raw, expected):
    assert CurrencyClassifier().classify(raw) is expected


def test_unknown_currency_falls_back_with_an_event():
    with capture_logs() as logs:
        currency = CurrencyClassifier().classify("EUR")

    assert currency is Currency.BRL
    assert logs == [
        {"event": "currency_defaulted", "value": "eur", "currency": "BRL", "log_level": "warning"}
    ]


def test_blank_currency_defaults_silently():
    with capture_logs() as logs:
        assert CurrencyClassifier().classify("") is Currency.BRL
        assert CurrencyClassifier().classify("R$") is Currency.BRL

    assert logs == []
