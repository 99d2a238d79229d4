# Shipped header aliases and categorical vocabularies for spreadsheet imports.
# Order matters: the first alias found in a header set wins.

column_aliases = {
    "date": [
        "data",
        "date",
        "data_aporte",
        "data aporte",
        "data do aporte",
        "dt",
    ],
    "amount_invested": [
        "valor investido",
        "valor_investido",
        "valor",
        "investimento",
        "investimento (brl)",
        "amount invested",
        "amount",
        "value",
    ],
    "btc_amount": [
        "bitcoin",
        "btc",
        "quantidade btc",
        "quantidade",
        "quantia",
        "btc amount",
        "sats",
        "satoshis",
    ],
    "exchange_rate": [
        "cotacao",
        "cotacao btc",
        "preco",
        "preco btc",
        "preco_btc",
        "rate",
        "exchange rate",
        "exchange",
    ],
    "currency": [
        "moeda",
        "currency",
        "coin",
        "cambio",
    ],
    "origin": [
        "origem",
        "origem do aporte",
        "origin",
        "source",
        "tipo",
        "type",
    ],
    "note": [
        "observacao",
        "obs",
        "note",
        "notes",
    ],
}

# Aliases of the btc_amount role whose values are expressed in satoshis.
sats_aliases = [
    "sats",
    "satoshis",
]

exchange_names = [
    "binance",
    "coinbase",
    "okx",
    "crypto.com",
    "mercado bitcoin",
    "foxbit",
    "novadax",
    "bitget",
    "coinext",
    "ripio",
    "kraken",
    "bitso",
]

p2p_phrases = [
    "p2p satisfaction",
    "satisfaction",
    "p2p",
    "peer-to-peer",
    "peer to peer",
    "peer",
    "pessoa-pessoa",
    "pessoal",
    "bisq",
    "hodlhodl",
    "robosats",
]

currency_tokens = {
    "USD": ["usd", "us$", "$", "dolar", "dollar"],
    "BRL": ["brl", "r$", "real", "reais"],
}
