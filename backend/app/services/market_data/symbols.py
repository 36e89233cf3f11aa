"""
Supported Symbols

Static mapping of dashboard tickers to CoinGecko coin ids.
"""

from typing import Optional

SYMBOL_TO_COINGECKO_ID: dict[str, str] = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "sol": "solana",
    "base": "base",
    "doge": "dogecoin",
    "ada": "cardano",
}


def get_coin_id(symbol: str) -> Optional[str]:
    """CoinGecko id for a ticker, or None when unsupported."""
    return SYMBOL_TO_COINGECKO_ID.get(symbol.strip().lower())


def resolve_coin_ids(symbols: list[str]) -> list[str]:
    """Map tickers to coin ids, silently dropping unsupported ones."""
    ids: list[str] = []
    for symbol in symbols:
        coin_id = get_coin_id(symbol)
        if coin_id and coin_id not in ids:
            ids.append(coin_id)
    return ids


def get_supported_symbols() -> list[dict[str, str]]:
    return [
        {"symbol": symbol, "id": coin_id}
        for symbol, coin_id in SYMBOL_TO_COINGECKO_ID.items()
    ]
