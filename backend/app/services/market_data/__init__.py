"""
Market Data Service

Fetches crypto market snapshots and hourly chart history from CoinGecko
and exposes the static ticker -> coin id table.
"""

from app.services.market_data.client import (
    CoinGeckoClient,
    get_market_data_client,
    close_market_data_client,
)
from app.services.market_data.symbols import (
    SYMBOL_TO_COINGECKO_ID,
    get_coin_id,
    resolve_coin_ids,
    get_supported_symbols,
)

__all__ = [
    "CoinGeckoClient",
    "get_market_data_client",
    "close_market_data_client",
    "SYMBOL_TO_COINGECKO_ID",
    "get_coin_id",
    "resolve_coin_ids",
    "get_supported_symbols",
]
