import asyncio

import pytest

from app.services.base import ExternalAPIError


def make_chart(prices, volumes, start_ms=1_700_000_000_000, step_ms=3_600_000):
    """Build a market_chart payload from plain sample lists."""
    return {
        "prices": [[start_ms + i * step_ms, p] for i, p in enumerate(prices)],
        "total_volumes": [[start_ms + i * step_ms, v] for i, v in enumerate(volumes)],
    }


def make_market(coin_id, symbol, name, price, change_24h, market_cap=1e9, volume=1e8):
    return {
        "id": coin_id,
        "symbol": symbol,
        "name": name,
        "current_price": price,
        "market_cap": market_cap,
        "total_volume": volume,
        "price_change_percentage_24h": change_24h,
    }


class FakeMarketClient:
    """In-memory stand-in for CoinGeckoClient."""

    name = "CoinGeckoClient"

    def __init__(
        self,
        markets,
        charts,
        fail_markets=False,
        failing_charts=(),
        delays=None,
        markets_error=None,
        raw_markets=None,
        healthy=True,
    ):
        self.markets = markets
        self.charts = charts
        self.fail_markets = fail_markets
        self.failing_charts = set(failing_charts)
        self.delays = delays or {}
        self.markets_error = markets_error
        self.raw_markets = raw_markets
        self.healthy = healthy
        self.market_calls = []
        self.chart_calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_markets(self, coin_ids):
        self.market_calls.append(list(coin_ids))
        if self.fail_markets:
            raise ExternalAPIError(self.name, "Upstream 503", {"status": 503})
        if self.markets_error is not None:
            raise self.markets_error
        if self.raw_markets is not None:
            return self.raw_markets
        return [row for row in self.markets if row["id"] in coin_ids]

    async def get_market_chart(self, coin_id):
        self.chart_calls.append(coin_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(coin_id, 0))
            if coin_id in self.failing_charts:
                raise ExternalAPIError(self.name, "Upstream 429", {"status": 429})
            return self.charts[coin_id]
        finally:
            self.in_flight -= 1

    async def health_check(self):
        return self.healthy


@pytest.fixture
def rising_chart():
    prices = [100 + i * 0.5 + (i % 3) * 0.2 for i in range(48)]
    volumes = [1_000.0] * 47 + [2_500.0]
    return make_chart(prices, volumes)


@pytest.fixture
def falling_chart():
    prices = [200 - i * 0.8 + (i % 4) * 0.3 for i in range(48)]
    volumes = [900.0 + (i % 5) * 10 for i in range(48)]
    return make_chart(prices, volumes)


@pytest.fixture
def markets():
    return [
        make_market("bitcoin", "btc", "Bitcoin", 67_000.0, 2.5, market_cap=1.3e12, volume=3.1e10),
        make_market("ethereum", "eth", "Ethereum", 3_400.0, -1.0, market_cap=4.1e11, volume=1.5e10),
        make_market("solana", "sol", "Solana", 150.0, 6.0, market_cap=7.0e10, volume=3.0e9),
    ]


@pytest.fixture
def fake_client_factory(markets, rising_chart, falling_chart):
    def factory(**kwargs):
        charts = {
            "bitcoin": rising_chart,
            "ethereum": falling_chart,
            "solana": rising_chart,
        }
        return FakeMarketClient(markets, charts, **kwargs)

    return factory
