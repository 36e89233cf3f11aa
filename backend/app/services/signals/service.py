"""
Signal Service Implementation

Scatter-gather scan: one batched snapshot call, then one chart fetch per
asset run concurrently. A chart failure only neutralizes that asset's
indicators; a snapshot failure fails the whole scan.
"""

import asyncio
import logging
import math
import time
from typing import Any, Optional

from app.schemas.signals import (
    ChartSeries,
    CoinMarket,
    ScanRequest,
    ScanResponse,
    SignalResult,
)
from app.services.base import ExternalAPIError
from app.services.indicators import IndicatorService, get_indicator_service
from app.services.market_data import (
    CoinGeckoClient,
    get_market_data_client,
    resolve_coin_ids,
)
from app.services.signals.interface import SignalServiceInterface

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def _to_float(value: Any, default: float = 0.0) -> float:
    """Numeric field from a provider payload; missing or junk -> default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def parse_market(row: dict[str, Any]) -> CoinMarket:
    """Normalize one /coins/markets row."""
    symbol = str(row.get("symbol") or "").lower()
    return CoinMarket(
        id=str(row.get("id") or ""),
        symbol=symbol,
        name=str(row.get("name") or symbol.upper()),
        price=_to_float(row.get("current_price")),
        market_cap=_to_float(row.get("market_cap")),
        vol_24h=_to_float(row.get("total_volume")),
        change_24h=_to_float(row.get("price_change_percentage_24h")),
    )


def _sample_values(points: Any, field: str) -> list[float]:
    """Second element of each [timestamp, value] pair, finite values only."""
    if points is None:
        return []
    if not isinstance(points, list):
        raise ValueError(f"Malformed chart field '{field}'")

    values = []
    for point in points:
        if not isinstance(point, (list, tuple)) or len(point) < 2:
            continue
        value = _to_float(point[1], default=math.nan)
        if math.isfinite(value):
            values.append(value)
    return values


def parse_chart(payload: dict[str, Any]) -> ChartSeries:
    """Normalize a /coins/{id}/market_chart payload."""
    return ChartSeries(
        prices=_sample_values(payload.get("prices"), "prices"),
        volumes=_sample_values(payload.get("total_volumes"), "total_volumes"),
    )


class SignalService(SignalServiceInterface):
    """
    Signal aggregation service.

    Usage:
        service = get_signal_service()
        response = await service.execute(ScanRequest.from_csv("btc,eth"))
    """

    def __init__(
        self,
        client: Optional[CoinGeckoClient] = None,
        indicator_service: Optional[IndicatorService] = None,
    ):
        self._client = client or get_market_data_client()
        self._indicators = indicator_service or get_indicator_service()

    @property
    def name(self) -> str:
        return "SignalService"

    async def execute(self, input_data: ScanRequest) -> ScanResponse:
        symbols = input_data.symbols
        coin_ids = resolve_coin_ids(symbols)

        if not coin_ids:
            logger.info(f"No supported symbols in {symbols}, skipping upstream")
            return ScanResponse(symbols=symbols, data=[], ts=now_ms())

        rows = await self._client.get_markets(coin_ids)
        markets = []
        for row in rows:
            if not isinstance(row, dict):
                raise ExternalAPIError(self.name, "Unexpected markets row")
            markets.append(parse_market(row))

        # Each task owns its result slot; gather keeps snapshot order
        results = await asyncio.gather(*(self.score_market(m) for m in markets))

        logger.info(
            f"Scanned {len(results)} assets for {','.join(symbols)} "
            f"({len(symbols) - len(coin_ids)} unsupported)"
        )
        return ScanResponse(symbols=symbols, data=list(results), ts=now_ms())

    async def score_market(self, market: CoinMarket) -> SignalResult:
        try:
            payload = await self._client.get_market_chart(market.id)
            series = parse_chart(payload)
        except Exception as e:
            logger.warning(f"Chart unavailable for {market.id or market.symbol}: {e}")
            series = ChartSeries()

        indicators = self._indicators.score_series(market.change_24h, series)
        vol_ratio = indicators.vol_ratio
        vol_ratio = round(vol_ratio, 2) if math.isfinite(vol_ratio) else 1.0

        return SignalResult(
            id=market.id,
            symbol=market.symbol,
            name=market.name,
            price=market.price,
            market_cap=market.market_cap,
            vol_24h=market.vol_24h,
            change_24h=market.change_24h,
            rsi14=indicators.rsi14,
            vol_ratio=vol_ratio,
            score=indicators.score,
            stance=indicators.stance,
            tone=indicators.tone,
            ts=now_ms(),
        )

    async def health_check(self) -> bool:
        return await self._client.health_check()


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
