"""
Indicator Engine Service Implementation

Reduces chart series to RSI / volume ratio and scores the asset.
Pure Python/NumPy calculations.
"""

from typing import Optional

from app.schemas.signals import ChartSeries, CoinMarket, IndicatorSnapshot
from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.calculations import (
    rsi14,
    volume_ratio,
    bull_score,
    stance_from_score,
)


class IndicatorService(IndicatorServiceInterface):
    """Indicator Engine Service."""

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(
        self, input_data: tuple[CoinMarket, ChartSeries]
    ) -> IndicatorSnapshot:
        market, series = input_data
        return self.score_series(market.change_24h, series)

    def score_series(
        self, change_24h: float, series: ChartSeries
    ) -> IndicatorSnapshot:
        rsi = rsi14(series.prices)
        ratio = volume_ratio(series.volumes)
        return self.score_values(change_24h, rsi, ratio)

    def score_values(
        self, change_24h: float, rsi: Optional[float], vol_ratio: float
    ) -> IndicatorSnapshot:
        """Score from already-derived indicator values."""
        score = bull_score(change_24h, rsi, vol_ratio)
        stance, tone = stance_from_score(score)
        return IndicatorSnapshot(
            rsi14=rsi,
            vol_ratio=vol_ratio,
            score=score,
            stance=stance,
            tone=tone,
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
