"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from app.services.base import BaseService
from app.schemas.signals import ChartSeries, CoinMarket, IndicatorSnapshot


class IndicatorServiceInterface(BaseService[tuple[CoinMarket, ChartSeries], IndicatorSnapshot]):
    """
    Indicator Engine Service Contract.

    INPUT: (CoinMarket, ChartSeries)
        - market: current snapshot (only change_24h is used)
        - series: hourly price/volume samples, oldest first

    OUTPUT: IndicatorSnapshot
        - rsi14, vol_ratio, score, stance, tone
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(
        self, input_data: tuple[CoinMarket, ChartSeries]
    ) -> IndicatorSnapshot:
        """Score one asset from its snapshot and chart series."""
        pass

    @abstractmethod
    def score_series(
        self, change_24h: float, series: ChartSeries
    ) -> IndicatorSnapshot:
        """
        Calculate indicators for a single asset.

        Args:
            change_24h: 24h percent price change
            series: chart samples; empty series give neutral indicators

        Returns:
            Indicator snapshot with score and stance
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
