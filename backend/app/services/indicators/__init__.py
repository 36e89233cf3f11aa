"""
Indicator Engine Service

CONTRACT:
    Input:  CoinMarket + ChartSeries
    Output: IndicatorSnapshot

RESPONSIBILITIES:
    - RSI(14), Wilder smoothing
    - Volume ratio (latest vs. trailing 9-sample mean)
    - Composite 0-100 bull score
    - Stance label and tone

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from app.services.indicators.interface import IndicatorServiceInterface
from app.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
