"""
Oracle Vision Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from app.schemas.signals import (
    Stance,
    Tone,
    ScanRequest,
    CoinMarket,
    ChartSeries,
    IndicatorSnapshot,
    SignalResult,
    ScanResponse,
    ScanError,
)

__all__ = [
    "Stance",
    "Tone",
    "ScanRequest",
    "CoinMarket",
    "ChartSeries",
    "IndicatorSnapshot",
    "SignalResult",
    "ScanResponse",
    "ScanError",
]
