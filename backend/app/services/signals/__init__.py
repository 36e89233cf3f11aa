"""
Signal Service

CONTRACT:
    Input:  ScanRequest
    Output: ScanResponse

RESPONSIBILITIES:
    - Resolve tickers to provider ids (unsupported ones are dropped)
    - Fetch one batched market snapshot
    - Fetch and score each asset's chart concurrently
    - Contain per-asset failures; surface snapshot failures
"""

from app.services.signals.interface import SignalServiceInterface
from app.services.signals.service import (
    SignalService,
    get_signal_service,
    parse_chart,
    parse_market,
)

__all__ = [
    "SignalServiceInterface",
    "SignalService",
    "get_signal_service",
    "parse_chart",
    "parse_market",
]
