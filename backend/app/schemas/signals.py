"""
CONTRACT: Signal Scan

Input: ScanRequest
Output: ScanResponse (or ScanError on failure)

Market snapshots come from the market-data provider, chart series are reduced
to indicators, and each asset is returned as a SignalResult. Field aliases are
the camelCase names the dashboard reads.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class Stance(str, Enum):
    BULLISH = "BULLISH"
    UPTREND = "UPTREND"
    RISK_CHOP = "RISK / CHOP"


class Tone(str, Enum):
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"


# =============================================================================
# INPUT: ScanRequest
# =============================================================================


MAX_SYMBOLS = 12


class ScanRequest(BaseModel):
    """
    Request for a signal scan.
    Sent by: Scan endpoint
    Received by: Signal Service

    Symbols are trimmed, lowercased, de-duplicated (first occurrence wins)
    and capped at MAX_SYMBOLS.
    """

    symbols: list[str] = Field(
        default_factory=list,
        description="Ticker symbols to scan (e.g., ['btc', 'eth'])",
    )

    @field_validator("symbols", mode="before")
    @classmethod
    def normalize_symbols(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        seen: list[str] = []
        for raw in value or []:
            symbol = str(raw).strip().lower()
            if symbol and symbol not in seen:
                seen.append(symbol)
        return seen[:MAX_SYMBOLS]

    @classmethod
    def from_csv(cls, raw: Optional[str]) -> "ScanRequest":
        """Build a request from a comma-separated query string."""
        return cls(symbols=raw or "")


# =============================================================================
# PROVIDER DATA
# =============================================================================


class CoinMarket(BaseModel):
    """Current market snapshot for one asset (provider 'markets' row)."""

    id: str
    symbol: str
    name: str
    price: float = 0.0
    market_cap: float = 0.0
    vol_24h: float = 0.0
    change_24h: float = 0.0


class ChartSeries(BaseModel):
    """Hourly price and volume samples, oldest first."""

    prices: list[float] = Field(default_factory=list)
    volumes: list[float] = Field(default_factory=list)


class IndicatorSnapshot(BaseModel):
    """Indicator Engine output for one asset."""

    rsi14: Optional[float] = Field(default=None, ge=0, le=100)
    vol_ratio: float = 1.0
    score: int = Field(..., ge=0, le=100)
    stance: Stance
    tone: Tone


# =============================================================================
# OUTPUT: SignalResult / envelopes
# =============================================================================


class SignalResult(BaseModel):
    """One scored asset as returned to the dashboard."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str
    symbol: str
    name: str
    price: float
    market_cap: float = Field(..., alias="marketCap")
    vol_24h: float = Field(..., alias="vol24h")
    change_24h: float = Field(..., alias="change24h")
    rsi14: Optional[float] = Field(default=None, ge=0, le=100)
    vol_ratio: float = Field(default=1.0, alias="volRatio")
    score: int = Field(..., ge=0, le=100)
    stance: Stance
    tone: Tone
    ts: int = Field(..., description="Epoch milliseconds")


class ScanResponse(BaseModel):
    """Successful scan envelope."""

    ok: bool = True
    symbols: list[str]
    data: list[SignalResult]
    ts: int = Field(..., description="Epoch milliseconds")


class ScanError(BaseModel):
    """Failed scan envelope (HTTP 502)."""

    ok: bool = False
    error: str = "Scan failed"
    detail: str
