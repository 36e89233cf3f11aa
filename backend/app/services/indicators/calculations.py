"""
Technical Indicator Calculations

Pure Python/NumPy implementations of the scan indicators.
All math is deterministic; every call re-derives from its input series.
"""

import math
from typing import Optional, Sequence

import numpy as np

from app.schemas.signals import Stance, Tone

RSI_PERIOD = 14
RSI_MIN_SAMPLES = RSI_PERIOD + 2

VOLUME_MIN_SAMPLES = 10
VOLUME_LOOKBACK = 9

# Stand-in for an infinite gain/loss ratio when there are no losses
ZERO_LOSS_RATIO = 100.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# =============================================================================
# MOMENTUM
# =============================================================================


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    rs = ZERO_LOSS_RATIO if avg_loss == 0 else avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def rsi14(closes: Sequence[float]) -> Optional[float]:
    """
    Wilder-smoothed RSI(14) of a chronological close series.

    Returns None with fewer than 16 samples: 14 deltas seed the averages and
    at least one more confirms them.
    """
    if len(closes) < RSI_MIN_SAMPLES:
        return None

    deltas = np.diff(np.asarray(closes, dtype=float))
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # Seed from the first 14 deltas
    avg_gain = float(np.sum(gains[:RSI_PERIOD])) / RSI_PERIOD
    avg_loss = float(np.sum(losses[:RSI_PERIOD])) / RSI_PERIOD
    value = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(RSI_PERIOD, len(deltas)):
        avg_gain = (avg_gain * (RSI_PERIOD - 1) + gains[i]) / RSI_PERIOD
        avg_loss = (avg_loss * (RSI_PERIOD - 1) + losses[i]) / RSI_PERIOD
        value = _rsi_from_averages(avg_gain, avg_loss)

    return clamp(float(value), 0.0, 100.0)


# =============================================================================
# VOLUME
# =============================================================================


def volume_ratio(volumes: Sequence[float]) -> float:
    """Latest volume sample vs. the mean of the 9 samples before it."""
    ratio = 1.0
    if len(volumes) < VOLUME_MIN_SAMPLES:
        return ratio

    data = np.asarray(volumes, dtype=float)
    trailing = float(np.mean(data[-(VOLUME_LOOKBACK + 1):-1]))
    if trailing > 0:
        ratio = float(data[-1]) / trailing
    return ratio


# =============================================================================
# COMPOSITE SCORE
# =============================================================================


def _rsi_term(rsi: float) -> float:
    # 50-65 is a healthy trend, >80 is overheated, 75-80 is left neutral
    if 50 <= rsi <= 65:
        return 18
    if 65 < rsi <= 75:
        return 8
    if rsi < 40:
        return -12
    if rsi > 80:
        return -10
    return 0


def bull_score(change_24h: float, rsi: Optional[float], vol_ratio: float) -> int:
    """
    Composite 0-100 bull score.

    50 base, +/-22 from 24h momentum, RSI band bonus/penalty when RSI is
    known, and a -12..+18 volume pop term.
    """
    score = 50.0
    score += clamp(change_24h, -10, 10) * 2.2

    if rsi is not None:
        score += _rsi_term(rsi)

    score += clamp((vol_ratio - 1) * 20, -12, 18)

    # Halves round up
    return int(clamp(math.floor(score + 0.5), 0, 100))


def stance_from_score(score: int) -> tuple[Stance, Tone]:
    if score >= 75:
        return Stance.BULLISH, Tone.GOOD
    if score >= 55:
        return Stance.UPTREND, Tone.WARN
    return Stance.RISK_CHOP, Tone.BAD
