"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic. Arrays are NaN-padded where an
indicator is not yet defined.
"""

import numpy as np
from typing import Optional

from chartsignal.services.base import InvalidInputError

# Relative to the price level: differences below this fraction are noise.
FLOAT_TOLERANCE = 1e-9


def _check_period(period: int, label: str = "period") -> None:
    if not isinstance(period, (int, np.integer)) or period <= 0:
        raise InvalidInputError(
            "Indicators", f"{label} must be a positive integer, got {period!r}"
        )


def _check_same_length(**arrays: np.ndarray) -> None:
    lengths = {name: len(arr) for name, arr in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise InvalidInputError(
            "Indicators", f"Price arrays differ in length: {lengths}", lengths
        )


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    _check_period(period)
    if len(data) < period:
        return np.full(len(data), np.nan)

    result = np.full(len(data), np.nan)
    for i in range(period - 1, len(data)):
        result[i] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """Exponential Moving Average, seeded with the SMA of the first period."""
    _check_period(period)
    if len(data) < period:
        return np.full(len(data), np.nan)

    result = np.full(len(data), np.nan)
    multiplier = 2 / (period + 1)

    # Start with SMA
    result[period - 1] = np.mean(data[:period])

    for i in range(period, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # No losses: pure uptrend is 100, no movement at all is the midpoint
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """Relative Strength Index with Wilder smoothing."""
    _check_period(period)
    if len(closes) < period + 1:
        return np.full(len(closes), np.nan)

    deltas = np.diff(closes)

    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = np.mean(gains[:period])
    avg_loss = np.mean(losses[:period])

    result = np.full(len(closes), np.nan)
    result[period] = _rsi_from_averages(avg_gain, avg_loss)

    # Subsequent RSI values using smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _rsi_from_averages(avg_gain, avg_loss)

    return result


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    The fast and slow EMAs are aligned on the bars where the slow EMA
    exists, so the returned arrays cover the last len(closes) - slow + 1
    bars. Until signal_period MACD values exist the signal line is their
    running mean; from then on it is the EMA of the MACD line.

    Returns: (macd_line, signal_line, histogram)
    """
    _check_period(fast_period, "fast_period")
    _check_period(slow_period, "slow_period")
    _check_period(signal_period, "signal_period")
    if fast_period >= slow_period:
        raise InvalidInputError(
            "Indicators",
            f"fast_period ({fast_period}) must be shorter than slow_period ({slow_period})",
        )

    if len(closes) < slow_period:
        empty = np.array([], dtype=float)
        return empty, empty.copy(), empty.copy()

    offset = slow_period - 1
    fast_ema = ema(closes, fast_period)[offset:]
    slow_ema = ema(closes, slow_period)[offset:]
    macd_line = fast_ema - slow_ema

    signal_line = np.cumsum(macd_line) / np.arange(1, len(macd_line) + 1)
    if len(macd_line) >= signal_period:
        smoothed = ema(macd_line, signal_period)
        signal_line[signal_period - 1 :] = smoothed[signal_period - 1 :]

    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


def stochastic(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    k_period: int = 14,
    d_period: int = 3,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Stochastic Oscillator.

    %K is 50 for a window with no high-low range.

    Returns: (k, d)
    """
    _check_period(k_period, "k_period")
    _check_period(d_period, "d_period")
    _check_same_length(highs=highs, lows=lows, closes=closes)

    if len(closes) < k_period:
        return np.full(len(closes), np.nan), np.full(len(closes), np.nan)

    k = np.full(len(closes), np.nan)

    for i in range(k_period - 1, len(closes)):
        highest_high = np.max(highs[i - k_period + 1 : i + 1])
        lowest_low = np.min(lows[i - k_period + 1 : i + 1])

        if highest_high == lowest_low:
            k[i] = 50
        else:
            k[i] = ((closes[i] - lowest_low) / (highest_high - lowest_low)) * 100

    d = sma(k, d_period)

    return k, d


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands with population standard deviation.

    Returns: (upper, middle, lower, bandwidth_percent)
    """
    if std_dev <= 0:
        raise InvalidInputError(
            "Indicators", f"std_dev multiplier must be positive, got {std_dev}"
        )
    middle = sma(closes, period)

    std = np.full(len(closes), np.nan)
    for i in range(period - 1, len(closes)):
        std[i] = np.std(closes[i - period + 1 : i + 1])

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    with np.errstate(divide="ignore", invalid="ignore"):
        bandwidth = (upper - lower) / np.abs(middle) * 100

    return upper, middle, lower, bandwidth


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_last_valid(arr: np.ndarray) -> Optional[float]:
    """Get last non-NaN value from array."""
    valid = arr[~np.isnan(arr)]
    return float(valid[-1]) if len(valid) > 0 else None


def get_previous_valid(arr: np.ndarray) -> Optional[float]:
    """Get the second-to-last non-NaN value from array."""
    valid = arr[~np.isnan(arr)]
    return float(valid[-2]) if len(valid) > 1 else None


def snap_to_zero(value: float, scale: float = 1.0) -> float:
    """
    Treat floating-point noise around zero as zero.

    scale is the magnitude of the quantities that were subtracted (usually
    the price level), so the cutoff follows the instrument's price units.
    """
    return 0.0 if abs(value) <= FLOAT_TOLERANCE * abs(scale) else value
