"""
Indicator Engine Service Implementation

Turns indicator arrays into classified readings and aggregates them.
Pure Python/NumPy calculations - no I/O, no shared state.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from chartsignal.schemas.market import PriceSeries
from chartsignal.schemas.indicators import (
    AggregateIndicatorResult,
    BandPosition,
    BollingerBandsResult,
    Direction,
    IndicatorPeriods,
    IndicatorSet,
    MACDResult,
    MovingAverageResult,
    OscillatorZone,
    PriceRelation,
    RSIResult,
    StochasticResult,
)
from chartsignal.services.base import InvalidInputError
from chartsignal.services.indicators.interface import IndicatorServiceInterface
from chartsignal.services.indicators.aggregator import aggregate_signals
from chartsignal.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    macd,
    stochastic,
    bollinger_bands,
    get_last_valid,
    get_previous_valid,
    snap_to_zero,
)

logger = logging.getLogger(__name__)

# Price must clear the average by this fraction to count as a trend
SMA_BAND = 0.02
EMA_BAND = 0.015

RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30
STOCH_OVERBOUGHT = 80
STOCH_OVERSOLD = 20
SQUEEZE_BANDWIDTH = 5


def _as_prices(values: Sequence[float], label: str = "closes") -> np.ndarray:
    """Convert to a float array and reject non-finite prices."""
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError("IndicatorService", f"{label} must be one-dimensional")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("IndicatorService", f"{label} contains non-finite values")
    return arr


def _insufficient(name: str, required: int, available: int) -> str:
    logger.debug(f"{name}: insufficient data ({available} < {required})")
    return f"Insufficient data: {name} needs {required} bars, got {available}"


def _price_relation(price: float, level: float) -> PriceRelation:
    if price > level:
        return PriceRelation.ABOVE
    if price < level:
        return PriceRelation.BELOW
    return PriceRelation.AT


# =============================================================================
# TREND
# =============================================================================


def _classify_moving_average(
    label: str, values: np.ndarray, closes: np.ndarray, period: int, band: float
) -> MovingAverageResult:
    name = f"{label}{period}"
    average = get_last_valid(values)
    if average is None:
        return MovingAverageResult(
            name=name,
            period=period,
            description=_insufficient(name, period, len(closes)),
            insufficient_data=True,
        )

    current = float(closes[-1])
    if current > average * (1 + band):
        signal = Direction.BULLISH
        description = f"Price above {name} - uptrend momentum"
    elif current < average * (1 - band):
        signal = Direction.BEARISH
        description = f"Price below {name} - downtrend momentum"
    else:
        signal = Direction.NEUTRAL
        description = f"Price near {name} - consolidation"

    return MovingAverageResult(
        name=name,
        value=round(average, 4),
        period=period,
        signal=signal,
        description=description,
        price_relation=_price_relation(current, average),
    )


def calculate_sma(closes: Sequence[float], period: int = 20) -> MovingAverageResult:
    """SMA of the last `period` closes; +/-2% band around it."""
    closes = _as_prices(closes)
    return _classify_moving_average("SMA", sma(closes, period), closes, period, SMA_BAND)


def calculate_ema(closes: Sequence[float], period: int = 12) -> MovingAverageResult:
    """EMA seeded with the first SMA; tighter +/-1.5% band since it reacts faster."""
    closes = _as_prices(closes)
    return _classify_moving_average("EMA", ema(closes, period), closes, period, EMA_BAND)


# =============================================================================
# MOMENTUM
# =============================================================================


def calculate_rsi(closes: Sequence[float], period: int = 14) -> RSIResult:
    """Wilder RSI classified into overbought / oversold / normal zones."""
    closes = _as_prices(closes)
    name = f"RSI{period}"
    value = get_last_valid(rsi(closes, period))
    if value is None:
        return RSIResult(
            name=name,
            period=period,
            description=_insufficient(name, period + 1, len(closes)),
            insufficient_data=True,
        )

    zone = OscillatorZone.NORMAL
    if np.ptp(closes) == 0:
        signal = Direction.NEUTRAL
        description = "No price movement - RSI at midpoint"
    elif value >= RSI_OVERBOUGHT:
        signal = Direction.BEARISH
        zone = OscillatorZone.OVERBOUGHT
        description = "RSI overbought - potential reversal down"
    elif value <= RSI_OVERSOLD:
        signal = Direction.BULLISH
        zone = OscillatorZone.OVERSOLD
        description = "RSI oversold - potential reversal up"
    elif value >= 50:
        signal = Direction.BULLISH
        description = "RSI above 50 - bullish momentum"
    else:
        signal = Direction.BEARISH
        description = "RSI below 50 - bearish momentum"

    return RSIResult(
        name=name,
        value=round(value, 2),
        period=period,
        signal=signal,
        zone=zone,
        description=description,
    )


def calculate_macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """MACD line vs signal line; a fresh crossover outranks the histogram sign."""
    closes = _as_prices(closes)
    name = "MACD"
    macd_line, signal_line, _ = macd(closes, fast_period, slow_period, signal_period)
    if len(macd_line) == 0:
        return MACDResult(
            name=name,
            period=slow_period,
            fast_period=fast_period,
            signal_period=signal_period,
            description=_insufficient(name, slow_period, len(closes)),
            insufficient_data=True,
        )

    current_macd = float(macd_line[-1])
    current_signal = float(signal_line[-1])
    price_scale = float(closes[-1])
    diff = snap_to_zero(current_macd - current_signal, price_scale)

    if len(macd_line) >= 2:
        prev_diff = snap_to_zero(
            float(macd_line[-2]) - float(signal_line[-2]), price_scale
        )
    else:
        prev_diff = diff

    crossover = None
    if prev_diff <= 0 and diff > 0:
        signal = crossover = Direction.BULLISH
        description = "MACD bullish crossover - buy signal"
    elif prev_diff >= 0 and diff < 0:
        signal = crossover = Direction.BEARISH
        description = "MACD bearish crossover - sell signal"
    elif diff > 0:
        signal = Direction.BULLISH
        description = "MACD above signal line - bullish momentum"
    elif diff < 0:
        signal = Direction.BEARISH
        description = "MACD below signal line - bearish momentum"
    else:
        signal = Direction.NEUTRAL
        description = "MACD neutral"

    if len(macd_line) < signal_period:
        description += " (signal line warming up)"

    return MACDResult(
        name=name,
        value=round(current_macd, 4),
        period=slow_period,
        fast_period=fast_period,
        signal_period=signal_period,
        signal=signal,
        description=description,
        signal_line=round(current_signal, 4),
        histogram=round(diff, 4),
        crossover=crossover,
    )


def calculate_stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
    d_period: int = 3,
) -> StochasticResult:
    """%K/%D with 80/20 zones; outside the zones %K vs %D decides."""
    highs = _as_prices(highs, "highs")
    lows = _as_prices(lows, "lows")
    closes = _as_prices(closes)
    name = f"Stochastic{k_period},{d_period}"
    required = k_period + d_period

    k_arr, d_arr = stochastic(highs, lows, closes, k_period, d_period)
    if len(closes) < required:
        return StochasticResult(
            name=name,
            period=k_period,
            d_period=d_period,
            description=_insufficient(name, required, len(closes)),
            insufficient_data=True,
        )

    k = float(np.clip(get_last_valid(k_arr), 0, 100))
    d = float(np.clip(get_last_valid(d_arr), 0, 100))
    prev_k = get_previous_valid(k_arr)
    prev_d = get_previous_valid(d_arr)
    prev_k = k if prev_k is None else prev_k
    prev_d = d if prev_d is None else prev_d

    zone = OscillatorZone.NORMAL
    diff = snap_to_zero(k - d)
    if k >= STOCH_OVERBOUGHT and d >= STOCH_OVERBOUGHT:
        zone = OscillatorZone.OVERBOUGHT
        signal = Direction.BEARISH
        if prev_k >= prev_d and diff < 0:
            description = "Stochastic bearish crossover in overbought zone"
        else:
            description = "Stochastic in overbought zone"
    elif k <= STOCH_OVERSOLD and d <= STOCH_OVERSOLD:
        zone = OscillatorZone.OVERSOLD
        signal = Direction.BULLISH
        if prev_k <= prev_d and diff > 0:
            description = "Stochastic bullish crossover in oversold zone"
        else:
            description = "Stochastic in oversold zone"
    elif diff > 0:
        signal = Direction.BULLISH
        description = "%K above %D - bullish momentum"
    elif diff < 0:
        signal = Direction.BEARISH
        description = "%K below %D - bearish momentum"
    else:
        signal = Direction.NEUTRAL
        description = "%K equals %D - no momentum"

    return StochasticResult(
        name=name,
        value=round(k, 2),
        period=k_period,
        d_period=d_period,
        signal=signal,
        description=description,
        k=round(k, 2),
        d=round(d, 2),
        zone=zone,
    )


# =============================================================================
# VOLATILITY
# =============================================================================


def calculate_bollinger_bands(
    closes: Sequence[float], period: int = 20, std_dev: float = 2.0
) -> BollingerBandsResult:
    """Position of price inside the bands; bandwidth under 5% flags a squeeze."""
    closes = _as_prices(closes)
    name = f"BB{period}"
    upper_arr, middle_arr, lower_arr, bandwidth_arr = bollinger_bands(closes, period, std_dev)
    middle = get_last_valid(middle_arr)
    if middle is None:
        return BollingerBandsResult(
            name=name,
            period=period,
            std_dev_multiplier=std_dev,
            description=_insufficient(name, period, len(closes)),
            insufficient_data=True,
        )

    upper = float(upper_arr[-1])
    lower = float(lower_arr[-1])
    bandwidth = float(bandwidth_arr[-1])
    bandwidth = bandwidth if np.isfinite(bandwidth) else None
    current = float(closes[-1])

    if snap_to_zero(upper - lower, middle) == 0:
        signal = Direction.NEUTRAL
        position = BandPosition.MIDDLE
        description = "Bands collapsed - no volatility"
    elif current >= upper:
        signal = Direction.BEARISH
        position = BandPosition.UPPER
        description = "Price at upper band - potential overbought"
    elif current <= lower:
        signal = Direction.BULLISH
        position = BandPosition.LOWER
        description = "Price at lower band - potential oversold"
    elif current > middle:
        signal = Direction.BULLISH
        position = BandPosition.UPPER_MIDDLE
        description = "Price above middle band - bullish bias"
    else:
        signal = Direction.BEARISH
        position = BandPosition.LOWER_MIDDLE
        description = "Price below middle band - bearish bias"

    squeeze = bandwidth is not None and bandwidth < SQUEEZE_BANDWIDTH
    if squeeze:
        description += " (Squeeze detected - breakout imminent)"

    return BollingerBandsResult(
        name=name,
        value=round(middle, 4),
        period=period,
        std_dev_multiplier=std_dev,
        signal=signal,
        description=description,
        upper=round(upper, 4),
        middle=round(middle, 4),
        lower=round(lower, 4),
        bandwidth=round(bandwidth, 2) if bandwidth is not None else None,
        position=position,
        squeeze=squeeze,
    )


# =============================================================================
# ALL INDICATORS
# =============================================================================


def analyze_all(
    series: PriceSeries, periods: Optional[IndicatorPeriods] = None
) -> IndicatorSet:
    """Run the six indicators over one series."""
    periods = periods or IndicatorPeriods()
    closes = series.closes

    return IndicatorSet(
        sma=calculate_sma(closes, periods.sma),
        ema=calculate_ema(closes, periods.ema),
        rsi=calculate_rsi(closes, periods.rsi),
        macd=calculate_macd(
            closes, periods.macd_fast, periods.macd_slow, periods.macd_signal
        ),
        bollinger_bands=calculate_bollinger_bands(
            closes, periods.bollinger, periods.bollinger_std
        ),
        stochastic=calculate_stochastic(
            series.highs, series.lows, closes, periods.stochastic_k, periods.stochastic_d
        ),
    )


def compute_indicators(
    series: PriceSeries, periods: Optional[IndicatorPeriods] = None
) -> AggregateIndicatorResult:
    """Run all indicators and aggregate their directions."""
    return aggregate_signals(analyze_all(series, periods))


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for a price series.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, periods: Optional[IndicatorPeriods] = None):
        self.periods = periods or IndicatorPeriods()

    @property
    def name(self) -> str:
        return "IndicatorService"

    def execute(self, input_data: PriceSeries) -> AggregateIndicatorResult:
        """Calculate and aggregate all indicators for a series."""
        result = compute_indicators(input_data, self.periods)
        logger.debug(
            f"{input_data.symbol or 'series'}: {result.signal.value} "
            f"({result.bullish_count}/{result.bearish_count}/{result.neutral_count}) "
            f"confidence={result.confidence}"
        )
        return result


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance (default periods)."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
