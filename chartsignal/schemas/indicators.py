"""
CONTRACT 2: Indicator Engine

Input: PriceSeries
Output: AggregateIndicatorResult

This module performs ALL mathematical calculations.
Pure Python/NumPy - deterministic and reproducible.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class Direction(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PriceRelation(str, Enum):
    ABOVE = "above"
    BELOW = "below"
    AT = "at"


class OscillatorZone(str, Enum):
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    NORMAL = "normal"


class BandPosition(str, Enum):
    UPPER = "upper"
    UPPER_MIDDLE = "upper-middle"
    MIDDLE = "middle"
    LOWER_MIDDLE = "lower-middle"
    LOWER = "lower"


# =============================================================================
# INPUT: Indicator periods
# =============================================================================


class IndicatorPeriods(BaseModel):
    """Lookback periods for every indicator (classic defaults)."""

    sma: int = Field(default=20, gt=0)
    ema: int = Field(default=12, gt=0)
    rsi: int = Field(default=14, gt=0)
    macd_fast: int = Field(default=12, gt=0)
    macd_slow: int = Field(default=26, gt=0)
    macd_signal: int = Field(default=9, gt=0)
    bollinger: int = Field(default=20, gt=0)
    bollinger_std: float = Field(default=2.0, gt=0)
    stochastic_k: int = Field(default=14, gt=0)
    stochastic_d: int = Field(default=3, gt=0)

    @model_validator(mode="after")
    def fast_below_slow(self):
        if self.macd_fast >= self.macd_slow:
            raise ValueError("macd_fast must be shorter than macd_slow")
        return self


# =============================================================================
# OUTPUT: Per-indicator results
# =============================================================================


class IndicatorResult(BaseModel):
    """
    Common shape of every indicator reading.

    value is None (and signal neutral) when the series is shorter than
    the indicator needs.
    """

    name: str
    value: Optional[float] = None
    period: int
    signal: Direction = Direction.NEUTRAL
    description: str
    insufficient_data: bool = False


class MovingAverageResult(IndicatorResult):
    """SMA / EMA reading."""

    price_relation: Optional[PriceRelation] = None


class RSIResult(IndicatorResult):
    """RSI reading; value is in [0, 100]."""

    zone: Optional[OscillatorZone] = None


class MACDResult(IndicatorResult):
    """MACD reading; value is the MACD line."""

    fast_period: int
    signal_period: int
    signal_line: Optional[float] = None
    histogram: Optional[float] = None
    crossover: Optional[Direction] = None


class BollingerBandsResult(IndicatorResult):
    """Bollinger Bands reading; value is the middle band."""

    std_dev_multiplier: float
    upper: Optional[float] = None
    middle: Optional[float] = None
    lower: Optional[float] = None
    bandwidth: Optional[float] = Field(default=None, ge=0)
    position: Optional[BandPosition] = None
    squeeze: bool = False


class StochasticResult(IndicatorResult):
    """Stochastic oscillator reading; value is %K."""

    d_period: int
    k: Optional[float] = Field(default=None, ge=0, le=100)
    d: Optional[float] = Field(default=None, ge=0, le=100)
    zone: Optional[OscillatorZone] = None


class IndicatorSet(BaseModel):
    """The six indicator readings the aggregate is built from."""

    sma: MovingAverageResult
    ema: MovingAverageResult
    rsi: RSIResult
    macd: MACDResult
    bollinger_bands: BollingerBandsResult
    stochastic: StochasticResult

    def signals(self) -> list[Direction]:
        return [
            self.sma.signal,
            self.ema.signal,
            self.rsi.signal,
            self.macd.signal,
            self.bollinger_bands.signal,
            self.stochastic.signal,
        ]


# =============================================================================
# OUTPUT: AggregateIndicatorResult (Complete Response)
# =============================================================================


class AggregateIndicatorResult(BaseModel):
    """
    Majority vote over the six indicators.
    Returned by: Indicator Service
    Consumed by: Signal Composer
    """

    indicators: Optional[IndicatorSet] = None
    bullish_count: int = Field(default=0, ge=0, le=6)
    bearish_count: int = Field(default=0, ge=0, le=6)
    neutral_count: int = Field(default=0, ge=0, le=6)
    signal: Direction
    confidence: float = Field(..., ge=0, le=95)

    class Config:
        frozen = True

    @property
    def total_count(self) -> int:
        return self.bullish_count + self.bearish_count + self.neutral_count

    @property
    def bullish_percent(self) -> float:
        return self._percent(self.bullish_count)

    @property
    def bearish_percent(self) -> float:
        return self._percent(self.bearish_count)

    @property
    def neutral_percent(self) -> float:
        return self._percent(self.neutral_count)

    def _percent(self, count: int) -> float:
        total = self.total_count
        return (count / total) * 100 if total else 100 / 3
