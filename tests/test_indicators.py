"""Tests for services/indicators/service.py"""

import numpy as np
import pytest

from chartsignal.schemas.indicators import (
    BandPosition,
    Direction,
    IndicatorPeriods,
    OscillatorZone,
    PriceRelation,
)
from chartsignal.schemas.market import PriceSeries
from chartsignal.services.base import InvalidInputError
from chartsignal.services.indicators import (
    IndicatorService,
    analyze_all,
    calculate_bollinger_bands,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
    compute_indicators,
    get_indicator_service,
)


class TestFlatSeries:
    """30 bars at 100: every indicator sits at its neutral point."""

    def test_readings(self, flat_series):
        indicators = analyze_all(flat_series)

        assert indicators.sma.value == 100.0
        assert indicators.ema.value == 100.0
        assert indicators.rsi.value == 50.0
        assert indicators.macd.histogram == 0.0
        assert indicators.bollinger_bands.bandwidth == 0.0
        assert indicators.stochastic.k == 50.0
        assert indicators.stochastic.d == 50.0

    def test_all_neutral(self, flat_series):
        indicators = analyze_all(flat_series)
        assert indicators.signals() == [Direction.NEUTRAL] * 6
        assert indicators.sma.price_relation == PriceRelation.AT
        assert indicators.bollinger_bands.position == BandPosition.MIDDLE

    def test_aggregate(self, flat_series):
        result = compute_indicators(flat_series)
        assert result.signal == Direction.NEUTRAL
        assert result.confidence == 50
        assert result.neutral_count == 6


class TestTrendingSeries:

    def test_rising(self, rising_series):
        indicators = analyze_all(rising_series)

        assert indicators.rsi.value == 100.0
        assert indicators.rsi.zone == OscillatorZone.OVERBOUGHT
        assert indicators.sma.signal == Direction.BULLISH
        assert indicators.ema.signal == Direction.BULLISH
        assert indicators.sma.price_relation == PriceRelation.ABOVE

        result = compute_indicators(rising_series)
        assert result.signal == Direction.BULLISH
        assert result.bullish_count > result.bearish_count

    def test_falling(self, falling_series):
        indicators = analyze_all(falling_series)

        assert indicators.rsi.value == pytest.approx(0.0)
        assert indicators.rsi.zone == OscillatorZone.OVERSOLD
        assert indicators.sma.signal == Direction.BEARISH
        assert indicators.ema.signal == Direction.BEARISH

        result = compute_indicators(falling_series)
        assert result.signal == Direction.BEARISH

    def test_linear_trend_has_no_macd_crossover(self, rising_series):
        macd = analyze_all(rising_series).macd
        assert macd.histogram == 0.0
        assert macd.crossover is None


class TestInsufficientData:

    def test_short_series_never_fails(self):
        series = PriceSeries.from_arrays([100.0, 101.0, 102.0])
        result = compute_indicators(series)

        assert result.signal == Direction.NEUTRAL
        assert result.neutral_count == 6
        for reading in (
            result.indicators.sma,
            result.indicators.ema,
            result.indicators.rsi,
            result.indicators.macd,
            result.indicators.bollinger_bands,
            result.indicators.stochastic,
        ):
            assert reading.insufficient_data
            assert reading.value is None
            assert "Insufficient data" in reading.description

    def test_stochastic_needs_k_plus_d(self):
        closes = list(np.arange(100.0, 116.0))  # 16 < 14 + 3
        assert calculate_stochastic(closes, closes, closes).insufficient_data

    def test_macd_available_from_slow_period(self):
        closes = list(np.arange(100.0, 126.0))  # 26 bars
        result = calculate_macd(closes)
        assert not result.insufficient_data
        assert "warming up" in result.description


class TestClassification:

    def test_sma_band(self):
        closes = [100.0] * 19 + [101.0]
        assert calculate_sma(closes).signal == Direction.NEUTRAL

    def test_ema_names_period(self):
        assert calculate_ema([100.0] * 12, 12).name == "EMA12"

    def test_rsi_oversold_is_bullish(self):
        result = calculate_rsi(list(np.arange(130.0, 100.0, -1)))
        assert result.signal == Direction.BULLISH

    def test_stochastic_overbought(self):
        closes = list(np.arange(100.0, 130.0))
        result = calculate_stochastic(closes, closes, closes)
        assert result.zone == OscillatorZone.OVERBOUGHT
        assert result.signal == Direction.BEARISH

    def test_bollinger_squeeze(self):
        closes = [100.0, 100.5] * 15
        result = calculate_bollinger_bands(closes)
        assert result.squeeze
        assert "Squeeze" in result.description

    def test_oscillators_bounded(self):
        rng = np.random.default_rng(11)
        closes = 100 + np.cumsum(rng.normal(0, 1, 120))
        highs = closes + rng.uniform(0, 1, 120)
        lows = closes - rng.uniform(0, 1, 120)
        result = compute_indicators(PriceSeries.from_arrays(closes, highs, lows))

        assert 0 <= result.indicators.rsi.value <= 100
        assert 0 <= result.indicators.stochastic.k <= 100
        assert 0 <= result.indicators.stochastic.d <= 100
        assert 0 <= result.confidence <= 95
        assert result.total_count == 6

    def test_non_finite_prices_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_sma([100.0, float("nan"), 101.0])


class TestIndicatorService:

    def test_custom_periods(self, rising_series):
        service = IndicatorService(IndicatorPeriods(sma=5, ema=5))
        result = service.execute(rising_series)
        assert result.indicators.sma.name == "SMA5"
        assert result.indicators.ema.name == "EMA5"

    def test_singleton(self):
        assert get_indicator_service() is get_indicator_service()
        assert get_indicator_service().health_check()

    def test_deterministic(self, rising_series):
        service = get_indicator_service()
        assert service.execute(rising_series) == service.execute(rising_series)

    def test_invalid_macd_periods(self):
        with pytest.raises(ValueError):
            IndicatorPeriods(macd_fast=26, macd_slow=12)


class TestScaleInvariance:
    """Signals depend on relative moves, not on the instrument's price units."""

    @staticmethod
    def _random_walk(scale=1.0):
        rng = np.random.default_rng(21)
        closes = 100 + np.cumsum(rng.normal(0, 1, 80))
        highs = closes + rng.uniform(0.1, 1, 80)
        lows = closes - rng.uniform(0.1, 1, 80)
        return PriceSeries.from_arrays(closes * scale, highs * scale, lows * scale)

    @pytest.mark.parametrize("scale", [1e-9, 1e-10, 1e6])
    def test_signals_unchanged_when_prices_rescaled(self, scale):
        base = analyze_all(self._random_walk())
        scaled = analyze_all(self._random_walk(scale))

        assert scaled.signals() == base.signals()
        assert scaled.macd.crossover == base.macd.crossover
        assert scaled.bollinger_bands.position == base.bollinger_bands.position
        assert scaled.rsi.value == pytest.approx(base.rsi.value)
        assert scaled.bollinger_bands.bandwidth == pytest.approx(base.bollinger_bands.bandwidth)

    def test_tiny_prices_keep_directional_macd(self):
        closes = [(140.0 - i) * 1e-9 for i in range(40)] + [103e-9]
        result = calculate_macd(closes)
        assert result.signal == Direction.BULLISH
        assert result.crossover == Direction.BULLISH

    def test_tiny_prices_keep_open_bands(self):
        closes = [1e-10, 1.05e-10] * 10 + [1.5e-10]
        result = calculate_bollinger_bands(closes)
        assert result.position == BandPosition.UPPER
        assert result.signal == Direction.BEARISH


class TestCrossovers:
    """Fresh crossovers on the last bar."""

    # 40 bars falling by 1, then a sharp bounce
    REVERSAL_UP = [140.0 - i for i in range(40)] + [103.0]
    # 40 bars rising by 1, then a sharp drop
    REVERSAL_DOWN = [100.0 + i for i in range(40)] + [137.0]

    def test_macd_bullish_crossover(self):
        result = calculate_macd(self.REVERSAL_UP)
        assert result.crossover == Direction.BULLISH
        assert result.signal == Direction.BULLISH
        assert result.histogram > 0
        assert "bullish crossover" in result.description

    def test_macd_bearish_crossover(self):
        result = calculate_macd(self.REVERSAL_DOWN)
        assert result.crossover == Direction.BEARISH
        assert result.signal == Direction.BEARISH
        assert result.histogram < 0
        assert "bearish crossover" in result.description

    def test_no_crossover_one_bar_later(self):
        result = calculate_macd(self.REVERSAL_UP + [105.0])
        assert result.crossover is None
        assert result.signal == Direction.BULLISH

    def test_stochastic_bullish_crossover_in_oversold_zone(self):
        closes = [140.0 - i for i in range(40)] + [102.0]
        result = calculate_stochastic(closes, closes, closes)

        assert result.zone == OscillatorZone.OVERSOLD
        assert result.signal == Direction.BULLISH
        assert result.k > result.d
        assert result.description == "Stochastic bullish crossover in oversold zone"

    def test_stochastic_bearish_crossover_in_overbought_zone(self):
        closes = [100.0 + i for i in range(40)] + [138.0]
        result = calculate_stochastic(closes, closes, closes)

        assert result.zone == OscillatorZone.OVERBOUGHT
        assert result.signal == Direction.BEARISH
        assert result.k < result.d
        assert result.description == "Stochastic bearish crossover in overbought zone"

    def test_stochastic_in_zone_without_crossover(self):
        closes = [140.0 - i for i in range(40)]
        result = calculate_stochastic(closes, closes, closes)

        assert result.zone == OscillatorZone.OVERSOLD
        assert result.description == "Stochastic in oversold zone"
