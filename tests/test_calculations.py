"""Tests for services/indicators/calculations.py"""

import numpy as np
import pytest

from chartsignal.services.base import InvalidInputError
from chartsignal.services.indicators.calculations import (
    bollinger_bands,
    ema,
    get_last_valid,
    get_previous_valid,
    macd,
    rsi,
    sma,
    snap_to_zero,
    stochastic,
)


class TestMovingAverages:

    def test_sma_window(self):
        result = sma(np.array([1.0, 2.0, 3.0, 4.0, 5.0]), 3)
        assert np.isnan(result[:2]).all()
        np.testing.assert_allclose(result[2:], [2.0, 3.0, 4.0])

    def test_sma_short_series_is_all_nan(self):
        assert np.isnan(sma(np.array([1.0, 2.0]), 5)).all()

    def test_ema_seeded_with_sma(self):
        data = np.array([2.0, 4.0, 6.0, 8.0])
        result = ema(data, 3)
        assert result[2] == pytest.approx(4.0)
        # multiplier 0.5
        assert result[3] == pytest.approx(6.0)

    def test_constant_series(self):
        data = np.full(25, 42.0)
        assert get_last_valid(sma(data, 20)) == pytest.approx(42.0)
        assert get_last_valid(ema(data, 12)) == pytest.approx(42.0)

    @pytest.mark.parametrize("period", [0, -3, 2.5])
    def test_invalid_period(self, period):
        with pytest.raises(InvalidInputError):
            sma(np.arange(10.0), period)


class TestRSI:

    def test_flat_series_is_midpoint(self):
        assert get_last_valid(rsi(np.full(30, 100.0), 14)) == 50.0

    def test_pure_uptrend_is_100(self):
        assert get_last_valid(rsi(np.arange(100.0, 130.0), 14)) == 100.0

    def test_pure_downtrend_is_0(self):
        assert get_last_valid(rsi(np.arange(130.0, 100.0, -1), 14)) == pytest.approx(0.0)

    def test_needs_period_plus_one(self):
        assert get_last_valid(rsi(np.arange(14.0), 14)) is None
        assert get_last_valid(rsi(np.arange(15.0), 14)) is not None

    def test_bounded(self):
        rng = np.random.default_rng(3)
        closes = 100 + np.cumsum(rng.normal(0, 1, 200))
        values = rsi(closes, 14)
        valid = values[~np.isnan(values)]
        assert ((valid >= 0) & (valid <= 100)).all()


class TestMACD:

    def test_short_series_returns_empty(self):
        line, signal, hist = macd(np.arange(20.0))
        assert len(line) == len(signal) == len(hist) == 0

    def test_aligned_from_slow_period(self):
        line, signal, hist = macd(np.arange(30.0))
        assert len(line) == len(signal) == len(hist) == 5

    def test_flat_series_has_zero_histogram(self):
        _, _, hist = macd(np.full(30, 100.0))
        assert np.allclose(hist, 0.0)

    def test_fast_must_be_shorter_than_slow(self):
        with pytest.raises(InvalidInputError):
            macd(np.arange(40.0), fast_period=26, slow_period=12)


class TestStochastic:

    def test_zero_range_is_50(self):
        prices = np.full(20, 100.0)
        k, d = stochastic(prices, prices, prices)
        assert get_last_valid(k) == 50.0
        assert get_last_valid(d) == 50.0

    def test_close_at_high_is_100(self):
        closes = np.arange(100.0, 120.0)
        k, _ = stochastic(closes, closes, closes)
        assert get_last_valid(k) == pytest.approx(100.0)

    def test_mismatched_lengths(self):
        with pytest.raises(InvalidInputError):
            stochastic(np.ones(20), np.ones(19), np.ones(20))


class TestBollingerBands:

    def test_flat_series_collapses(self):
        upper, middle, lower, bandwidth = bollinger_bands(np.full(25, 100.0))
        assert get_last_valid(upper) == get_last_valid(middle) == get_last_valid(lower) == 100.0
        assert get_last_valid(bandwidth) == 0.0

    def test_bands_are_ordered(self):
        closes = np.array([100, 102, 101, 105, 103, 99, 98, 104, 106, 101] * 3, dtype=float)
        upper, middle, lower, _ = bollinger_bands(closes, 10)
        valid = ~np.isnan(middle)
        assert (upper[valid] >= middle[valid]).all()
        assert (middle[valid] >= lower[valid]).all()

    def test_rejects_non_positive_multiplier(self):
        with pytest.raises(InvalidInputError):
            bollinger_bands(np.arange(30.0), std_dev=0)


class TestUtilities:

    def test_last_and_previous_valid(self):
        arr = np.array([np.nan, 1.0, 2.0, np.nan])
        assert get_last_valid(arr) == 2.0
        assert get_previous_valid(arr) == 1.0

    def test_all_nan(self):
        arr = np.full(3, np.nan)
        assert get_last_valid(arr) is None
        assert get_previous_valid(arr) is None

    def test_snap_to_zero(self):
        assert snap_to_zero(1e-12) == 0.0
        assert snap_to_zero(-0.5) == -0.5

    def test_snap_to_zero_follows_price_scale(self):
        # a real difference on a micro-priced instrument survives
        assert snap_to_zero(2e-10, scale=1e-9) == 2e-10
        assert snap_to_zero(1e-20, scale=1e-9) == 0.0
        # noise on a large price level is still snapped
        assert snap_to_zero(1e-6, scale=1e5) == 0.0
