"""
Mock Data Generator

Generates realistic synthetic price series for demos and testing.
"""

import random
from datetime import datetime, timedelta
from typing import Optional

from chartsignal.schemas.market import PriceBar, PriceSeries
from chartsignal.services.base import InvalidInputError

MIN_PRICE = 0.01


def generate_mock_bars(
    periods: int,
    rng: random.Random,
    start_time: Optional[datetime] = None,
    interval: timedelta = timedelta(days=1),
) -> list[PriceBar]:
    """Random-walk candles with 0.5-2.5% volatility per bar."""
    bars = []
    price = 100 + rng.random() * 50  # 100-150
    timestamp = start_time

    for _ in range(periods):
        open_price = price
        volatility = price * (0.005 + rng.random() * 0.02)
        rising = rng.random() > 0.5

        swing = volatility * (1 + rng.random())
        high_price = open_price + (swing if rising else volatility * 0.3)
        low_price = open_price - (volatility * 0.3 if rising else swing)
        close_price = low_price + rng.random() * (high_price - low_price)

        open_r = round(max(open_price, MIN_PRICE), 2)
        close_r = round(max(close_price, MIN_PRICE), 2)
        # Rounding can push open/close past the extremes; widen to keep the bar valid
        high_r = max(round(high_price, 2), open_r, close_r)
        low_r = min(round(max(low_price, MIN_PRICE), 2), open_r, close_r)

        bars.append(
            PriceBar(
                open=open_r,
                high=high_r,
                low=low_r,
                close=close_r,
                timestamp=timestamp,
            )
        )

        price = max(close_price + (rng.random() - 0.5) * volatility, MIN_PRICE)
        if timestamp is not None:
            timestamp += interval

    return bars


def generate_mock_price_series(
    periods: int = 50,
    seed: Optional[int] = None,
    symbol: Optional[str] = None,
    start_time: Optional[datetime] = None,
) -> PriceSeries:
    """
    Generate a synthetic OHLC series.

    Args:
        periods: Number of bars
        seed: Seed for reproducible output (None = nondeterministic)
        symbol: Optional instrument label
        start_time: Timestamp of the first bar; bars are daily. None leaves
            timestamps unset.

    Returns:
        PriceSeries whose bars all satisfy low <= open, close <= high
    """
    if periods < 1:
        raise InvalidInputError("MockData", f"periods must be >= 1, got {periods}")
    rng = random.Random(seed)
    return PriceSeries(
        symbol=symbol,
        bars=tuple(generate_mock_bars(periods, rng, start_time)),
    )
