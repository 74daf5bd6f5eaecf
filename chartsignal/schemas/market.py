"""
CONTRACT 1: Price Data

Input: PriceSeries (from market data or the synthetic generator)

Chronological OHLC bars consumed by the Indicator Engine.
Series are immutable once constructed.
"""

from datetime import datetime
from typing import Optional, Sequence

import numpy as np
from pydantic import BaseModel, Field, model_validator

from chartsignal.services.base import InvalidInputError


class PriceBar(BaseModel):
    """Single candlestick data point."""

    open: float = Field(..., allow_inf_nan=False)
    high: float = Field(..., allow_inf_nan=False)
    low: float = Field(..., allow_inf_nan=False)
    close: float = Field(..., allow_inf_nan=False)
    timestamp: Optional[datetime] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_range(self):
        if not self.low <= min(self.open, self.close):
            raise ValueError(
                f"low {self.low} must be <= open {self.open} and close {self.close}"
            )
        if not max(self.open, self.close) <= self.high:
            raise ValueError(
                f"high {self.high} must be >= open {self.open} and close {self.close}"
            )
        return self


class PriceSeries(BaseModel):
    """
    Ordered sequence of price bars, oldest first.
    Sent by: API / synthetic generator
    Received by: Indicator Service
    """

    symbol: Optional[str] = Field(default=None, description="Instrument label")
    bars: tuple[PriceBar, ...] = Field(..., min_length=1)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "symbol": "DEMO",
                "bars": [
                    {"open": 100.0, "high": 101.2, "low": 99.6, "close": 100.8},
                    {"open": 100.8, "high": 102.0, "low": 100.5, "close": 101.7},
                ],
            }
        }

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def opens(self) -> np.ndarray:
        return np.array([b.open for b in self.bars], dtype=float)

    @property
    def highs(self) -> np.ndarray:
        return np.array([b.high for b in self.bars], dtype=float)

    @property
    def lows(self) -> np.ndarray:
        return np.array([b.low for b in self.bars], dtype=float)

    @property
    def closes(self) -> np.ndarray:
        return np.array([b.close for b in self.bars], dtype=float)

    @property
    def last_close(self) -> float:
        return self.bars[-1].close

    @classmethod
    def from_arrays(
        cls,
        closes: Sequence[float],
        highs: Optional[Sequence[float]] = None,
        lows: Optional[Sequence[float]] = None,
        opens: Optional[Sequence[float]] = None,
        symbol: Optional[str] = None,
    ) -> "PriceSeries":
        """
        Build a series from parallel price arrays.

        Missing highs/lows/opens default to the closes. All arrays must
        have the same length.
        """
        n = len(closes)
        columns = {"highs": highs, "lows": lows, "opens": opens}
        for label, column in columns.items():
            if column is not None and len(column) != n:
                raise InvalidInputError(
                    "PriceSeries",
                    f"{label} has {len(column)} values, closes has {n}",
                    {"field": label},
                )

        highs = closes if highs is None else highs
        lows = closes if lows is None else lows
        opens = closes if opens is None else opens

        bars = tuple(
            PriceBar(open=o, high=h, low=l, close=c)
            for o, h, l, c in zip(opens, highs, lows, closes)
        )
        return cls(symbol=symbol, bars=bars)
