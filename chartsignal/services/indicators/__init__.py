"""
Indicator Engine Service

CONTRACT:
    Input:  PriceSeries
    Output: AggregateIndicatorResult

RESPONSIBILITIES:
    - Calculate SMA, EMA, RSI, MACD, Bollinger Bands, Stochastic
    - Classify each reading as bullish / bearish / neutral
    - Aggregate the six votes into one direction and confidence

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from chartsignal.services.indicators.interface import IndicatorServiceInterface
from chartsignal.services.indicators.aggregator import aggregate_signals, vote
from chartsignal.services.indicators.service import (
    IndicatorService,
    get_indicator_service,
    analyze_all,
    compute_indicators,
    calculate_sma,
    calculate_ema,
    calculate_rsi,
    calculate_macd,
    calculate_bollinger_bands,
    calculate_stochastic,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
    "analyze_all",
    "compute_indicators",
    "aggregate_signals",
    "vote",
    "calculate_sma",
    "calculate_ema",
    "calculate_rsi",
    "calculate_macd",
    "calculate_bollinger_bands",
    "calculate_stochastic",
]
