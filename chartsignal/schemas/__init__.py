"""
ChartSignal Schema Contracts

This module defines all data contracts between engine components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from chartsignal.schemas.market import PriceBar, PriceSeries
from chartsignal.schemas.indicators import (
    Direction,
    IndicatorPeriods,
    IndicatorResult,
    MovingAverageResult,
    RSIResult,
    MACDResult,
    BollingerBandsResult,
    StochasticResult,
    IndicatorSet,
    AggregateIndicatorResult,
)
from chartsignal.schemas.patterns import (
    PatternDefinition,
    PatternDetection,
    PatternAnalysis,
)
from chartsignal.schemas.signal import (
    SignalAction,
    RiskProfile,
    RiskProfileConfig,
    RISK_PROFILES,
    ConfidenceLevel,
    CompositionConfig,
    CompositionResult,
    RiskParameters,
    TradingSignal,
    HistoryRecord,
    SignalStats,
)

__all__ = [
    # Market
    "PriceBar",
    "PriceSeries",
    # Indicators
    "Direction",
    "IndicatorPeriods",
    "IndicatorResult",
    "MovingAverageResult",
    "RSIResult",
    "MACDResult",
    "BollingerBandsResult",
    "StochasticResult",
    "IndicatorSet",
    "AggregateIndicatorResult",
    # Patterns
    "PatternDefinition",
    "PatternDetection",
    "PatternAnalysis",
    # Signal
    "SignalAction",
    "RiskProfile",
    "RiskProfileConfig",
    "RISK_PROFILES",
    "ConfidenceLevel",
    "CompositionConfig",
    "CompositionResult",
    "RiskParameters",
    "TradingSignal",
    "HistoryRecord",
    "SignalStats",
]
