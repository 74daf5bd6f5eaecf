"""
Signal Service Interface

Orchestrates the complete signal pipeline.
"""

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Union

from chartsignal.services.base import BaseService
from chartsignal.schemas.indicators import IndicatorPeriods
from chartsignal.schemas.market import PriceSeries
from chartsignal.schemas.patterns import PatternDetection
from chartsignal.schemas.signal import (
    CompositionConfig,
    RiskProfile,
    RiskProfileConfig,
    TradingSignal,
)


@dataclass
class SignalRequest:
    """Request for a trading signal."""

    series: Optional[PriceSeries] = None
    patterns: list[PatternDetection] = field(default_factory=list)
    risk_profile: Union[RiskProfile, RiskProfileConfig] = RiskProfile.MODERATE
    config: Optional[CompositionConfig] = None
    periods: Optional[IndicatorPeriods] = None


class SignalServiceInterface(BaseService[SignalRequest, TradingSignal]):
    """
    Signal Service Contract.

    This is the MAIN ORCHESTRATOR that runs the full pipeline.

    INPUT: SignalRequest
        - series: OHLC bars (optional; patterns alone still yield a signal)
        - patterns: detections from an external classifier
        - risk_profile: named profile or explicit base percentages
        - config / periods: composition constants and indicator periods

    OUTPUT: TradingSignal
        - action, confidence (20-95), confidence_level
        - stop_loss, take_profit, risk_reward_ratio, risk_level
        - reasoning, indicator_confirmation, indicators

    PIPELINE:
        ┌─────────────────┐
        │  SignalRequest  │
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Indicator Engine│ → AggregateIndicatorResult
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Pattern Scorer  │ → PatternAnalysis
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Signal Composer │ → CompositionResult
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │ Risk Calculator │ → RiskParameters
        └────────┬────────┘
                 │
                 ▼
        ┌─────────────────┐
        │  TradingSignal  │
        └─────────────────┘
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    def execute(self, input_data: SignalRequest) -> TradingSignal:
        """Run the complete signal pipeline."""
        pass
