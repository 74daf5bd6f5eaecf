"""
Signal Service Implementation

Orchestrates the complete signal pipeline:
    Indicators → Pattern Scoring → Composition → Risk

This is the main entry point for generating trading signals.
"""

import logging
from typing import Optional, Sequence, Union

from chartsignal.schemas.market import PriceSeries
from chartsignal.schemas.patterns import PatternDetection
from chartsignal.schemas.signal import (
    CompositionConfig,
    ConfidenceLevel,
    RiskProfile,
    RiskProfileConfig,
    TradingSignal,
)
from chartsignal.services.indicators import compute_indicators
from chartsignal.services.patterns import score_patterns
from chartsignal.services.risk import calculate_risk
from chartsignal.services.signals.composer import compose_signal
from chartsignal.services.signals.interface import SignalRequest, SignalServiceInterface

logger = logging.getLogger(__name__)


class SignalService(SignalServiceInterface):
    """
    Signal Service.

    Stateless: configuration arrives with each request, so the same
    request always yields the same signal.
    """

    def __init__(self, config: Optional[CompositionConfig] = None):
        self._config = config

    @property
    def name(self) -> str:
        return "SignalService"

    def execute(self, input_data: SignalRequest) -> TradingSignal:
        """
        Run the complete signal pipeline.

        Pipeline:
            1. Indicator Engine → AggregateIndicatorResult (skipped without bars)
            2. Pattern Scorer → PatternAnalysis
            3. Signal Composer → CompositionResult
            4. Risk Calculator → RiskParameters
        """
        config = input_data.config or self._config or CompositionConfig()

        # =================================================================
        # STAGE 1: Indicators
        # =================================================================
        aggregate = None
        if input_data.series is not None:
            logger.info(f"Stage 1: Indicators ({len(input_data.series)} bars)")
            aggregate = compute_indicators(input_data.series, input_data.periods)
            logger.debug(
                f"Indicators: {aggregate.signal.value} @ {aggregate.confidence} "
                f"({aggregate.bullish_count}/{aggregate.bearish_count}/{aggregate.neutral_count})"
            )
        else:
            logger.info("Stage 1: Indicators skipped (no price data)")

        # =================================================================
        # STAGE 2: Pattern scoring
        # =================================================================
        logger.info(f"Stage 2: Pattern scoring ({len(input_data.patterns)} detections)")
        analysis = score_patterns(input_data.patterns)

        # =================================================================
        # STAGE 3: Composition
        # =================================================================
        logger.info("Stage 3: Composition")
        composition = compose_signal(analysis, aggregate, config)

        # =================================================================
        # STAGE 4: Risk
        # =================================================================
        logger.info("Stage 4: Risk")
        risk = calculate_risk(
            composition.action, composition.confidence, input_data.risk_profile
        )

        signal = TradingSignal(
            action=composition.action,
            confidence=composition.confidence,
            confidence_level=ConfidenceLevel.from_confidence(composition.confidence),
            stop_loss=risk.stop_loss,
            take_profit=risk.take_profit,
            risk_reward_ratio=risk.risk_reward_ratio,
            risk_level=risk.risk_level,
            reasoning=composition.reasoning,
            indicator_confirmation=composition.indicator_confirmation,
            indicators=aggregate,
        )
        logger.info(
            f"Signal: {signal.action.value} @ {signal.confidence} "
            f"(SL={signal.stop_loss}, TP={signal.take_profit})"
        )
        return signal


def generate_signal(
    series: Optional[PriceSeries],
    detections: Sequence[PatternDetection],
    risk_profile: Union[RiskProfile, RiskProfileConfig] = RiskProfile.MODERATE,
    config: Optional[CompositionConfig] = None,
) -> TradingSignal:
    """Convenience wrapper around SignalService for one-off calls."""
    request = SignalRequest(
        series=series,
        patterns=list(detections),
        risk_profile=risk_profile,
        config=config,
    )
    return get_signal_service().execute(request)


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
