"""
Signal Composer

Fuses the pattern distribution with the indicator aggregate into an
action, a confidence and human-readable reasoning.
PURE PYTHON - no I/O, every constant comes from CompositionConfig.
"""

import logging
from typing import Optional

from chartsignal.schemas.indicators import (
    AggregateIndicatorResult,
    BandPosition,
    Direction,
    OscillatorZone,
)
from chartsignal.schemas.patterns import PatternAnalysis
from chartsignal.schemas.signal import CompositionConfig, CompositionResult, SignalAction
from chartsignal.services.patterns.scorer import EVEN_SPLIT, dominant_direction

logger = logging.getLogger(__name__)


def combine_distributions(
    pattern_analysis: PatternAnalysis,
    aggregate: Optional[AggregateIndicatorResult],
    config: CompositionConfig,
) -> tuple[float, float, float]:
    """Weighted bullish / bearish / neutral percentages, renormalized to 100."""
    pattern = (
        pattern_analysis.bullish_percent,
        pattern_analysis.bearish_percent,
        pattern_analysis.neutral_percent,
    )
    if aggregate is None:
        return pattern

    indicator = (
        aggregate.bullish_percent,
        aggregate.bearish_percent,
        aggregate.neutral_percent,
    )
    weighted = [
        p * config.pattern_weight + i * config.indicator_weight
        for p, i in zip(pattern, indicator)
    ]
    total = sum(weighted)
    return tuple(min(max(w / total * 100, 0.0), 100.0) for w in weighted)


def decide_action(bullish: float, bearish: float, threshold: float) -> SignalAction:
    if bullish >= threshold and bullish > bearish:
        return SignalAction.BUY
    if bearish >= threshold and bearish > bullish:
        return SignalAction.SELL
    return SignalAction.HOLD


def is_confirmed(
    pattern_analysis: PatternAnalysis,
    aggregate: Optional[AggregateIndicatorResult],
) -> bool:
    """Indicators confirm only a directional pattern reading they agree with."""
    if aggregate is None:
        return False
    direction = pattern_analysis.dominant_direction
    return direction != Direction.NEUTRAL and aggregate.signal == direction


def compute_confidence(
    pattern_analysis: PatternAnalysis,
    aggregate: Optional[AggregateIndicatorResult],
    combined: tuple[float, float, float],
    confirmed: bool,
    config: CompositionConfig,
) -> int:
    if pattern_analysis.pattern_count == 0:
        confidence = config.no_pattern_confidence
    else:
        confidence = pattern_analysis.average_confidence or 0.0

        leading = max(combined)
        alignment = (leading - EVEN_SPLIT) / (100 - EVEN_SPLIT) * config.alignment_bonus_max
        confidence += min(max(alignment, 0.0), config.alignment_bonus_max)

        confidence += min(
            (pattern_analysis.pattern_count - 1) * config.multi_pattern_bonus_step,
            config.multi_pattern_bonus_max,
        )

    if aggregate is not None:
        confidence = (
            confidence * config.pattern_blend
            + aggregate.confidence * config.indicator_blend
        )
        if confirmed:
            confidence += config.confirmation_bonus
        if max(aggregate.bullish_count, aggregate.bearish_count) >= config.consensus_count:
            confidence += config.consensus_bonus

    confidence = min(max(confidence, config.min_confidence), config.max_confidence)
    return int(round(confidence))


def _indicator_notes(aggregate: AggregateIndicatorResult) -> list[str]:
    notes = []
    indicators = aggregate.indicators
    if indicators is None:
        return notes

    if indicators.rsi.zone == OscillatorZone.OVERBOUGHT:
        notes.append(f"RSI overbought ({indicators.rsi.value:.1f})")
    elif indicators.rsi.zone == OscillatorZone.OVERSOLD:
        notes.append(f"RSI oversold ({indicators.rsi.value:.1f})")

    if indicators.macd.crossover == Direction.BULLISH:
        notes.append("MACD bullish crossover")
    elif indicators.macd.crossover == Direction.BEARISH:
        notes.append("MACD bearish crossover")

    bands = indicators.bollinger_bands
    if bands.position == BandPosition.UPPER:
        notes.append("price at upper Bollinger Band")
    elif bands.position == BandPosition.LOWER:
        notes.append("price at lower Bollinger Band")
    if bands.squeeze:
        notes.append("Bollinger squeeze")
    return notes


def build_reasoning(
    pattern_analysis: PatternAnalysis,
    aggregate: Optional[AggregateIndicatorResult],
    combined: tuple[float, float, float],
    confirmed: bool,
) -> str:
    parts = []
    if pattern_analysis.pattern_names:
        parts.append(f"Detected {', '.join(pattern_analysis.pattern_names)}.")
    else:
        parts.append("No patterns detected.")

    if aggregate is not None:
        parts.append(
            f"Indicators: {aggregate.bullish_count} bullish, {aggregate.bearish_count} bearish, "
            f"{aggregate.neutral_count} neutral ({aggregate.signal.value})."
        )
        notes = _indicator_notes(aggregate)
        if notes:
            parts.append(f"Notable: {'; '.join(notes)}.")

    bullish, bearish, neutral = combined
    direction = dominant_direction(bullish, bearish, neutral)
    if direction == Direction.BULLISH:
        parts.append(f"Bullish signals dominate ({bullish:.0f}%).")
    elif direction == Direction.BEARISH:
        parts.append(f"Bearish signals dominate ({bearish:.0f}%).")
    else:
        parts.append(
            f"Mixed signals ({neutral:.0f}% neutral) suggest indecision; wait for clearer direction."
        )

    if confirmed:
        parts.append("Indicators confirm the pattern direction.")
    return " ".join(parts)


def compose_signal(
    pattern_analysis: PatternAnalysis,
    aggregate: Optional[AggregateIndicatorResult] = None,
    config: Optional[CompositionConfig] = None,
) -> CompositionResult:
    """
    Compose action, confidence and reasoning.

    Args:
        pattern_analysis: Scored pattern detections
        aggregate: Indicator aggregate, or None when no price data is available
        config: Weights, threshold and bonuses (defaults when omitted)

    Returns:
        CompositionResult with confidence clamped to the configured range
    """
    config = config or CompositionConfig()

    combined = combine_distributions(pattern_analysis, aggregate, config)
    bullish, bearish, neutral = combined
    action = decide_action(bullish, bearish, config.action_threshold)
    confirmed = is_confirmed(pattern_analysis, aggregate)
    confidence = compute_confidence(pattern_analysis, aggregate, combined, confirmed, config)

    result = CompositionResult(
        action=action,
        confidence=confidence,
        reasoning=build_reasoning(pattern_analysis, aggregate, combined, confirmed),
        indicator_confirmation=confirmed,
        combined_bullish_percent=bullish,
        combined_bearish_percent=bearish,
        combined_neutral_percent=neutral,
        dominant_direction=dominant_direction(bullish, bearish, neutral),
    )
    logger.debug(
        f"Composed {action.value} @ {confidence} "
        f"({bullish:.1f}/{bearish:.1f}/{neutral:.1f}, confirmed={confirmed})"
    )
    return result
