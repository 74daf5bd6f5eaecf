"""
Indicator Aggregation

Majority vote over the six indicator directions.
"""

from typing import Sequence

from chartsignal.schemas.indicators import (
    AggregateIndicatorResult,
    Direction,
    IndicatorSet,
)

MAJORITY_COUNT = 4
MAX_CONFIDENCE = 95


def vote(signals: Sequence[Direction]) -> tuple[Direction, float]:
    """
    Decide a direction and confidence from individual indicator votes.

    Four or more votes in one direction is a majority (60, 75, 90);
    otherwise a plurality scores 40 + 5 per vote. Ties are neutral at 50.
    """
    bullish = sum(1 for s in signals if s == Direction.BULLISH)
    bearish = sum(1 for s in signals if s == Direction.BEARISH)

    if bullish >= MAJORITY_COUNT:
        direction, confidence = Direction.BULLISH, 60 + (bullish - MAJORITY_COUNT) * 15
    elif bearish >= MAJORITY_COUNT:
        direction, confidence = Direction.BEARISH, 60 + (bearish - MAJORITY_COUNT) * 15
    elif bullish > bearish:
        direction, confidence = Direction.BULLISH, 40 + bullish * 5
    elif bearish > bullish:
        direction, confidence = Direction.BEARISH, 40 + bearish * 5
    else:
        direction, confidence = Direction.NEUTRAL, 50

    return direction, float(min(MAX_CONFIDENCE, confidence))


def aggregate_signals(indicators: IndicatorSet) -> AggregateIndicatorResult:
    """Combine the six per-indicator classifications into one reading."""
    signals = indicators.signals()
    direction, confidence = vote(signals)

    return AggregateIndicatorResult(
        indicators=indicators,
        bullish_count=signals.count(Direction.BULLISH),
        bearish_count=signals.count(Direction.BEARISH),
        neutral_count=signals.count(Direction.NEUTRAL),
        signal=direction,
        confidence=confidence,
    )
