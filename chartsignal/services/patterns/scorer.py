"""
Pattern Scorer

Converts pattern detections into a bullish / bearish / neutral
score distribution. Each detection weighs confidence / 100.
"""

import logging
from typing import Sequence

from chartsignal.schemas.indicators import Direction
from chartsignal.schemas.patterns import PatternAnalysis, PatternDetection

logger = logging.getLogger(__name__)

EVEN_SPLIT = 100 / 3


def dominant_direction(bullish: float, bearish: float, neutral: float) -> Direction:
    """The strictly largest bucket; any tie for the lead is neutral."""
    scores = {
        Direction.BULLISH: bullish,
        Direction.BEARISH: bearish,
        Direction.NEUTRAL: neutral,
    }
    top = max(scores.values())
    leaders = [direction for direction, score in scores.items() if score == top]
    return leaders[0] if len(leaders) == 1 else Direction.NEUTRAL


def even_split() -> tuple[float, float, float]:
    """Neutral evidence: thirds that still sum to exactly 100."""
    return EVEN_SPLIT, EVEN_SPLIT, 100 - 2 * EVEN_SPLIT


def score_patterns(detections: Sequence[PatternDetection]) -> PatternAnalysis:
    """
    Score a list of detections.

    No detections (or only zero-confidence ones) yield an even split
    rather than all-zero percentages.
    """
    bullish_score = bearish_score = neutral_score = 0.0

    for pattern in detections:
        weight = pattern.confidence / 100
        if pattern.type == Direction.BULLISH:
            bullish_score += weight
        elif pattern.type == Direction.BEARISH:
            bearish_score += weight
        else:
            neutral_score += weight

    total = bullish_score + bearish_score + neutral_score
    if total > 0:
        bullish_percent = bullish_score / total * 100
        bearish_percent = bearish_score / total * 100
        neutral_percent = neutral_score / total * 100
    else:
        bullish_percent, bearish_percent, neutral_percent = even_split()

    average_confidence = (
        sum(p.confidence for p in detections) / len(detections) if detections else None
    )

    analysis = PatternAnalysis(
        bullish_score=bullish_score,
        bearish_score=bearish_score,
        neutral_score=neutral_score,
        bullish_percent=bullish_percent,
        bearish_percent=bearish_percent,
        neutral_percent=neutral_percent,
        dominant_direction=dominant_direction(bullish_score, bearish_score, neutral_score),
        pattern_count=len(detections),
        average_confidence=average_confidence,
        pattern_names=[p.name for p in detections],
    )
    logger.debug(
        f"Scored {len(detections)} patterns: {analysis.dominant_direction.value} "
        f"({bullish_percent:.1f}/{bearish_percent:.1f}/{neutral_percent:.1f})"
    )
    return analysis
