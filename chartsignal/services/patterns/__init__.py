"""
Pattern Evidence Service

CONTRACT:
    Input:  list[PatternDetection] (from an external classifier)
    Output: PatternAnalysis

RESPONSIBILITIES:
    - Weigh detections by confidence
    - Produce a bullish / bearish / neutral distribution summing to 100
    - Expose the pattern catalog and the classifier contract

The engine never inspects images itself.
"""

from chartsignal.services.patterns.catalog import (
    PATTERN_LIBRARY,
    get_pattern,
    patterns_by_type,
)
from chartsignal.services.patterns.classifier import (
    PatternClassifier,
    MockPatternClassifier,
)
from chartsignal.services.patterns.scorer import (
    score_patterns,
    dominant_direction,
    even_split,
)

__all__ = [
    "PATTERN_LIBRARY",
    "get_pattern",
    "patterns_by_type",
    "PatternClassifier",
    "MockPatternClassifier",
    "score_patterns",
    "dominant_direction",
    "even_split",
]
