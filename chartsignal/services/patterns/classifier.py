"""
Pattern Classifier Interface

Image-to-pattern recognition is an external capability. The engine only
depends on this contract; MockPatternClassifier stands in until a trained
model is plugged in.
"""

import random
from abc import ABC, abstractmethod
from typing import Any, Optional

from chartsignal.schemas.patterns import PatternDetection
from chartsignal.services.patterns.catalog import PATTERN_LIBRARY


class PatternClassifier(ABC):
    """
    Pattern Classifier Contract.

    INPUT: a chart image (path, bytes, or any handle the implementation accepts)

    OUTPUT: list[PatternDetection]
        - id / name of a catalog pattern
        - type: bullish / bearish / neutral
        - confidence: 0-100
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def detect_patterns(self, image: Any) -> list[PatternDetection]:
        """Detect candlestick patterns in an image."""
        pass


class MockPatternClassifier(PatternClassifier):
    """
    Random stand-in for a trained model.

    Picks 1-3 distinct catalog patterns with confidence 55-94.
    Pass a seed for reproducible output.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "MockPatternClassifier"

    def detect_patterns(self, image: Any = None) -> list[PatternDetection]:
        count = self._rng.randint(1, 3)
        selected = self._rng.sample(PATTERN_LIBRARY, count)
        return [
            PatternDetection(
                id=pattern.id,
                name=pattern.name,
                type=pattern.type,
                confidence=self._rng.randint(55, 94),
            )
            for pattern in selected
        ]
