"""Tests for services/patterns/"""

import pytest

from chartsignal.schemas.indicators import Direction
from chartsignal.services.patterns import (
    PATTERN_LIBRARY,
    MockPatternClassifier,
    dominant_direction,
    get_pattern,
    patterns_by_type,
    score_patterns,
)


class TestCatalog:

    def test_fourteen_patterns(self):
        assert len(PATTERN_LIBRARY) == 14
        assert len(patterns_by_type(Direction.BULLISH)) == 5
        assert len(patterns_by_type(Direction.BEARISH)) == 5
        assert len(patterns_by_type(Direction.NEUTRAL)) == 4

    def test_unique_ids(self):
        ids = [p.id for p in PATTERN_LIBRARY]
        assert len(ids) == len(set(ids))

    def test_lookup(self):
        assert get_pattern("morning_star").type == Direction.BULLISH
        assert get_pattern("unknown") is None


class TestScorer:

    def test_no_patterns_is_even_split(self):
        analysis = score_patterns([])
        assert analysis.bullish_percent == pytest.approx(100 / 3)
        assert analysis.bearish_percent == pytest.approx(100 / 3)
        assert analysis.bullish_percent + analysis.bearish_percent + analysis.neutral_percent == pytest.approx(100.0)
        assert analysis.dominant_direction == Direction.NEUTRAL
        assert analysis.average_confidence is None
        assert analysis.pattern_count == 0

    def test_single_bullish(self, hammer):
        analysis = score_patterns([hammer])
        assert analysis.bullish_score == pytest.approx(0.9)
        assert analysis.bullish_percent == pytest.approx(100.0)
        assert analysis.dominant_direction == Direction.BULLISH
        assert analysis.average_confidence == 90.0
        assert analysis.pattern_names == ["Hammer"]

    def test_confidence_weighting(self, hammer, shooting_star, doji):
        analysis = score_patterns([hammer, shooting_star, doji])
        total = 0.9 + 0.85 + 0.7
        assert analysis.bullish_percent == pytest.approx(0.9 / total * 100)
        assert analysis.bearish_percent == pytest.approx(0.85 / total * 100)
        assert analysis.dominant_direction == Direction.BULLISH

    def test_bullish_bearish_tie_is_neutral(self, make_detection):
        analysis = score_patterns([
            make_detection(confidence=80),
            make_detection("shooting_star", "Shooting Star", Direction.BEARISH, 80),
        ])
        assert analysis.dominant_direction == Direction.NEUTRAL

    def test_zero_confidence_only(self, make_detection):
        analysis = score_patterns([make_detection(confidence=0)])
        assert analysis.bullish_percent == pytest.approx(100 / 3)
        assert analysis.dominant_direction == Direction.NEUTRAL

    @pytest.mark.parametrize(
        "scores, expected",
        [
            ((2, 1, 1), Direction.BULLISH),
            ((1, 2, 1), Direction.BEARISH),
            ((1, 1, 2), Direction.NEUTRAL),
            ((2, 2, 1), Direction.NEUTRAL),
            ((0, 0, 0), Direction.NEUTRAL),
        ],
    )
    def test_dominant_direction(self, scores, expected):
        assert dominant_direction(*scores) == expected


class TestMockClassifier:

    def test_output_shape(self):
        detections = MockPatternClassifier(seed=3).detect_patterns()
        assert 1 <= len(detections) <= 3
        assert len({d.id for d in detections}) == len(detections)
        for detection in detections:
            assert 55 <= detection.confidence <= 94
            assert get_pattern(detection.id).type == detection.type

    def test_seeded_is_reproducible(self):
        first = MockPatternClassifier(seed=42).detect_patterns("chart.png")
        second = MockPatternClassifier(seed=42).detect_patterns("chart.png")
        assert first == second
