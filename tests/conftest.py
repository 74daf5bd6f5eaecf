"""Shared test fixtures for signal engine tests."""

import pytest

from chartsignal.schemas.indicators import Direction
from chartsignal.schemas.market import PriceSeries
from chartsignal.schemas.patterns import PatternDetection


def make_detection(pattern_id="hammer", name="Hammer", type=Direction.BULLISH, confidence=80.0):
    """Create a pattern detection as a classifier would report it."""
    return PatternDetection(id=pattern_id, name=name, type=type, confidence=confidence)


@pytest.fixture
def flat_series():
    """30 bars with every price at 100."""
    return PriceSeries.from_arrays([100.0] * 30, symbol="FLAT")


@pytest.fixture
def rising_series():
    """Closes rising by 1 for 30 bars (100..129)."""
    return PriceSeries.from_arrays([100.0 + i for i in range(30)], symbol="UP")


@pytest.fixture
def falling_series():
    """Closes falling by 1 for 30 bars (129..100)."""
    return PriceSeries.from_arrays([129.0 - i for i in range(30)], symbol="DOWN")


@pytest.fixture
def hammer():
    return make_detection(confidence=90.0)


@pytest.fixture
def shooting_star():
    return make_detection("shooting_star", "Shooting Star", Direction.BEARISH, 85.0)


@pytest.fixture
def doji():
    return make_detection("doji", "Doji", Direction.NEUTRAL, 70.0)


@pytest.fixture(name="make_detection")
def make_detection_fixture():
    return make_detection
