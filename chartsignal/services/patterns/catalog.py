"""
Candlestick Pattern Catalog

The formations a classifier may report, with their directional bias.
"""

from typing import Optional

from chartsignal.schemas.indicators import Direction
from chartsignal.schemas.patterns import PatternDefinition


def _pattern(id: str, name: str, type: Direction, description: str) -> PatternDefinition:
    return PatternDefinition(id=id, name=name, type=type, description=description)


PATTERN_LIBRARY: tuple[PatternDefinition, ...] = (
    # Bullish
    _pattern(
        "hammer", "Hammer", Direction.BULLISH,
        "A bullish reversal pattern with a small body and long lower wick.",
    ),
    _pattern(
        "bullish_engulfing", "Bullish Engulfing", Direction.BULLISH,
        "A two-candle pattern where a bullish candle engulfs the previous bearish candle.",
    ),
    _pattern(
        "morning_star", "Morning Star", Direction.BULLISH,
        "A three-candle bullish reversal pattern at the end of a downtrend.",
    ),
    _pattern(
        "piercing_line", "Piercing Line", Direction.BULLISH,
        "A two-candle pattern with a bullish close above midpoint of prior bearish candle.",
    ),
    _pattern(
        "three_white_soldiers", "Three White Soldiers", Direction.BULLISH,
        "Three consecutive bullish candles indicating strong upward momentum.",
    ),
    # Bearish
    _pattern(
        "shooting_star", "Shooting Star", Direction.BEARISH,
        "A bearish reversal pattern with a small body and long upper wick.",
    ),
    _pattern(
        "bearish_engulfing", "Bearish Engulfing", Direction.BEARISH,
        "A two-candle pattern where a bearish candle engulfs the previous bullish candle.",
    ),
    _pattern(
        "evening_star", "Evening Star", Direction.BEARISH,
        "A three-candle bearish reversal pattern at the end of an uptrend.",
    ),
    _pattern(
        "dark_cloud_cover", "Dark Cloud Cover", Direction.BEARISH,
        "A bearish reversal pattern that opens above and closes below mid-point of prior candle.",
    ),
    _pattern(
        "three_black_crows", "Three Black Crows", Direction.BEARISH,
        "Three consecutive bearish candles indicating strong downward momentum.",
    ),
    # Neutral
    _pattern(
        "doji", "Doji", Direction.NEUTRAL,
        "Indicates indecision; open and close are nearly equal.",
    ),
    _pattern(
        "spinning_top", "Spinning Top", Direction.NEUTRAL,
        "Small body with upper and lower wicks; signals indecision.",
    ),
    _pattern(
        "gravestone_doji", "Gravestone Doji", Direction.NEUTRAL,
        "Doji with long upper wick; potential bearish reversal.",
    ),
    _pattern(
        "dragonfly_doji", "Dragonfly Doji", Direction.NEUTRAL,
        "Doji with long lower wick; potential bullish reversal.",
    ),
)

_BY_ID = {p.id: p for p in PATTERN_LIBRARY}


def get_pattern(pattern_id: str) -> Optional[PatternDefinition]:
    """Look up a catalog entry by id."""
    return _BY_ID.get(pattern_id)


def patterns_by_type(pattern_type: Optional[Direction] = None) -> list[PatternDefinition]:
    """All catalog entries, optionally restricted to one direction."""
    if pattern_type is None:
        return list(PATTERN_LIBRARY)
    return [p for p in PATTERN_LIBRARY if p.type == pattern_type]
