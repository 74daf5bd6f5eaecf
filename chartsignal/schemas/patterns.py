"""
CONTRACT 3: Pattern Evidence

Input: list[PatternDetection] (from an external image classifier)
Output: PatternAnalysis

The engine never looks at images. It only consumes the
{name, type, confidence} triples a classifier produces.
"""

from typing import Optional
from pydantic import BaseModel, Field

from chartsignal.schemas.indicators import Direction


class PatternDefinition(BaseModel):
    """Catalog entry for a candlestick formation."""

    id: str
    name: str
    type: Direction
    description: str

    class Config:
        frozen = True


class PatternDetection(BaseModel):
    """
    A single detected pattern.
    Sent by: Pattern classifier
    Received by: Pattern Scorer
    """

    id: str
    name: str
    type: Direction
    confidence: float = Field(..., ge=0, le=100)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "hammer",
                "name": "Hammer",
                "type": "bullish",
                "confidence": 82,
            }
        }


class PatternAnalysis(BaseModel):
    """
    Score distribution over the detected patterns.
    Returned by: Pattern Scorer
    Consumed by: Signal Composer

    The three percentages always sum to 100. With no patterns they are
    an even split, so "nothing detected" reads as neutral evidence.
    """

    bullish_score: float = Field(default=0.0, ge=0)
    bearish_score: float = Field(default=0.0, ge=0)
    neutral_score: float = Field(default=0.0, ge=0)
    bullish_percent: float = Field(..., ge=0, le=100)
    bearish_percent: float = Field(..., ge=0, le=100)
    neutral_percent: float = Field(..., ge=0, le=100)
    dominant_direction: Direction
    pattern_count: int = Field(default=0, ge=0)
    average_confidence: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Mean detection confidence (None when nothing was detected)",
    )
    pattern_names: list[str] = Field(default_factory=list)

    class Config:
        frozen = True
