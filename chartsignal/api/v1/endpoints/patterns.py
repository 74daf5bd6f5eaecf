"""
Pattern API Endpoints

Pattern scoring and the candlestick pattern catalog.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from chartsignal.schemas.indicators import Direction
from chartsignal.schemas.patterns import PatternAnalysis, PatternDefinition, PatternDetection
from chartsignal.services.patterns import (
    MockPatternClassifier,
    get_pattern,
    patterns_by_type,
    score_patterns,
)

router = APIRouter()


@router.post("/score", response_model=PatternAnalysis)
async def score(detections: list[PatternDetection]):
    """Score detections into a bullish / bearish / neutral distribution."""
    return score_patterns(detections)


@router.get("/library", response_model=list[PatternDefinition])
async def library(type: Optional[Direction] = Query(default=None)):
    """List catalog patterns, optionally filtered by direction."""
    return patterns_by_type(type)


@router.get("/library/{pattern_id}", response_model=PatternDefinition)
async def library_entry(pattern_id: str):
    pattern = get_pattern(pattern_id)
    if pattern is None:
        raise HTTPException(status_code=404, detail=f"Unknown pattern: {pattern_id}")
    return pattern


@router.get("/mock", response_model=list[PatternDetection])
async def mock_detections(seed: Optional[int] = Query(default=None)):
    """
    Detections from the mock classifier.

    Stand-in for image recognition while no trained model is configured.
    """
    return MockPatternClassifier(seed=seed).detect_patterns()
