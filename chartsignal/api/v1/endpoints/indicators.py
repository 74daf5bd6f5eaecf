"""
Indicator API Endpoints

Endpoints for technical indicator calculations.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from chartsignal.core.config import Settings, get_settings
from chartsignal.schemas.indicators import AggregateIndicatorResult
from chartsignal.schemas.market import PriceSeries
from chartsignal.services.indicators import get_indicator_service
from chartsignal.services.market_data import generate_mock_price_series

logger = logging.getLogger(__name__)

router = APIRouter()


class DemoIndicatorResponse(BaseModel):
    """Synthetic series together with its indicator analysis."""

    series: PriceSeries
    indicators: AggregateIndicatorResult


@router.post("/", response_model=AggregateIndicatorResult)
async def calculate_indicators(series: PriceSeries):
    """
    Calculate all indicators for a price series.

    Returns:
        - SMA, EMA (trend)
        - RSI, MACD, Stochastic (momentum)
        - Bollinger Bands (volatility)
        - Aggregate direction and confidence
    """
    try:
        return get_indicator_service().execute(series)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/demo", response_model=DemoIndicatorResponse)
async def demo_indicators(
    periods: Optional[int] = Query(default=None, ge=1, le=500),
    seed: Optional[int] = Query(default=None),
    settings: Settings = Depends(get_settings),
):
    """
    Indicators over a synthetic random-walk series.

    Pass a seed for a reproducible series.
    """
    series = generate_mock_price_series(
        periods=periods or settings.demo_periods,
        seed=seed,
        symbol="DEMO",
    )
    logger.debug(f"Generated demo series: {len(series)} bars (seed={seed})")
    try:
        indicators = get_indicator_service().execute(series)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DemoIndicatorResponse(series=series, indicators=indicators)
