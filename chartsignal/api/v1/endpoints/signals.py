"""
Signal API Endpoints

Main endpoints for trading signals.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from chartsignal.core.config import Settings, get_settings
from chartsignal.schemas.indicators import IndicatorPeriods
from chartsignal.schemas.market import PriceSeries
from chartsignal.schemas.patterns import PatternDetection
from chartsignal.schemas.signal import (
    HistoryRecord,
    RiskParameters,
    RiskProfile,
    SignalAction,
    SignalStats,
    TradingSignal,
)
from chartsignal.services.risk import RiskRequest, get_risk_service
from chartsignal.services.signals import (
    SignalRequest,
    get_signal_service,
    should_notify,
    summarize_history,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class GenerateSignalRequest(BaseModel):
    """Request body for signal generation."""

    series: Optional[PriceSeries] = Field(
        default=None,
        description="OHLC bars; omit to compose from patterns alone",
    )
    patterns: list[PatternDetection] = Field(default_factory=list)
    risk_profile: Optional[RiskProfile] = Field(
        default=None,
        description="Defaults to the configured risk profile",
    )
    periods: Optional[IndicatorPeriods] = None


class SignalResponse(BaseModel):
    signal: TradingSignal
    notify: bool = Field(..., description="Whether the signal passes the notification policy")


class RiskCalculationRequest(BaseModel):
    action: SignalAction
    confidence: float = Field(..., ge=0, le=100)
    risk_profile: RiskProfile = RiskProfile.MODERATE


@router.post("/generate", response_model=SignalResponse)
async def generate(
    request: GenerateSignalRequest,
    settings: Settings = Depends(get_settings),
):
    """
    Generate a trading signal.

    This runs the FULL pipeline:
    1. Calculate indicators (when bars are given)
    2. Score pattern detections
    3. Compose action, confidence and reasoning
    4. Attach stop-loss / take-profit

    The signal is a SUGGESTION; notify only reports whether it clears
    the configured notification threshold.
    """
    signal_request = SignalRequest(
        series=request.series,
        patterns=request.patterns,
        risk_profile=request.risk_profile or settings.default_risk_profile,
        config=settings.composition_config(),
        periods=request.periods,
    )

    try:
        signal = get_signal_service().execute(signal_request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SignalResponse(
        signal=signal,
        notify=should_notify(
            signal,
            settings.notification_threshold,
            enabled=settings.notifications_enabled,
        ),
    )


@router.post("/risk", response_model=RiskParameters)
async def risk(request: RiskCalculationRequest):
    """Stop-loss / take-profit for an action and confidence."""
    try:
        return get_risk_service().execute(
            RiskRequest(
                action=request.action,
                confidence=request.confidence,
                risk_profile=request.risk_profile,
            )
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/stats", response_model=SignalStats)
async def stats(records: list[HistoryRecord]):
    """Statistics over past analyses supplied by the caller."""
    logger.debug(f"Summarizing {len(records)} history records")
    return summarize_history(records)
