"""
CONTRACT 4: Signal Composition & Risk

Input: PatternAnalysis + AggregateIndicatorResult + RiskProfile
Output: TradingSignal

Deterministic fusion of pattern and indicator evidence.
Every constant of the formula lives in CompositionConfig.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from chartsignal.schemas.indicators import AggregateIndicatorResult, Direction
from chartsignal.schemas.patterns import PatternDetection


# =============================================================================
# ENUMS
# =============================================================================


class SignalAction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RiskProfile(str, Enum):
    CONSERVATIVE = "CONSERVATIVE"
    MODERATE = "MODERATE"
    AGGRESSIVE = "AGGRESSIVE"


class ConfidenceLevel(str, Enum):
    HIGH = "HIGH"  # >= 70
    MEDIUM = "MEDIUM"  # >= 40
    LOW = "LOW"

    @classmethod
    def from_confidence(cls, confidence: float) -> "ConfidenceLevel":
        if confidence >= 70:
            return cls.HIGH
        if confidence >= 40:
            return cls.MEDIUM
        return cls.LOW


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    NEUTRAL = "neutral"


# =============================================================================
# INPUT: Risk profile configuration
# =============================================================================


class RiskProfileConfig(BaseModel):
    """Base stop-loss / take-profit percentages for a risk appetite."""

    label: str
    stop_loss_percent: float = Field(..., ge=0.1, le=50)
    take_profit_percent: float = Field(..., ge=0.2, le=100)

    class Config:
        frozen = True


RISK_PROFILES: dict[RiskProfile, RiskProfileConfig] = {
    RiskProfile.CONSERVATIVE: RiskProfileConfig(
        label="Conservative", stop_loss_percent=1.0, take_profit_percent=2.0
    ),
    RiskProfile.MODERATE: RiskProfileConfig(
        label="Moderate", stop_loss_percent=2.0, take_profit_percent=4.0
    ),
    RiskProfile.AGGRESSIVE: RiskProfileConfig(
        label="Aggressive", stop_loss_percent=3.0, take_profit_percent=6.0
    ),
}


# =============================================================================
# INPUT: Composition constants
# =============================================================================


class CompositionConfig(BaseModel):
    """
    Weights, thresholds and bonuses of the composition formula.

    Defaults are the indicator-aware formula set: 60/40 pattern/indicator
    weighting and a 55% action threshold.
    """

    pattern_weight: float = Field(default=0.6, ge=0, le=1)
    indicator_weight: float = Field(default=0.4, ge=0, le=1)
    action_threshold: float = Field(
        default=55.0,
        gt=0,
        le=100,
        description="Minimum combined % for a directional action",
    )

    no_pattern_confidence: float = Field(default=30.0, ge=0, le=100)
    alignment_bonus_max: float = Field(default=15.0, ge=0)
    multi_pattern_bonus_step: float = Field(default=5.0, ge=0)
    multi_pattern_bonus_max: float = Field(default=10.0, ge=0)

    pattern_blend: float = Field(default=0.7, ge=0, le=1)
    indicator_blend: float = Field(default=0.3, ge=0, le=1)
    confirmation_bonus: float = Field(default=10.0, ge=0)
    consensus_bonus: float = Field(default=8.0, ge=0)
    consensus_count: int = Field(
        default=5,
        ge=1,
        le=6,
        description="Indicators that must agree for the consensus bonus",
    )

    min_confidence: float = Field(default=20.0, ge=0, le=100)
    max_confidence: float = Field(default=95.0, ge=0, le=100)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_weights(self):
        if self.pattern_weight + self.indicator_weight <= 0:
            raise ValueError("pattern_weight + indicator_weight must be positive")
        if self.min_confidence > self.max_confidence:
            raise ValueError("min_confidence must be <= max_confidence")
        return self


# =============================================================================
# OUTPUT: Components
# =============================================================================


class RiskParameters(BaseModel):
    """
    Stop-loss / take-profit as percentages formatted to one decimal.
    All three are "-" (and risk_level "N/A") for HOLD.
    """

    stop_loss: str
    take_profit: str
    risk_reward_ratio: str
    risk_level: str

    class Config:
        frozen = True


class CompositionResult(BaseModel):
    """Action, confidence and reasoning before risk parameters are attached."""

    action: SignalAction
    confidence: int = Field(..., ge=0, le=100)
    reasoning: str
    indicator_confirmation: bool
    combined_bullish_percent: float = Field(..., ge=0, le=100)
    combined_bearish_percent: float = Field(..., ge=0, le=100)
    combined_neutral_percent: float = Field(..., ge=0, le=100)
    dominant_direction: Direction

    class Config:
        frozen = True


# =============================================================================
# OUTPUT: TradingSignal (Complete Response)
# =============================================================================


class TradingSignal(BaseModel):
    """
    Final recommendation.
    Returned by: Signal Service
    Consumed by: API, history, notification policy

    IMPORTANT: This is a SUGGESTION. The human makes the final decision.
    """

    action: SignalAction
    confidence: int = Field(..., ge=20, le=95)
    confidence_level: ConfidenceLevel
    stop_loss: str
    take_profit: str
    risk_reward_ratio: str
    risk_level: str
    reasoning: str
    indicator_confirmation: bool = False
    indicators: Optional[AggregateIndicatorResult] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "action": "BUY",
                "confidence": 78,
                "confidence_level": "HIGH",
                "stop_loss": "2.0",
                "take_profit": "4.0",
                "risk_reward_ratio": "2.0",
                "risk_level": "Moderate",
                "reasoning": "Detected Hammer. Indicators: 4 bullish, 1 bearish of 6. ...",
                "indicator_confirmation": True,
            }
        }


# =============================================================================
# History statistics
# =============================================================================


class HistoryRecord(BaseModel):
    """A past analysis as kept by the (external) history store."""

    id: str
    action: SignalAction
    confidence: float = Field(..., ge=0, le=100)
    patterns: list[PatternDetection] = Field(default_factory=list)
    outcome: Optional[Outcome] = None


class PatternFrequency(BaseModel):
    name: str
    count: int


class PatternPerformance(BaseModel):
    name: str
    total: int
    accuracy: float = Field(..., ge=0, le=100)
    avg_confidence: int


class SignalStats(BaseModel):
    """Aggregate statistics over analysis history."""

    total_analyses: int
    signal_distribution: dict[SignalAction, int]
    avg_confidence: int
    top_patterns: list[PatternFrequency]
    pattern_performance: list[PatternPerformance]
    win_rate: float = Field(..., ge=0, le=100)
