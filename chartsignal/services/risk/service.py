"""
Risk Calculator Implementation

Derives stop-loss / take-profit percentages from the action, the
signal confidence and a caller-supplied risk profile.
PURE PYTHON - deterministic and auditable.
"""

import logging
from typing import Optional, Union

from chartsignal.schemas.signal import (
    RISK_PROFILES,
    RiskParameters,
    RiskProfile,
    RiskProfileConfig,
    SignalAction,
)
from chartsignal.services.base import InvalidInputError
from chartsignal.services.risk.interface import RiskRequest, RiskServiceInterface

logger = logging.getLogger(__name__)

NOT_APPLICABLE = "-"
HOLD_RISK_LEVEL = "N/A"


def resolve_risk_profile(
    risk_profile: Union[RiskProfile, RiskProfileConfig, str],
) -> RiskProfileConfig:
    """Accept a profile name, enum member, or explicit configuration."""
    if isinstance(risk_profile, RiskProfileConfig):
        return risk_profile
    name = getattr(risk_profile, "value", risk_profile)
    try:
        return RISK_PROFILES[RiskProfile(str(name).upper())]
    except (ValueError, KeyError):
        raise InvalidInputError(
            "RiskService",
            f"Unknown risk profile: {risk_profile!r}",
            {"allowed": [p.value for p in RiskProfile]},
        )


def confidence_multiplier(confidence: float) -> float:
    """Lower confidence widens the stop and tightens the target."""
    if confidence >= 70:
        return 1.0
    if confidence >= 50:
        return 1.2
    return 1.5


def hold_risk() -> RiskParameters:
    return RiskParameters(
        stop_loss=NOT_APPLICABLE,
        take_profit=NOT_APPLICABLE,
        risk_reward_ratio=NOT_APPLICABLE,
        risk_level=HOLD_RISK_LEVEL,
    )


def calculate_risk(
    action: SignalAction,
    confidence: float,
    risk_profile: Union[RiskProfile, RiskProfileConfig, str],
) -> RiskParameters:
    """
    Stop-loss / take-profit percentages for a signal.

    Both are formatted to one decimal; the ratio is computed from the
    formatted values so that ratio == take_profit / stop_loss as shown.
    """
    if not 0 <= confidence <= 100:
        raise InvalidInputError(
            "RiskService", f"confidence must be within 0-100, got {confidence}"
        )
    config = resolve_risk_profile(risk_profile)

    if SignalAction(action) == SignalAction.HOLD:
        return hold_risk()

    multiplier = confidence_multiplier(confidence)
    stop_loss = f"{config.stop_loss_percent * multiplier:.1f}"
    take_profit = f"{config.take_profit_percent / multiplier:.1f}"
    ratio = float(take_profit) / float(stop_loss)

    return RiskParameters(
        stop_loss=stop_loss,
        take_profit=take_profit,
        risk_reward_ratio=f"{ratio:.1f}",
        risk_level=config.label,
    )


class RiskService(RiskServiceInterface):
    """
    Risk Calculator.

    Stateless: the risk profile arrives with every request.
    """

    @property
    def name(self) -> str:
        return "RiskService"

    def execute(self, input_data: RiskRequest) -> RiskParameters:
        params = calculate_risk(
            input_data.action, input_data.confidence, input_data.risk_profile
        )
        logger.debug(
            f"Risk for {SignalAction(input_data.action).value} @ {input_data.confidence}: "
            f"SL={params.stop_loss} TP={params.take_profit} R:R={params.risk_reward_ratio}"
        )
        return params


# Singleton instance
_service_instance: Optional[RiskService] = None


def get_risk_service() -> RiskService:
    """Get or create risk service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = RiskService()
    return _service_instance
