"""
Risk Calculator

CONTRACT:
    Input:  SignalAction + confidence + RiskProfile
    Output: RiskParameters

RESPONSIBILITIES:
    - Scale base stop-loss / take-profit by confidence
    - Report the risk-reward ratio
    - Return sentinels for HOLD

PURE PYTHON - deterministic and auditable.
"""

from chartsignal.services.risk.interface import RiskRequest, RiskServiceInterface
from chartsignal.services.risk.service import (
    RiskService,
    calculate_risk,
    confidence_multiplier,
    get_risk_service,
    resolve_risk_profile,
)

__all__ = [
    "RiskRequest",
    "RiskServiceInterface",
    "RiskService",
    "calculate_risk",
    "confidence_multiplier",
    "get_risk_service",
    "resolve_risk_profile",
]
