"""
Risk Calculator Service Interface

Defines the contract for the risk parameter layer.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Union

from chartsignal.services.base import BaseService
from chartsignal.schemas.signal import (
    RiskParameters,
    RiskProfile,
    RiskProfileConfig,
    SignalAction,
)


@dataclass
class RiskRequest:
    """Input for risk calculation."""

    action: SignalAction
    confidence: float
    risk_profile: Union[RiskProfile, RiskProfileConfig]


class RiskServiceInterface(BaseService[RiskRequest, RiskParameters]):
    """
    Risk Calculator Contract.

    INPUT: RiskRequest
        - action: BUY / SELL / HOLD
        - confidence: 0-100
        - risk_profile: named profile or explicit base percentages

    OUTPUT: RiskParameters
        - stop_loss / take_profit: percent strings, one decimal
        - risk_reward_ratio: take_profit / stop_loss, one decimal
        - risk_level: profile label

    RULES:
        1. HOLD -> "-" for all values, risk_level "N/A"
        2. confidence >= 70 -> multiplier 1.0
        3. confidence >= 50 -> multiplier 1.2
        4. otherwise        -> multiplier 1.5
        5. stop_loss = base_sl * multiplier, take_profit = base_tp / multiplier
    """

    @property
    def name(self) -> str:
        return "RiskService"

    @abstractmethod
    def execute(self, input_data: RiskRequest) -> RiskParameters:
        """Calculate risk parameters for a signal."""
        pass
