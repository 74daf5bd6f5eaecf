"""
Signal Service

CONTRACT:
    Input:  PriceSeries + list[PatternDetection] + RiskProfile
    Output: TradingSignal

RESPONSIBILITIES:
    - Fuse pattern and indicator evidence
    - Attach risk parameters
    - Notification policy and history statistics for callers
"""

from chartsignal.services.signals.composer import compose_signal
from chartsignal.services.signals.interface import SignalRequest, SignalServiceInterface
from chartsignal.services.signals.notifications import NOTIFICATION_THRESHOLDS, should_notify
from chartsignal.services.signals.service import (
    SignalService,
    generate_signal,
    get_signal_service,
)
from chartsignal.services.signals.stats import summarize_history

__all__ = [
    "compose_signal",
    "SignalRequest",
    "SignalServiceInterface",
    "NOTIFICATION_THRESHOLDS",
    "should_notify",
    "SignalService",
    "generate_signal",
    "get_signal_service",
    "summarize_history",
]
