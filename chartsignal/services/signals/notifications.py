"""
Notification Policy

The engine never notifies by itself; callers ask should_notify().
"""

from chartsignal.schemas.signal import ConfidenceLevel, SignalAction, TradingSignal

NOTIFICATION_THRESHOLDS: dict[ConfidenceLevel, int] = {
    ConfidenceLevel.HIGH: 75,
    ConfidenceLevel.MEDIUM: 60,
    ConfidenceLevel.LOW: 50,
}


def should_notify(signal: TradingSignal, threshold: float, enabled: bool = True) -> bool:
    """True for an actionable signal at or above the confidence threshold."""
    if not enabled:
        return False
    if signal.action == SignalAction.HOLD:
        return False
    return signal.confidence >= threshold
