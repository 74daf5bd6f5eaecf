"""Tests for services/signals/stats.py and services/signals/notifications.py"""

import pytest

from chartsignal.schemas.signal import (
    ConfidenceLevel,
    HistoryRecord,
    Outcome,
    SignalAction,
    TradingSignal,
)
from chartsignal.services.signals import (
    NOTIFICATION_THRESHOLDS,
    should_notify,
    summarize_history,
)


def make_signal(action=SignalAction.BUY, confidence=80):
    return TradingSignal(
        action=action,
        confidence=confidence,
        confidence_level=ConfidenceLevel.from_confidence(confidence),
        stop_loss="2.0",
        take_profit="4.0",
        risk_reward_ratio="2.0",
        risk_level="Moderate",
        reasoning="test",
    )


class TestShouldNotify:

    def test_above_threshold(self):
        assert should_notify(make_signal(confidence=80), 75)

    def test_at_threshold(self):
        assert should_notify(make_signal(confidence=75), 75)

    def test_below_threshold(self):
        assert not should_notify(make_signal(confidence=74), 75)

    def test_hold_never_notifies(self):
        assert not should_notify(make_signal(SignalAction.HOLD, 95), 50)

    def test_disabled(self):
        assert not should_notify(make_signal(confidence=95), 50, enabled=False)

    def test_thresholds(self):
        assert NOTIFICATION_THRESHOLDS[ConfidenceLevel.HIGH] == 75
        assert NOTIFICATION_THRESHOLDS[ConfidenceLevel.MEDIUM] == 60
        assert NOTIFICATION_THRESHOLDS[ConfidenceLevel.LOW] == 50


class TestConfidenceLevel:

    @pytest.mark.parametrize(
        "confidence, expected",
        [(95, ConfidenceLevel.HIGH), (70, ConfidenceLevel.HIGH), (69, ConfidenceLevel.MEDIUM),
         (40, ConfidenceLevel.MEDIUM), (39, ConfidenceLevel.LOW)],
    )
    def test_levels(self, confidence, expected):
        assert ConfidenceLevel.from_confidence(confidence) == expected


class TestSummarizeHistory:

    @pytest.fixture
    def records(self, hammer, shooting_star, doji):
        return [
            HistoryRecord(id="1", action=SignalAction.BUY, confidence=80, patterns=[hammer], outcome=Outcome.WIN),
            HistoryRecord(id="2", action=SignalAction.BUY, confidence=70, patterns=[hammer, doji], outcome=Outcome.LOSS),
            HistoryRecord(id="3", action=SignalAction.SELL, confidence=65, patterns=[shooting_star]),
            HistoryRecord(id="4", action=SignalAction.HOLD, confidence=40, patterns=[]),
        ]

    def test_summary(self, records):
        stats = summarize_history(records)

        assert stats.total_analyses == 4
        assert stats.signal_distribution == {
            SignalAction.BUY: 2,
            SignalAction.SELL: 1,
            SignalAction.HOLD: 1,
        }
        assert stats.avg_confidence == 64  # 255 / 4 = 63.75
        assert stats.top_patterns[0].name == "Hammer"
        assert stats.top_patterns[0].count == 2
        # one win out of two judged records
        assert stats.win_rate == 50.0

    def test_pattern_performance(self, records):
        performance = {p.name: p for p in summarize_history(records).pattern_performance}

        assert performance["Hammer"].total == 2
        assert performance["Hammer"].accuracy == 50.0
        assert performance["Hammer"].avg_confidence == 90
        assert performance["Shooting Star"].accuracy == 0.0

    def test_top_patterns_limited_to_five(self, make_detection):
        records = [
            HistoryRecord(
                id=str(i),
                action=SignalAction.BUY,
                confidence=60,
                patterns=[make_detection(f"p{i}", f"Pattern {i}")],
            )
            for i in range(8)
        ]
        assert len(summarize_history(records).top_patterns) == 5

    def test_empty_history(self):
        stats = summarize_history([])
        assert stats.total_analyses == 0
        assert stats.avg_confidence == 0
        assert stats.win_rate == 0.0
        assert stats.top_patterns == []

    def test_no_outcomes_means_zero_win_rate(self, hammer):
        records = [HistoryRecord(id="1", action=SignalAction.BUY, confidence=80, patterns=[hammer])]
        assert summarize_history(records).win_rate == 0.0
