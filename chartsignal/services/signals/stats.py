"""
History Statistics

Summaries over past analyses: action distribution, average confidence,
most frequent patterns and outcome-based win rates.
"""

from collections import Counter
from typing import Sequence

from chartsignal.schemas.signal import (
    HistoryRecord,
    Outcome,
    PatternFrequency,
    PatternPerformance,
    SignalAction,
    SignalStats,
)

TOP_PATTERN_COUNT = 5


def pattern_performance(records: Sequence[HistoryRecord]) -> list[PatternPerformance]:
    """Per-pattern hit rate and mean detection confidence."""
    totals: Counter = Counter()
    wins: Counter = Counter()
    confidence_sums: Counter = Counter()

    for record in records:
        for pattern in record.patterns:
            totals[pattern.name] += 1
            confidence_sums[pattern.name] += pattern.confidence
            if record.outcome == Outcome.WIN:
                wins[pattern.name] += 1

    return [
        PatternPerformance(
            name=name,
            total=total,
            accuracy=wins[name] / total * 100,
            avg_confidence=round(confidence_sums[name] / total),
        )
        for name, total in totals.most_common()
    ]


def summarize_history(records: Sequence[HistoryRecord]) -> SignalStats:
    """
    Aggregate statistics over analysis history.

    The win rate only counts records with a recorded outcome and is 0
    when none have one.
    """
    total = len(records)
    distribution = {action: 0 for action in SignalAction}
    for record in records:
        distribution[record.action] += 1

    avg_confidence = round(sum(r.confidence for r in records) / total) if total else 0

    pattern_counts = Counter(p.name for r in records for p in r.patterns)
    top_patterns = [
        PatternFrequency(name=name, count=count)
        for name, count in pattern_counts.most_common(TOP_PATTERN_COUNT)
    ]

    judged = [r for r in records if r.outcome is not None]
    wins = sum(1 for r in judged if r.outcome == Outcome.WIN)
    win_rate = round(wins / len(judged) * 100, 1) if judged else 0.0

    return SignalStats(
        total_analyses=total,
        signal_distribution=distribution,
        avg_confidence=avg_confidence,
        top_patterns=top_patterns,
        pattern_performance=pattern_performance(records),
        win_rate=win_rate,
    )
