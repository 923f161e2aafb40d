"""Aggregate statistics over a user's symptom logs."""

from __future__ import annotations

from collections import Counter

from src.insights.base import InsightsSummary, SymptomLog, TrendDirection
from src.insights.config_loader import InsightsConfig, get_insights_config
from src.insights.stats import average_severity
from src.insights.symptoms import format_symptom_name


def overall_trend(
    logs: list[SymptomLog], config: InsightsConfig | None = None
) -> TrendDirection:
    """Compare mean severity of the second half of the logs to the first.

    Args:
        logs:   Logs sorted ascending by date.
        config: Thresholds; the global config if omitted.
    """
    rules = (config or get_insights_config()).summary
    if len(logs) < rules.trend_min_logs:
        return TrendDirection.insufficient_data

    midpoint = len(logs) // 2
    difference = average_severity(logs[midpoint:]) - average_severity(logs[:midpoint])
    if abs(difference) < rules.stable_threshold:
        return TrendDirection.stable
    return TrendDirection.improving if difference < 0 else TrendDirection.worsening


def build_summary(
    logs: list[SymptomLog], config: InsightsConfig | None = None
) -> InsightsSummary:
    """Summarise the logs.

    The most frequent symptom is the one reported on the most days; ties go
    to the symptom that appeared first in the chronological log list.
    """
    counts: Counter[str] = Counter()
    for log in logs:
        counts.update(log.symptoms.keys())

    most_frequent = None
    if counts:
        # max() returns the first maximal key; Counter iterates in first-seen order
        most_frequent = format_symptom_name(max(counts, key=lambda s: counts[s]))

    return InsightsSummary(
        total_days_tracked=len(logs),
        most_frequent_symptom=most_frequent,
        average_severity=average_severity(logs),
        trend_direction=overall_trend(logs, config),
    )
