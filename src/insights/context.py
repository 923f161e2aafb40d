"""Render insights as plain text for the chat assistant's system prompt."""

from __future__ import annotations

import json

from src.insights.base import IntelligentInsights

# Users with fewer logged days get no insights block at all
MIN_DAYS_FOR_CONTEXT = 5

HEADER = "DATA-DRIVEN INSIGHTS (Use these to provide informed recommendations!):"


def build_insights_context(insights: IntelligentInsights | None) -> str:
    """Format insights as a numbered, sectioned text block.

    Args:
        insights: Result of ``InsightsEngine.analyze_user_data``.

    Returns:
        The text block, or "" when there is too little data to be useful.
    """
    if insights is None or insights.summary.total_days_tracked < MIN_DAYS_FOR_CONTEXT:
        return ""

    summary = insights.summary
    parts = [HEADER, "", "Summary:"]
    parts.append(f"  - Total days tracked: {summary.total_days_tracked}")
    if summary.most_frequent_symptom:
        parts.append(f"  - Most frequent symptom: {summary.most_frequent_symptom}")
    parts.append(f"  - Average symptom severity: {summary.average_severity:.1f}/5")
    parts.append(f"  - Overall trend: {summary.trend_direction.value}")

    if insights.patterns:
        parts.extend(["", f"Detected Patterns ({len(insights.patterns)}):"])
        for i, pattern in enumerate(insights.patterns, start=1):
            parts.append(
                f"  {i}. [{pattern.confidence.value.upper()}] {pattern.description}"
            )
            if pattern.data:
                parts.append(f"     Evidence: {json.dumps(pattern.data)}")

    if insights.correlations:
        parts.extend(["", f"Correlations Found ({len(insights.correlations)}):"])
        for i, corr in enumerate(insights.correlations, start=1):
            parts.append(f"  {i}. {corr.description}")
            parts.append(
                f"     Strength: {corr.strength:.2f} | Sample: {corr.sample_size} days"
            )

    if insights.recommendations:
        parts.extend(
            ["", f"Data-Driven Recommendations ({len(insights.recommendations)}):"]
        )
        for i, rec in enumerate(insights.recommendations, start=1):
            parts.append(f"  {i}. [{rec.priority.value.upper()}] {rec.title}")
            parts.append(f"     Evidence: {rec.evidence}")
            parts.append(f"     Suggested action: {rec.action}")

    return "\n".join(parts)
