"""Tests for the plain-text insights block used in chat prompts."""

from __future__ import annotations

from src.insights.base import (
    Confidence,
    Correlation,
    DataDrivenRecommendation,
    DetectedPattern,
    InsightsSummary,
    IntelligentInsights,
    PatternType,
    Priority,
    RecommendationCategory,
    TrendDirection,
)
from src.insights.context import HEADER, build_insights_context


def summary(days: int = 12, most_frequent: str | None = "Hot flashes") -> InsightsSummary:
    return InsightsSummary(
        total_days_tracked=days,
        most_frequent_symptom=most_frequent,
        average_severity=2.75,
        trend_direction=TrendDirection.worsening,
    )


class TestBuildInsightsContext:
    def test_none(self) -> None:
        assert build_insights_context(None) == ""

    def test_too_few_days(self) -> None:
        assert build_insights_context(IntelligentInsights(summary=summary(days=4))) == ""

    def test_summary_only(self) -> None:
        text = build_insights_context(IntelligentInsights(summary=summary()))
        assert text.splitlines() == [
            HEADER,
            "",
            "Summary:",
            "  - Total days tracked: 12",
            "  - Most frequent symptom: Hot flashes",
            "  - Average symptom severity: 2.8/5",
            "  - Overall trend: worsening",
        ]

    def test_most_frequent_omitted_when_missing(self) -> None:
        text = build_insights_context(
            IntelligentInsights(summary=summary(most_frequent=None))
        )
        assert "Most frequent symptom" not in text

    def test_all_sections(self) -> None:
        insights = IntelligentInsights(
            patterns=[
                DetectedPattern(
                    type=PatternType.frequency_trend,
                    symptom="night_sweats",
                    description="Night sweats frequency is increasing",
                    confidence=Confidence.high,
                    data={"first_half": 2, "second_half": 7, "change": 5},
                )
            ],
            correlations=[
                Correlation(
                    variable1="Fatigue",
                    variable2="Energy Level",
                    strength=-0.8123,
                    description="Higher Fatigue correlates with lower energy",
                    sample_size=14,
                )
            ],
            recommendations=[
                DataDrivenRecommendation(
                    category=RecommendationCategory.lifestyle,
                    priority=Priority.high,
                    title="Fatigue drains your energy",
                    description="",
                    evidence="Strong negative correlation detected (-0.81) across 14 days.",
                    action="Rest more.",
                )
            ],
            summary=summary(),
        )
        lines = build_insights_context(insights).splitlines()

        assert "Detected Patterns (1):" in lines
        assert "  1. [HIGH] Night sweats frequency is increasing" in lines
        assert (
            '     Evidence: {"first_half": 2, "second_half": 7, "change": 5}' in lines
        )
        assert "Correlations Found (1):" in lines
        assert "     Strength: -0.81 | Sample: 14 days" in lines
        assert "Data-Driven Recommendations (1):" in lines
        assert "  1. [HIGH] Fatigue drains your energy" in lines
        assert "     Suggested action: Rest more." in lines

        assert lines.index("Detected Patterns (1):") < lines.index(
            "Correlations Found (1):"
        ) < lines.index("Data-Driven Recommendations (1):")
