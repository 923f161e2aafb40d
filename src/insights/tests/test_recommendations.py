"""Tests for recommendation rules, ranking, and the output cap."""

from __future__ import annotations

from src.insights.base import (
    PRIORITY_ORDER,
    Confidence,
    Correlation,
    DetectedPattern,
    PatternType,
    Priority,
    RecommendationCategory,
)
from src.insights.config_loader import InsightsConfig
from src.insights.correlation_finder import ENERGY_LABEL, MOOD_LABEL
from src.insights.recommendations import RecommendationGenerator
from src.insights.tests.conftest import make_journal, make_log


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def dow_pattern(symptom: str, peak_day: str, confidence: Confidence) -> DetectedPattern:
    return DetectedPattern(
        type=PatternType.day_of_week,
        symptom=symptom,
        description=f"{symptom} tends to be worse on {peak_day}s",
        confidence=confidence,
        data={"peak_day": peak_day, "lowest_day": "Sunday", "difference": 1.75},
    )


def trend_pattern(symptom: str, direction: str, change_percent: int | None = 40) -> DetectedPattern:
    return DetectedPattern(
        type=PatternType.severity_trend,
        symptom=symptom,
        description=f"{symptom} severity is {direction} over time",
        confidence=Confidence.high,
        data={"direction": direction, "slope": 0.2, "change_percent": change_percent},
    )


def correlation(variable1: str, variable2: str, strength: float) -> Correlation:
    return Correlation(
        variable1=variable1,
        variable2=variable2,
        strength=strength,
        description="",
        sample_size=12,
    )


# ---------------------------------------------------------------------------
# Pattern rules
# ---------------------------------------------------------------------------


class TestPatternRules:
    def test_high_confidence_day_of_week(self, insights_config: InsightsConfig) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [dow_pattern("hot_flashes", "Monday", Confidence.high)], []
        )
        assert len(recs) == 1
        rec = recs[0]
        assert rec.category == RecommendationCategory.awareness
        assert rec.priority == Priority.medium
        assert rec.title == "Prepare for Mondays"
        assert "hot flashes" in rec.description
        assert "1.8 points" in rec.evidence

    def test_medium_confidence_day_of_week_ignored(
        self, insights_config: InsightsConfig
    ) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [dow_pattern("hot_flashes", "Monday", Confidence.medium)], []
        )
        assert recs == []

    def test_worsening_trend_is_medical(self, insights_config: InsightsConfig) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [trend_pattern("anxiety", "worsening", 85)], []
        )
        rec = recs[0]
        assert rec.category == RecommendationCategory.medical
        assert rec.priority == Priority.high
        assert rec.title == "Anxiety is worsening"
        assert "85%" in rec.description
        assert "healthcare provider" in rec.action

    def test_improving_trend_is_low_priority(self, insights_config: InsightsConfig) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [trend_pattern("brain_fog", "improving")], []
        )
        rec = recs[0]
        assert rec.category == RecommendationCategory.awareness
        assert rec.priority == Priority.low
        assert rec.title == "Brain fog is improving!"

    def test_missing_percent_omitted_from_text(
        self, insights_config: InsightsConfig
    ) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [trend_pattern("anxiety", "worsening", None)], []
        )
        assert recs[0].description == "Your anxiety has increased recently."


# ---------------------------------------------------------------------------
# Correlation rules
# ---------------------------------------------------------------------------


class TestCorrelationRules:
    def test_energy_drain(self, insights_config: InsightsConfig) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [], [correlation("Fatigue", ENERGY_LABEL, -0.82)]
        )
        rec = recs[0]
        assert rec.category == RecommendationCategory.lifestyle
        assert rec.priority == Priority.high
        assert rec.title == "Fatigue drains your energy"
        assert "(-0.82) across 12 days" in rec.evidence

    def test_mood_impact(self, insights_config: InsightsConfig) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [], [], [], [correlation("Anxiety", MOOD_LABEL, -0.7)]
        )
        rec = recs[0]
        assert rec.category == RecommendationCategory.awareness
        assert rec.priority == Priority.medium
        assert rec.title == "Anxiety impacts your mood"

    def test_threshold_is_strict(self, insights_config: InsightsConfig) -> None:
        recs = RecommendationGenerator(insights_config).generate(
            [],
            [],
            [],
            [
                correlation("Fatigue", ENERGY_LABEL, -0.6),
                correlation("Anxiety", MOOD_LABEL, -0.55),
                correlation("Anxiety", ENERGY_LABEL, 0.9),
                correlation("Hot flashes", "Night sweats", -0.9),
            ],
        )
        assert recs == []


# ---------------------------------------------------------------------------
# Tracking nudges
# ---------------------------------------------------------------------------


class TestTrackingNudges:
    def test_streak_window(self, insights_config: InsightsConfig) -> None:
        gen = RecommendationGenerator(insights_config)

        def streak_titles(n: int) -> list[str]:
            logs = [make_log(i, {"fatigue": 2}) for i in range(n)]
            journals = [make_journal(i, 3) for i in range(n)]
            return [r.title for r in gen.generate(logs, journals, [], [])]

        assert streak_titles(20) == []
        assert streak_titles(21) == ["Great tracking streak!"]
        assert streak_titles(29) == ["Great tracking streak!"]
        assert streak_titles(30) == []

    def test_journal_pairing(self, insights_config: InsightsConfig) -> None:
        logs = [make_log(i, {"fatigue": 2}) for i in range(12)]
        journals = [make_journal(i, 3) for i in range(5)]
        recs = RecommendationGenerator(insights_config).generate(logs, journals, [], [])
        assert len(recs) == 1
        assert recs[0].category == RecommendationCategory.tracking
        assert recs[0].priority == Priority.medium
        assert recs[0].evidence == (
            "Only 5 of 12 symptom logs have matching journal entries."
        )

    def test_journal_pairing_satisfied_at_half(
        self, insights_config: InsightsConfig
    ) -> None:
        logs = [make_log(i, {"fatigue": 2}) for i in range(12)]
        journals = [make_journal(i, None) for i in range(6)]
        assert RecommendationGenerator(insights_config).generate(logs, journals, [], []) == []

    def test_journal_pairing_needs_more_than_ten_logs(
        self, insights_config: InsightsConfig
    ) -> None:
        logs = [make_log(i, {"fatigue": 2}) for i in range(10)]
        assert RecommendationGenerator(insights_config).generate(logs, [], [], []) == []


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


class TestRanking:
    def _eight(self) -> tuple[list[DetectedPattern], list[Correlation]]:
        patterns = [
            trend_pattern("brain_fog", "improving"),  # low
            dow_pattern("hot_flashes", "Monday", Confidence.high),  # medium
            trend_pattern("anxiety", "worsening"),  # high
            dow_pattern("headaches", "Friday", Confidence.high),  # medium
            trend_pattern("joint_pain", "improving"),  # low
            trend_pattern("fatigue", "worsening"),  # high
        ]
        correlations = [
            correlation("Irritability", MOOD_LABEL, -0.75),  # medium
            correlation("Fatigue", ENERGY_LABEL, -0.9),  # high
        ]
        return patterns, correlations

    def test_capped_at_five_and_sorted(self, insights_config: InsightsConfig) -> None:
        patterns, correlations = self._eight()
        recs = RecommendationGenerator(insights_config).generate([], [], patterns, correlations)
        assert len(recs) == 5
        ranks = [PRIORITY_ORDER[r.priority] for r in recs]
        assert ranks == sorted(ranks)
        assert [r.priority for r in recs] == [
            Priority.high,
            Priority.high,
            Priority.high,
            Priority.medium,
            Priority.medium,
        ]

    def test_ties_keep_rule_order(self, insights_config: InsightsConfig) -> None:
        patterns, correlations = self._eight()
        recs = RecommendationGenerator(insights_config).generate([], [], patterns, correlations)
        assert [r.title for r in recs] == [
            "Anxiety is worsening",
            "Fatigue is worsening",
            "Fatigue drains your energy",
            "Prepare for Mondays",
            "Prepare for Fridays",
        ]

    def test_custom_cap(self) -> None:
        config = InsightsConfig()
        config.recommendations.max_recommendations = 2
        patterns, correlations = self._eight()
        recs = RecommendationGenerator(config).generate([], [], patterns, correlations)
        assert len(recs) == 2
