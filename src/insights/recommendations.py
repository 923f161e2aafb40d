"""Turn detected patterns and correlations into ranked recommendations.

Rules are applied in a fixed order (patterns, correlations, tracking nudges),
then the list is stably sorted by priority and capped.  Equal-priority items
keep their rule order.
"""

from __future__ import annotations

import logging

from src.insights.base import (
    PRIORITY_ORDER,
    Confidence,
    Correlation,
    DataDrivenRecommendation,
    DetectedPattern,
    JournalEntry,
    PatternType,
    Priority,
    RecommendationCategory,
    SymptomLog,
)
from src.insights.config_loader import (
    InsightsConfig,
    RecommendationRules,
    get_insights_config,
)
from src.insights.correlation_finder import ENERGY_LABEL, MOOD_LABEL
from src.insights.symptoms import format_symptom_name

logger = logging.getLogger("menoai.insights.recommendations")


def _symptom_phrase(symptom: str | None) -> str:
    """Label suitable for the middle of a sentence ("your hot flashes")."""
    return format_symptom_name(symptom or "other").lower()


class RecommendationGenerator:
    """Build the user's top recommendations from analysis results."""

    def __init__(self, config: InsightsConfig | None = None) -> None:
        self._rules: RecommendationRules = (config or get_insights_config()).recommendations

    def generate(
        self,
        logs: list[SymptomLog],
        journals: list[JournalEntry],
        patterns: list[DetectedPattern],
        correlations: list[Correlation],
    ) -> list[DataDrivenRecommendation]:
        """Apply every rule, then rank and truncate.

        Returns:
            At most ``max_recommendations`` items, high priority first.
        """
        recommendations: list[DataDrivenRecommendation] = []
        for pattern in patterns:
            recommendations.extend(self._from_pattern(pattern))
        for corr in correlations:
            recommendations.extend(self._from_correlation(corr))
        recommendations.extend(self._tracking_nudges(logs, journals))

        # sorted() is stable, so rule order breaks priority ties
        ranked = sorted(recommendations, key=lambda r: PRIORITY_ORDER[r.priority])
        logger.debug(
            "Generated %d recommendations, keeping %d",
            len(ranked),
            min(len(ranked), self._rules.max_recommendations),
        )
        return ranked[: self._rules.max_recommendations]

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _from_pattern(self, pattern: DetectedPattern) -> list[DataDrivenRecommendation]:
        phrase = _symptom_phrase(pattern.symptom)
        label = format_symptom_name(pattern.symptom or "other")

        if pattern.type == PatternType.day_of_week and pattern.confidence == Confidence.high:
            peak_day = pattern.data["peak_day"]
            return [
                DataDrivenRecommendation(
                    category=RecommendationCategory.awareness,
                    priority=Priority.medium,
                    title=f"Prepare for {peak_day}s",
                    description=(
                        f"Your {phrase} symptoms spike on {peak_day}s. "
                        "Plan self-care accordingly."
                    ),
                    evidence=(
                        f"Data shows {phrase} is worse on {peak_day}s by an average of "
                        f"{pattern.data['difference']:.1f} points."
                    ),
                    action=f"Schedule lighter activities on {peak_day}s and prioritize rest.",
                )
            ]

        if pattern.type == PatternType.severity_trend:
            change = pattern.data.get("change_percent")
            change_text = f" {change}%" if change is not None else ""
            if pattern.data["direction"] == "worsening":
                return [
                    DataDrivenRecommendation(
                        category=RecommendationCategory.medical,
                        priority=Priority.high,
                        title=f"{label} is worsening",
                        description=f"Your {phrase} has increased{change_text} recently.",
                        evidence=pattern.description,
                        action="Consider discussing this trend with your healthcare provider.",
                    )
                ]
            return [
                DataDrivenRecommendation(
                    category=RecommendationCategory.awareness,
                    priority=Priority.low,
                    title=f"{label} is improving!",
                    description=(
                        f"Your {phrase} has decreased{change_text}. "
                        "Keep doing what you're doing!"
                    ),
                    evidence=pattern.description,
                    action="Reflect on what changes you've made that might be helping.",
                )
            ]

        return []

    def _from_correlation(self, corr: Correlation) -> list[DataDrivenRecommendation]:
        if corr.strength >= self._rules.strong_negative_r:
            return []

        if corr.variable2 == ENERGY_LABEL:
            return [
                DataDrivenRecommendation(
                    category=RecommendationCategory.lifestyle,
                    priority=Priority.high,
                    title=f"{corr.variable1} drains your energy",
                    description=(
                        f"When {corr.variable1} is high, your energy drops significantly."
                    ),
                    evidence=(
                        f"Strong negative correlation detected ({corr.strength:.2f}) "
                        f"across {corr.sample_size} days."
                    ),
                    action=(
                        "Prioritize rest and energy-conserving activities when "
                        "experiencing this symptom."
                    ),
                )
            ]

        if corr.variable2 == MOOD_LABEL:
            return [
                DataDrivenRecommendation(
                    category=RecommendationCategory.awareness,
                    priority=Priority.medium,
                    title=f"{corr.variable1} impacts your mood",
                    description=(
                        f"Higher {corr.variable1} strongly correlates with lower mood."
                    ),
                    evidence=(
                        f"Correlation strength: {corr.strength:.2f} across "
                        f"{corr.sample_size} entries."
                    ),
                    action="Practice extra self-compassion when this symptom flares.",
                )
            ]

        return []

    def _tracking_nudges(
        self, logs: list[SymptomLog], journals: list[JournalEntry]
    ) -> list[DataDrivenRecommendation]:
        nudges = []
        total = len(logs)

        if self._rules.streak_min_logs <= total < self._rules.streak_max_logs:
            nudges.append(
                DataDrivenRecommendation(
                    category=RecommendationCategory.tracking,
                    priority=Priority.low,
                    title="Great tracking streak!",
                    description=(
                        f"You've tracked {total} days. A full "
                        f"{self._rules.streak_max_logs} days will unlock even deeper insights."
                    ),
                    evidence="Consistent tracking enables better pattern detection.",
                    action="Keep logging symptoms daily to maximize insights.",
                )
            )

        journal_dates = {j.entry_date for j in journals}
        with_journal = sum(1 for log in logs if log.log_date in journal_dates)
        if (
            total > self._rules.journal_pairing_min_logs
            and with_journal < total * self._rules.journal_pairing_min_ratio
        ):
            nudges.append(
                DataDrivenRecommendation(
                    category=RecommendationCategory.tracking,
                    priority=Priority.medium,
                    title="Add journal entries for richer insights",
                    description=(
                        "Pairing symptom tracking with journaling helps identify "
                        "emotional triggers."
                    ),
                    evidence=(
                        f"Only {with_journal} of {total} symptom logs have matching "
                        "journal entries."
                    ),
                    action="Write a brief journal entry when you log symptoms.",
                )
            )

        return nudges
