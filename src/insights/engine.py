"""Insights orchestrator: fetch a user's history and run the analysis pipeline.

Pipeline::

    data source ──► PatternDetector ─────┐
                └─► CorrelationFinder ───┼─► RecommendationGenerator
                └─► build_summary        │
                                         ▼
                                 IntelligentInsights

Insights are a supplementary feature.  ``analyze_user_data`` never raises:
any failure is logged, reported to the optional ``on_error`` hook, and
replaced by an empty-but-valid result.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import Callable

from src.insights.base import (
    DataDrivenRecommendation,
    InsightsDataSource,
    InsightsSummary,
    IntelligentInsights,
    Priority,
    RecommendationCategory,
    TrendDirection,
)
from src.insights.config_loader import InsightsConfig, get_insights_config
from src.insights.correlation_finder import CorrelationFinder
from src.insights.pattern_detector import PatternDetector
from src.insights.recommendations import RecommendationGenerator
from src.insights.summary import build_summary

logger = logging.getLogger("menoai.insights.engine")

DEFAULT_LOOKBACK_DAYS = 30

ErrorHook = Callable[[str, Exception], None]


def empty_insights() -> IntelligentInsights:
    """Result returned when analysis fails."""
    return IntelligentInsights()


def insufficient_data_insights(log_count: int) -> IntelligentInsights:
    """Result for users who have not logged enough days yet."""
    return IntelligentInsights(
        recommendations=[
            DataDrivenRecommendation(
                category=RecommendationCategory.tracking,
                priority=Priority.high,
                title="Start tracking consistently",
                description=(
                    "Track your symptoms for at least 7 days to unlock "
                    "personalized insights."
                ),
                evidence=f"You've tracked {log_count} days so far.",
                action="Log your symptoms daily to help us identify patterns.",
            )
        ],
        summary=InsightsSummary(
            total_days_tracked=log_count,
            most_frequent_symptom=None,
            average_severity=0.0,
            trend_direction=TrendDirection.insufficient_data,
        ),
    )


class InsightsEngine:
    """Analyse one user's symptom and journal history on demand.

    Args:
        source:   Read access to symptom logs and journal entries.
        config:   Thresholds; the global ``insights_config.yaml`` if omitted.
        clock:    Returns today's date; the lookback window ends here.
        on_error: Called with ``(user_id, exc)`` when analysis fails.

    Usage::

        engine = InsightsEngine(PostgresInsightsSource())
        insights = await engine.analyze_user_data(user_id, days=30)
    """

    def __init__(
        self,
        source: InsightsDataSource,
        config: InsightsConfig | None = None,
        clock: Callable[[], date] = date.today,
        on_error: ErrorHook | None = None,
    ) -> None:
        self._source = source
        self._config = config or get_insights_config()
        self._clock = clock
        self._on_error = on_error
        self._patterns = PatternDetector(self._config)
        self._correlations = CorrelationFinder(self._config)
        self._recommendations = RecommendationGenerator(self._config)

    async def analyze_user_data(
        self, user_id: str, days: int = DEFAULT_LOOKBACK_DAYS
    ) -> IntelligentInsights:
        """Build insights from the last ``days`` days of tracking.

        Args:
            user_id: Owner of the data.
            days:    Lookback window length.

        Returns:
            The analysis result.  Never raises.
        """
        try:
            return await self._analyze(user_id, days)
        except Exception as exc:
            logger.exception("Insights analysis failed for user %s", user_id)
            if self._on_error is not None:
                try:
                    self._on_error(user_id, exc)
                except Exception:
                    logger.exception("Insights error hook failed for user %s", user_id)
            return empty_insights()

    async def _analyze(self, user_id: str, days: int) -> IntelligentInsights:
        since = self._clock() - timedelta(days=days)
        logs, journals = await asyncio.gather(
            self._source.fetch_symptom_logs(user_id, since),
            self._source.fetch_journal_entries(user_id, since),
        )

        if len(logs) < self._config.min_logs_for_insights:
            logger.info(
                "Insufficient symptom data for user %s: %d logs (need %d)",
                user_id,
                len(logs),
                self._config.min_logs_for_insights,
            )
            return insufficient_data_insights(len(logs))

        patterns = self._patterns.detect(logs)
        correlations = self._correlations.find(logs, journals)
        recommendations = self._recommendations.generate(
            logs, journals, patterns, correlations
        )
        summary = build_summary(logs, self._config)

        logger.info(
            "Insights for user %s over %d days: %d logs, %d patterns, "
            "%d correlations, %d recommendations",
            user_id,
            days,
            len(logs),
            len(patterns),
            len(correlations),
            len(recommendations),
        )
        return IntelligentInsights(
            patterns=patterns,
            correlations=correlations,
            recommendations=recommendations,
            summary=summary,
        )
