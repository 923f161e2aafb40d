"""MenoAI intelligent insights engine.

Turns a user's daily symptom check-ins and journal mood ratings into
patterns, correlations, a summary, and ranked recommendations.

Core modules:
    base: Input records, result dataclasses, data source protocol
    symptoms: Symptom vocabulary and display labels
    stats: Pearson r, least-squares trend, flat severity mean
    pattern_detector: Day-of-week, severity, and frequency patterns
    correlation_finder: Symptom ↔ energy / mood / symptom correlations
    recommendations: Rule-based, ranked recommendations
    summary: Aggregate statistics and overall trend
    engine: Orchestrator with fail-soft boundary
    context: Plain-text rendering for the chat system prompt
    config_loader: Load/validate/hot-reload insights_config.yaml
    data_source: asyncpg-backed InsightsDataSource
"""

from src.insights.base import (
    Correlation,
    DataDrivenRecommendation,
    DetectedPattern,
    InsightsDataSource,
    InsightsSummary,
    IntelligentInsights,
    JournalEntry,
    SymptomLog,
)
from src.insights.config_loader import InsightsConfig, get_insights_config
from src.insights.context import build_insights_context
from src.insights.engine import InsightsEngine

__all__ = [
    "SymptomLog",
    "JournalEntry",
    "DetectedPattern",
    "Correlation",
    "DataDrivenRecommendation",
    "InsightsSummary",
    "IntelligentInsights",
    "InsightsDataSource",
    "InsightsConfig",
    "get_insights_config",
    "InsightsEngine",
    "build_insights_context",
]
