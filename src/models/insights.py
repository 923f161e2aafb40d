"""Response schemas for the insights endpoints.

Built from the engine's dataclasses via ``from_attributes``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from src.insights.base import (
    Confidence,
    PatternType,
    Priority,
    RecommendationCategory,
    TrendDirection,
)
from src.models.base import MenoBase


class DetectedPatternRead(MenoBase):
    type: PatternType
    symptom: str | None = None
    description: str
    confidence: Confidence
    data: dict[str, Any] = Field(default_factory=dict)


class CorrelationRead(MenoBase):
    variable1: str
    variable2: str
    strength: float = Field(ge=-1.0, le=1.0)
    description: str
    sample_size: int = Field(ge=0)


class RecommendationRead(MenoBase):
    category: RecommendationCategory
    priority: Priority
    title: str
    description: str
    evidence: str
    action: str


class InsightsSummaryRead(MenoBase):
    total_days_tracked: int = Field(ge=0)
    most_frequent_symptom: str | None = None
    average_severity: float
    trend_direction: TrendDirection


class IntelligentInsightsRead(MenoBase):
    patterns: list[DetectedPatternRead] = Field(default_factory=list)
    correlations: list[CorrelationRead] = Field(default_factory=list)
    recommendations: list[RecommendationRead] = Field(default_factory=list)
    summary: InsightsSummaryRead


class InsightsContextRead(MenoBase):
    context: str
