"""Canonical data models for the insights engine.

Input records (``SymptomLog``, ``JournalEntry``) arrive from the data source
already filtered to the lookback window and sorted by date.  Everything else
in this module is derived and recomputed on every analysis run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Protocol


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PatternType(str, Enum):
    day_of_week = "day_of_week"
    severity_trend = "severity_trend"
    frequency_trend = "frequency_trend"


class Confidence(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class RecommendationCategory(str, Enum):
    lifestyle = "lifestyle"
    tracking = "tracking"
    awareness = "awareness"
    medical = "medical"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class TrendDirection(str, Enum):
    improving = "improving"
    stable = "stable"
    worsening = "worsening"
    insufficient_data = "insufficient_data"


# Sort rank used when ordering recommendations
PRIORITY_ORDER: dict[Priority, int] = {
    Priority.high: 0,
    Priority.medium: 1,
    Priority.low: 2,
}


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass
class SymptomLog:
    """One day's symptom check-in.

    Attributes:
        user_id:      Owner of the log.
        log_date:     Calendar date; unique per user.
        symptoms:     Symptom tag → severity (1–5).  Only reported symptoms
                      are present; insertion order is preserved.
        energy_level: Self-reported energy (1–5), if given.
        notes:        Free text, not analysed.
    """

    user_id: str
    log_date: date
    symptoms: dict[str, int] = field(default_factory=dict)
    energy_level: int | None = None
    notes: str | None = None


@dataclass
class JournalEntry:
    """One day's journal entry.  Only ``mood_rating`` (1–4) is analysed."""

    user_id: str
    entry_date: date
    content: str = ""
    mood_rating: int | None = None


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------


@dataclass
class DetectedPattern:
    """A regularity found in a single symptom's time series.

    Attributes:
        type:        Which analysis produced it.
        symptom:     Raw symptom tag the pattern concerns.
        description: Human-readable sentence.
        confidence:  Effect-size bucket, not a statistical interval.
        data:        Type-specific payload (peak day, slope, change, ...).
    """

    type: PatternType
    description: str
    confidence: Confidence
    symptom: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Correlation:
    """Pearson correlation between two tracked variables."""

    variable1: str
    variable2: str
    strength: float
    description: str
    sample_size: int


@dataclass
class DataDrivenRecommendation:
    category: RecommendationCategory
    priority: Priority
    title: str
    description: str
    evidence: str
    action: str


@dataclass
class InsightsSummary:
    total_days_tracked: int
    most_frequent_symptom: str | None
    average_severity: float
    trend_direction: TrendDirection


@dataclass
class IntelligentInsights:
    """Complete result of one analysis run."""

    patterns: list[DetectedPattern] = field(default_factory=list)
    correlations: list[Correlation] = field(default_factory=list)
    recommendations: list[DataDrivenRecommendation] = field(default_factory=list)
    summary: InsightsSummary = field(
        default_factory=lambda: InsightsSummary(
            total_days_tracked=0,
            most_frequent_symptom=None,
            average_severity=0.0,
            trend_direction=TrendDirection.insufficient_data,
        )
    )


# ---------------------------------------------------------------------------
# Data source contract
# ---------------------------------------------------------------------------


class InsightsDataSource(Protocol):
    """Read access to a user's tracking history.

    Both methods return records on or after ``since`` sorted ascending by
    date, and an empty list (never an error) when nothing exists.
    """

    async def fetch_symptom_logs(self, user_id: str, since: date) -> list[SymptomLog]:
        ...

    async def fetch_journal_entries(
        self, user_id: str, since: date
    ) -> list[JournalEntry]:
        ...
