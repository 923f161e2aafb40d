"""Single-variable pattern detection over a user's symptom history.

Three analyses run over the chronologically ordered logs:

- day of week:     "Hot flashes tend to be worse on Mondays"
- severity trend:  "Anxiety severity is worsening over time"
- frequency trend: "Brain fog frequency is decreasing"

Each emits ``DetectedPattern`` objects whose confidence is an effect-size
bucket.  Low-confidence patterns are dropped before returning.
"""

from __future__ import annotations

import logging
from collections import Counter

from src.insights.base import Confidence, DetectedPattern, PatternType, SymptomLog
from src.insights.config_loader import (
    InsightsConfig,
    PatternThresholds,
    get_insights_config,
)
from src.insights.stats import linear_trend, round_half_away
from src.insights.symptoms import format_symptom_name

logger = logging.getLogger("menoai.insights.patterns")

# Indexed 0=Sunday .. 6=Saturday
DAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


def day_of_week_index(log: SymptomLog) -> int:
    """Weekday of a log with Sunday as 0."""
    return log.log_date.isoweekday() % 7


class PatternDetector:
    """Detect day-of-week, severity, and frequency patterns.

    Usage::

        detector = PatternDetector()
        for pattern in detector.detect(logs):
            print(pattern.confidence.value, pattern.description)
    """

    def __init__(self, config: InsightsConfig | None = None) -> None:
        self._cfg: PatternThresholds = (config or get_insights_config()).patterns

    def detect(self, logs: list[SymptomLog]) -> list[DetectedPattern]:
        """Run all three analyses.

        Args:
            logs: One user's logs, sorted ascending by date.

        Returns:
            Patterns in analysis order (day of week, severity, frequency),
            excluding low-confidence ones.
        """
        patterns: list[DetectedPattern] = []
        patterns.extend(self.day_of_week_patterns(logs))
        patterns.extend(self.severity_trends(logs))
        patterns.extend(self.frequency_trends(logs))

        kept = [p for p in patterns if p.confidence != Confidence.low]
        logger.debug("Detected %d patterns over %d logs", len(kept), len(logs))
        return kept

    # ------------------------------------------------------------------
    # Day of week
    # ------------------------------------------------------------------

    def day_of_week_patterns(self, logs: list[SymptomLog]) -> list[DetectedPattern]:
        by_day: dict[str, list[list[int]]] = {}
        for log in logs:
            day = day_of_week_index(log)
            for symptom, severity in log.symptoms.items():
                if symptom not in by_day:
                    by_day[symptom] = [[] for _ in DAY_NAMES]
                by_day[symptom][day].append(severity)

        patterns = []
        for symptom, buckets in by_day.items():
            averages = [
                (day, sum(values) / len(values))
                for day, values in enumerate(buckets)
                if values
            ]
            if len(averages) < self._cfg.dow_min_days_with_data:
                continue

            # First day wins ties, scanning Sunday → Saturday
            peak_day, peak_avg = averages[0]
            lowest_day, lowest_avg = averages[0]
            for day, avg in averages[1:]:
                if avg > peak_avg:
                    peak_day, peak_avg = day, avg
                if avg < lowest_avg:
                    lowest_day, lowest_avg = day, avg

            difference = peak_avg - lowest_avg
            if difference < self._cfg.dow_min_difference:
                continue

            confidence = (
                Confidence.high
                if difference >= self._cfg.dow_high_confidence_difference
                else Confidence.medium
            )
            patterns.append(
                DetectedPattern(
                    type=PatternType.day_of_week,
                    symptom=symptom,
                    description=(
                        f"{format_symptom_name(symptom)} tends to be worse on "
                        f"{DAY_NAMES[peak_day]}s"
                    ),
                    confidence=confidence,
                    data={
                        "peak_day": DAY_NAMES[peak_day],
                        "lowest_day": DAY_NAMES[lowest_day],
                        "difference": difference,
                    },
                )
            )
        return patterns

    # ------------------------------------------------------------------
    # Severity trend
    # ------------------------------------------------------------------

    def severity_trends(self, logs: list[SymptomLog]) -> list[DetectedPattern]:
        if len(logs) < self._cfg.severity_min_logs:
            return []

        series: dict[str, list[int]] = {}
        for log in logs:
            for symptom, severity in log.symptoms.items():
                series.setdefault(symptom, []).append(severity)

        patterns = []
        for symptom, severities in series.items():
            if len(severities) < self._cfg.severity_min_observations:
                continue

            trend = linear_trend(severities)
            if abs(trend.slope) <= self._cfg.severity_min_abs_slope:
                continue

            # Lower severity is better
            direction = "improving" if trend.slope < 0 else "worsening"

            # NOTE: approximate percentage relative to the first observation,
            # unstable when that value is small
            first = severities[0]
            change_percent = (
                round_half_away(abs(trend.slope * len(severities) / first * 100))
                if first
                else None
            )

            confidence = (
                Confidence.high
                if abs(trend.slope) > self._cfg.severity_high_confidence_slope
                else Confidence.medium
            )
            patterns.append(
                DetectedPattern(
                    type=PatternType.severity_trend,
                    symptom=symptom,
                    description=(
                        f"{format_symptom_name(symptom)} severity is {direction} over time"
                    ),
                    confidence=confidence,
                    data={
                        "direction": direction,
                        "slope": trend.slope,
                        "change_percent": change_percent,
                    },
                )
            )
        return patterns

    # ------------------------------------------------------------------
    # Frequency trend
    # ------------------------------------------------------------------

    def frequency_trends(self, logs: list[SymptomLog]) -> list[DetectedPattern]:
        if len(logs) < self._cfg.frequency_min_logs:
            return []

        midpoint = len(logs) // 2
        first_half: Counter[str] = Counter()
        second_half: Counter[str] = Counter()
        for log in logs[:midpoint]:
            first_half.update(log.symptoms.keys())
        for log in logs[midpoint:]:
            second_half.update(log.symptoms.keys())

        # Counter keeps first-seen order; first half symptoms come first
        symptoms = list(first_half) + [s for s in second_half if s not in first_half]

        patterns = []
        for symptom in symptoms:
            freq1 = first_half[symptom]
            freq2 = second_half[symptom]
            change = freq2 - freq1
            percent_change = change / freq1 * 100 if freq1 > 0 else 0.0

            if not (
                abs(change) >= self._cfg.frequency_min_abs_change
                or abs(percent_change) >= self._cfg.frequency_min_abs_percent_change
            ):
                continue

            direction = "increasing" if change > 0 else "decreasing"
            confidence = (
                Confidence.high
                if abs(change) >= self._cfg.frequency_high_confidence_change
                else Confidence.medium
            )
            patterns.append(
                DetectedPattern(
                    type=PatternType.frequency_trend,
                    symptom=symptom,
                    description=f"{format_symptom_name(symptom)} frequency is {direction}",
                    confidence=confidence,
                    data={
                        "change": change,
                        "direction": direction,
                        "percent_change": round_half_away(percent_change),
                    },
                )
            )
        return patterns
