"""Cross-variable correlations: symptom ↔ energy, symptom ↔ mood, symptom ↔ symptom.

Each family pairs observations made on the same calendar day and computes
Pearson r.  Only correlations with enough samples and a large enough |r|
survive.  Symptom pairs use a stricter bar than the other two families.
"""

from __future__ import annotations

import logging
from datetime import date
from itertools import combinations

from src.insights.base import Correlation, JournalEntry, SymptomLog
from src.insights.config_loader import (
    CorrelationThresholds,
    InsightsConfig,
    get_insights_config,
)
from src.insights.stats import pearson_correlation
from src.insights.symptoms import format_symptom_name

logger = logging.getLogger("menoai.insights.correlations")

ENERGY_LABEL = "Energy Level"
MOOD_LABEL = "Mood"


def index_journals_by_date(journals: list[JournalEntry]) -> dict[date, JournalEntry]:
    """Map each date to its first journal entry."""
    by_date: dict[date, JournalEntry] = {}
    for entry in journals:
        by_date.setdefault(entry.entry_date, entry)
    return by_date


def _symptom_order(logs: list[SymptomLog]) -> list[str]:
    """Distinct symptom tags in order of first appearance."""
    seen: dict[str, None] = {}
    for log in logs:
        for symptom in log.symptoms:
            seen.setdefault(symptom, None)
    return list(seen)


class CorrelationFinder:
    """Find strong linear associations in one user's tracking history.

    Usage::

        finder = CorrelationFinder()
        correlations = finder.find(symptom_logs, journal_entries)
    """

    def __init__(self, config: InsightsConfig | None = None) -> None:
        self._cfg: CorrelationThresholds = (config or get_insights_config()).correlations

    def find(
        self, logs: list[SymptomLog], journals: list[JournalEntry]
    ) -> list[Correlation]:
        """Run all three correlation families.

        Args:
            logs:     Symptom logs, sorted ascending by date.
            journals: Journal entries from the same window.

        Returns:
            Correlations ordered energy, mood, then symptom pairs.
        """
        correlations: list[Correlation] = []
        correlations.extend(self.symptom_energy(logs))
        correlations.extend(self.symptom_mood(logs, journals))
        correlations.extend(self.symptom_symptom(logs))

        # Uniform floor across all families
        kept = [
            c
            for c in correlations
            if abs(c.strength) >= self._cfg.global_min_r
            and c.sample_size >= self._cfg.min_samples
        ]
        logger.debug("Found %d correlations over %d logs", len(kept), len(logs))
        return kept

    def symptom_energy(self, logs: list[SymptomLog]) -> list[Correlation]:
        with_energy = [log for log in logs if log.energy_level is not None]
        if len(with_energy) < self._cfg.min_samples:
            return []

        pairs: dict[str, tuple[list[float], list[float]]] = {}
        for log in with_energy:
            for symptom, severity in log.symptoms.items():
                severities, energies = pairs.setdefault(symptom, ([], []))
                severities.append(severity)
                energies.append(log.energy_level)

        results = []
        for symptom, (severities, energies) in pairs.items():
            if len(severities) < self._cfg.min_samples:
                continue
            r = pearson_correlation(severities, energies)
            if abs(r) < self._cfg.symptom_energy_min_r:
                continue

            label = format_symptom_name(symptom)
            direction = "lower" if r < 0 else "higher"
            results.append(
                Correlation(
                    variable1=label,
                    variable2=ENERGY_LABEL,
                    strength=r,
                    description=f"Higher {label} correlates with {direction} energy",
                    sample_size=len(severities),
                )
            )
        return results

    def symptom_mood(
        self, logs: list[SymptomLog], journals: list[JournalEntry]
    ) -> list[Correlation]:
        journal_by_date = index_journals_by_date(journals)

        pairs: dict[str, tuple[list[float], list[float]]] = {}
        matched = 0
        for log in logs:
            entry = journal_by_date.get(log.log_date)
            if entry is None or not entry.mood_rating:
                continue
            for symptom, severity in log.symptoms.items():
                severities, moods = pairs.setdefault(symptom, ([], []))
                severities.append(severity)
                moods.append(entry.mood_rating)
                matched += 1

        if matched < self._cfg.min_samples:
            return []

        results = []
        for symptom, (severities, moods) in pairs.items():
            if len(severities) < self._cfg.min_samples:
                continue
            r = pearson_correlation(severities, moods)
            if abs(r) < self._cfg.symptom_mood_min_r:
                continue

            label = format_symptom_name(symptom)
            direction = "lower" if r < 0 else "better"
            results.append(
                Correlation(
                    variable1=label,
                    variable2=MOOD_LABEL,
                    strength=r,
                    description=f"Higher {label} correlates with {direction} mood",
                    sample_size=len(severities),
                )
            )
        return results

    def symptom_symptom(self, logs: list[SymptomLog]) -> list[Correlation]:
        results = []
        for first, second in combinations(_symptom_order(logs), 2):
            xs: list[float] = []
            ys: list[float] = []
            for log in logs:
                if first in log.symptoms and second in log.symptoms:
                    xs.append(log.symptoms[first])
                    ys.append(log.symptoms[second])

            if len(xs) < self._cfg.min_samples:
                continue
            r = pearson_correlation(xs, ys)
            if abs(r) < self._cfg.symptom_symptom_min_r:
                continue

            label1 = format_symptom_name(first)
            label2 = format_symptom_name(second)
            results.append(
                Correlation(
                    variable1=label1,
                    variable2=label2,
                    strength=r,
                    description=f"{label1} and {label2} tend to occur together",
                    sample_size=len(xs),
                )
            )
        return results
