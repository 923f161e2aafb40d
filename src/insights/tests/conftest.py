"""Shared fixtures and synthetic history builders for insights engine tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.insights.base import JournalEntry, SymptomLog
from src.insights.config_loader import InsightsConfig, load_insights_config

# Canonical test user
TEST_USER_ID = "7f1c2a9e-3b4d-4e5f-8a6b-1c2d3e4f5a6b"

# A Sunday, so day offset n falls on weekday index n % 7 (0=Sunday)
START_DATE = date(2026, 1, 4)

# "Today" for engine tests
TODAY = date(2026, 2, 1)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_log(
    day: int,
    symptoms: dict[str, int],
    energy: int | None = None,
    start: date = START_DATE,
) -> SymptomLog:
    """Symptom log ``day`` days after ``start``."""
    return SymptomLog(
        user_id=TEST_USER_ID,
        log_date=start + timedelta(days=day),
        symptoms=dict(symptoms),
        energy_level=energy,
    )


def make_journal(
    day: int, mood: int | None, content: str = "", start: date = START_DATE
) -> JournalEntry:
    return JournalEntry(
        user_id=TEST_USER_ID,
        entry_date=start + timedelta(days=day),
        content=content,
        mood_rating=mood,
    )


def build_series(symptom: str, severities: list[int]) -> list[SymptomLog]:
    """One log per consecutive day with a single symptom."""
    return [make_log(i, {symptom: s}) for i, s in enumerate(severities)]


class FakeSource:
    """In-memory InsightsDataSource that records its calls."""

    def __init__(
        self,
        logs: list[SymptomLog] | None = None,
        journals: list[JournalEntry] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.logs = logs or []
        self.journals = journals or []
        self.error = error
        self.calls: list[tuple[str, str, date]] = []

    async def fetch_symptom_logs(self, user_id: str, since: date) -> list[SymptomLog]:
        self.calls.append(("symptom_logs", user_id, since))
        if self.error is not None:
            raise self.error
        return list(self.logs)

    async def fetch_journal_entries(
        self, user_id: str, since: date
    ) -> list[JournalEntry]:
        self.calls.append(("journal_entries", user_id, since))
        return list(self.journals)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def insights_config() -> InsightsConfig:
    """Load the real insights config for tests."""
    return load_insights_config()


@pytest.fixture
def anxiety_energy_logs() -> list[SymptomLog]:
    """20 days where anxiety climbs 2 → 5 while energy falls 4 → 1."""
    anxiety = [2] * 5 + [3] * 5 + [4] * 5 + [5] * 5
    return [
        make_log(i, {"anxiety": severity}, energy=6 - severity)
        for i, severity in enumerate(anxiety)
    ]
