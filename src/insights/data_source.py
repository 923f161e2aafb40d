"""Postgres-backed data source for the insights engine.

Reads the ``symptom_logs`` and ``journal_entries`` tables written by the
check-in and journal flows.  ``symptoms`` is a JSONB object of
symptom tag → severity; asyncpg returns JSONB as text unless a codec is
registered, so both forms are accepted.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Mapping

from src.insights.base import JournalEntry, SymptomLog
from src.services import supabase

logger = logging.getLogger("menoai.insights.data_source")

_SYMPTOM_LOGS_SQL = """
    SELECT user_id, log_date, symptoms, energy_level, notes
    FROM symptom_logs
    WHERE user_id = $1 AND log_date >= $2
    ORDER BY log_date ASC
"""

_JOURNAL_ENTRIES_SQL = """
    SELECT user_id, entry_date, content, mood_rating
    FROM journal_entries
    WHERE user_id = $1 AND entry_date >= $2
    ORDER BY entry_date ASC, created_at ASC
"""


def _decode_symptoms(raw: Any) -> dict[str, int]:
    if raw is None:
        return {}
    if isinstance(raw, (str, bytes)):
        raw = json.loads(raw)
    # json.loads and asyncpg both preserve key order
    return {str(k): int(v) for k, v in raw.items() if v is not None}


def symptom_log_from_row(row: Mapping[str, Any]) -> SymptomLog:
    return SymptomLog(
        user_id=str(row["user_id"]),
        log_date=row["log_date"],
        symptoms=_decode_symptoms(row["symptoms"]),
        energy_level=row["energy_level"],
        notes=row.get("notes"),
    )


def journal_entry_from_row(row: Mapping[str, Any]) -> JournalEntry:
    return JournalEntry(
        user_id=str(row["user_id"]),
        entry_date=row["entry_date"],
        content=row["content"] or "",
        mood_rating=row["mood_rating"],
    )


class PostgresInsightsSource:
    """Fetch one user's tracking history through the shared asyncpg pool."""

    async def fetch_symptom_logs(self, user_id: str, since: date) -> list[SymptomLog]:
        rows = await supabase.fetch(_SYMPTOM_LOGS_SQL, user_id, since, user_id=user_id)
        logs = [symptom_log_from_row(dict(r)) for r in rows]
        logger.debug("Fetched %d symptom logs for user %s since %s", len(logs), user_id, since)
        return logs

    async def fetch_journal_entries(
        self, user_id: str, since: date
    ) -> list[JournalEntry]:
        rows = await supabase.fetch(_JOURNAL_ENTRIES_SQL, user_id, since, user_id=user_id)
        entries = [journal_entry_from_row(dict(r)) for r in rows]
        logger.debug(
            "Fetched %d journal entries for user %s since %s", len(entries), user_id, since
        )
        return entries
