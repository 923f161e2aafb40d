"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from src.config import Settings, get_settings
from src.insights.data_source import PostgresInsightsSource
from src.insights.engine import InsightsEngine


def get_insights_engine() -> InsightsEngine:
    """Engine reading from the shared Postgres pool.

    Tests override this dependency with an engine over an in-memory source.
    """
    return InsightsEngine(PostgresInsightsSource())


# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
Engine = Annotated[InsightsEngine, Depends(get_insights_engine)]
