"""Read-only endpoints exposing a user's intelligent insights."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from src.dependencies import AppSettings, Engine
from src.insights.context import build_insights_context
from src.models.insights import InsightsContextRead, IntelligentInsightsRead

router = APIRouter(prefix="/insights", tags=["insights"])
logger = logging.getLogger("menoai.routers.insights")


def _resolve_days(days: int | None, settings: AppSettings) -> int:
    if days is None:
        return settings.insights_default_days
    if days > settings.insights_max_days:
        raise HTTPException(
            status_code=422,
            detail=f"days must be at most {settings.insights_max_days}",
        )
    return days


@router.get("/{user_id}", response_model=IntelligentInsightsRead)
async def get_insights(
    user_id: str,
    engine: Engine,
    settings: AppSettings,
    days: int | None = Query(default=None, ge=1),
) -> Any:
    window = _resolve_days(days, settings)
    logger.info("Generating insights for user %s (%d days)", user_id, window)
    insights = await engine.analyze_user_data(user_id, window)
    return IntelligentInsightsRead.model_validate(insights)


@router.get("/{user_id}/context", response_model=InsightsContextRead)
async def get_insights_context(
    user_id: str,
    engine: Engine,
    settings: AppSettings,
    days: int | None = Query(default=None, ge=1),
) -> Any:
    window = _resolve_days(days, settings)
    insights = await engine.analyze_user_data(user_id, window)
    return InsightsContextRead(context=build_insights_context(insights))
