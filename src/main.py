"""MenoAI Insights API: FastAPI application entry point.

Run locally:
    uvicorn src.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import get_settings
from src.insights.config_loader import get_insights_config
from src.routers import health, insights
from src.services.supabase import close_pool, init_pool

logger = logging.getLogger("menoai")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings = get_settings()
    logger.info(
        "Starting MenoAI Insights API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    # Load and validate the thresholds file at startup
    get_insights_config()
    await init_pool(settings)
    yield
    await close_pool()
    logger.info("MenoAI Insights API shut down")


# ---------- App factory ----------

def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="MenoAI Insights API",
        description=(
            "Pattern detection, correlation analysis, and data-driven "
            "recommendations from menopause symptom and journal tracking."
        ),
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Middleware ----------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ---------- Health check (outside v1 prefix, always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    app.include_router(insights.router, prefix="/api/v1")

    return app


app = create_app()
