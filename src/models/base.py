"""Shared Pydantic base model for API schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MenoBase(BaseModel):
    """Base model with shared config for all MenoAI schemas.

    ``from_attributes`` lets response models validate the engine's
    dataclasses directly.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
