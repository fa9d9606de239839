"""Streak data models."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class StreakState(BaseModel):
    """Durable streak counter and the last day it was advanced."""

    count: int = Field(default=0, ge=0, description="Consecutive days")
    last_date: Optional[date] = Field(
        default=None, alias="lastDate", description="Last day with an analysis"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("last_date", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        if value == "":
            return None
        return value


class StreakResult(BaseModel):
    """Outcome of a streak update."""

    streak: int = Field(..., ge=0, description="Current streak length")
    is_new_streak: bool = Field(..., description="True when a streak just started")

    model_config = {"frozen": True}
