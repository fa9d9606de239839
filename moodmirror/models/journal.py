"""JournalEntry data model."""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from moodmirror.models.analysis import EmotionAnalysis


class JournalEntry(BaseModel):
    """Represents a daily journal entry (one per user per day)."""

    date: date_type = Field(..., description="Journal entry date")
    text: str = Field(..., description="Entry text")
    analysis: Optional[EmotionAnalysis] = Field(
        default=None, description="Emotion analysis of the text"
    )
    notes: Optional[str] = Field(default=None, description="Private notes")
    updated_at: Optional[datetime] = Field(
        default=None, alias="updatedAt", description="Last write time"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def to_json_dict(self) -> dict:
        """Serialize using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)
