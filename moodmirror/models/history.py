"""HistoryEntry data model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from moodmirror.models.analysis import EmotionAnalysis

# Longest text accepted for analysis
MAX_TEXT_LENGTH = 5000


class HistoryEntry(BaseModel):
    """A recent analysis result kept in the local history cache."""

    id: str = Field(..., min_length=1, description="Time-derived unique ID")
    text: str = Field(..., max_length=MAX_TEXT_LENGTH, description="Analyzed text")
    analysis: EmotionAnalysis = Field(..., description="Analysis snapshot")
    created_at: datetime = Field(..., alias="createdAt", description="Creation time")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("created_at")
    @classmethod
    def _to_local_naive(cls, value: datetime) -> datetime:
        # Stored entries mix local times and UTC "Z" stamps
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @classmethod
    def create(
        cls,
        text: str,
        analysis: EmotionAnalysis,
        now: Optional[datetime] = None,
    ) -> "HistoryEntry":
        """Build an entry for freshly analyzed text.

        The ID is the millisecond epoch of the creation time and the
        analysis is stored as a copy so later changes to the caller's
        object cannot leak into history.

        Args:
            text: The analyzed text.
            analysis: Result returned by the analysis service.
            now: Creation time. Defaults to the current time.

        Returns:
            A new HistoryEntry.
        """
        created_at = now or datetime.now()
        return cls(
            id=str(int(created_at.timestamp() * 1000)),
            text=text,
            analysis=analysis.model_copy(deep=True),
            created_at=created_at,
        )

    def to_json_dict(self) -> dict:
        """Serialize using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)
