"""EmotionAnalysis data model."""

from typing import Literal, get_args

from pydantic import BaseModel, Field

Tone = Literal[
    "Joyful",
    "Calm",
    "Anxious",
    "Angry",
    "Sad",
    "Frustrated",
    "Confused",
    "Grateful",
    "Excited",
    "Neutral",
    "Mixed",
]

# Declared order is significant: trend series use the index as the y value.
TONES: tuple[str, ...] = get_args(Tone)


class EmotionScore(BaseModel):
    """A single detected emotion and its share of the overall mood."""

    emotion: str = Field(..., min_length=1, description="Emotion name")
    percentage: float = Field(..., ge=0, le=100, description="Share in percent")

    model_config = {"frozen": True}


class EmotionAnalysis(BaseModel):
    """Structured emotion analysis of a piece of text."""

    overall_tone: Tone = Field(..., alias="overallTone", description="Overall tone")
    primary_emotions: list[EmotionScore] = Field(
        ...,
        alias="primaryEmotions",
        min_length=1,
        max_length=3,
        description="Up to three primary emotions, strongest first",
    )
    cause_explanation: str = Field(
        ..., alias="causeExplanation", description="What is driving these emotions"
    )
    suggestion: str = Field(..., description="One constructive suggestion")
    timestamp: str = Field(..., description="ISO-8601 time the analysis was produced")

    model_config = {"frozen": True, "populate_by_name": True}

    def to_json_dict(self) -> dict:
        """Serialize using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)
