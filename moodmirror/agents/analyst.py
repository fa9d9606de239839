"""Emotion analysis agent.

Sends a piece of text to the language model and turns its JSON reply
into an EmotionAnalysis.
"""

import json
import logging
import re
from datetime import datetime
from typing import Optional

import openai
from pydantic import ValidationError as PydanticValidationError

from moodmirror.agents.base import (
    configure_api_key,
    create_agent,
    get_api_key,
    get_model,
    run_agent_async,
    run_agent_sync,
)
from moodmirror.errors import AuthenticationError, ConnectivityError, ValidationError
from moodmirror.models import MAX_TEXT_LENGTH, TONES, EmotionAnalysis

logger = logging.getLogger(__name__)

MAX_EMOTIONS = 3

EMOTION_ANALYST_INSTRUCTIONS = f"""You analyze the emotional content of short personal texts.

Reply with a single JSON object and nothing else, using exactly these fields:

{{
  "overallTone": "one of: {', '.join(TONES)}",
  "primaryEmotions": [
    {{"emotion": "emotion name", "percentage": number}},
    {{"emotion": "emotion name", "percentage": number}},
    {{"emotion": "emotion name", "percentage": number}}
  ],
  "causeExplanation": "1-2 sentence explanation of what's causing these emotions",
  "suggestion": "1 sentence constructive suggestion for emotional well-being or action"
}}

Rules:
- Include 1-3 primary emotions maximum
- Percentages should add up to 100
- Keep explanations concise and helpful
- Make suggestions constructive and actionable
"""

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$")


def validate_text(text: Optional[str]) -> str:
    """Check that text can be sent for analysis.

    Raises:
        ValidationError: If the text is blank or too long.
    """
    if not text or not text.strip():
        raise ValidationError("Text is required for analysis")
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(
            f"Text is too long. Please limit to {MAX_TEXT_LENGTH} characters."
        )
    return text


def parse_analysis(raw: str, now: Optional[datetime] = None) -> EmotionAnalysis:
    """Parse the model's JSON reply.

    Keeps at most three emotions and stamps the analysis with ``now``.
    Tone names are matched case-insensitively.

    Args:
        raw: Reply text from the model.
        now: Analysis time. Defaults to the current time.

    Returns:
        Parsed EmotionAnalysis.

    Raises:
        ValidationError: If the reply is not a usable analysis.
    """
    cleaned = _FENCE_RE.sub("", raw.strip())
    try:
        data = json.loads(cleaned)
    except ValueError as e:
        raise ValidationError("Failed to parse analysis response") from e
    if not isinstance(data, dict):
        raise ValidationError("Analysis response is not an object")

    required = ("overallTone", "primaryEmotions", "causeExplanation", "suggestion")
    missing = [key for key in required if not data.get(key)]
    if missing:
        raise ValidationError(f"Analysis response missing: {', '.join(missing)}")

    tone = str(data["overallTone"]).strip()
    for known in TONES:
        if known.lower() == tone.lower():
            tone = known
            break

    emotions = data["primaryEmotions"]
    if not isinstance(emotions, list):
        raise ValidationError("primaryEmotions must be a list")

    try:
        return EmotionAnalysis(
            overall_tone=tone,
            primary_emotions=emotions[:MAX_EMOTIONS],
            cause_explanation=data["causeExplanation"],
            suggestion=data["suggestion"],
            timestamp=(now or datetime.now()).isoformat(),
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid analysis response: {e}") from e


class AnalysisService:
    """Emotion analysis backed by an OpenAI agent.

    Calls are not retried; failures surface as ``AuthenticationError``,
    ``ConnectivityError`` or ``ValidationError``.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize the service.

        Args:
            api_key: OpenAI API key from the config file. The
                OPENAI_API_KEY environment variable takes precedence.
            model: Model override from the config file.
        """
        self._api_key = get_api_key(api_key)
        self._model = get_model(model)
        self._agent = None

    def _get_agent(self):
        if not self._api_key:
            raise AuthenticationError(
                "No OpenAI API key set. Add it to the config or set OPENAI_API_KEY."
            )
        if self._agent is None:
            configure_api_key(self._api_key)
            self._agent = create_agent(
                name="Emotion Analyst",
                instructions=EMOTION_ANALYST_INSTRUCTIONS,
                model=self._model,
            )
        return self._agent

    @staticmethod
    def _prompt(text: str) -> str:
        return f'Text to analyze: "{text}"'

    def analyze(self, text: str) -> EmotionAnalysis:
        """Analyze the emotional content of text.

        Args:
            text: Text to analyze (at most 5000 characters).

        Returns:
            EmotionAnalysis for the text.
        """
        validate_text(text)
        agent = self._get_agent()
        logger.info("Analyzing text (%d characters)", len(text))
        try:
            reply = run_agent_sync(agent, self._prompt(text))
        except openai.AuthenticationError as e:
            raise AuthenticationError(f"AI service rejected the API key: {e}") from e
        except (openai.APIConnectionError, openai.APIStatusError) as e:
            raise ConnectivityError(f"AI service unavailable: {e}") from e
        return parse_analysis(str(reply))

    async def analyze_async(self, text: str) -> EmotionAnalysis:
        """Async variant of ``analyze``."""
        validate_text(text)
        agent = self._get_agent()
        logger.info("Analyzing text (%d characters)", len(text))
        try:
            reply = await run_agent_async(agent, self._prompt(text))
        except openai.AuthenticationError as e:
            raise AuthenticationError(f"AI service rejected the API key: {e}") from e
        except (openai.APIConnectionError, openai.APIStatusError) as e:
            raise ConnectivityError(f"AI service unavailable: {e}") from e
        return parse_analysis(str(reply))
