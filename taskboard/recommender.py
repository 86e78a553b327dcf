# taskboard/recommender.py

"""Duration suggestions from an OpenAI-compatible chat completions endpoint.

The default base URL points at Gemini's OpenAI-compatible API, so the same
client works against Gemini, OpenAI or a local server. Any failure degrades
to FALLBACK: the suggestion is a convenience, never a reason to fail a
request.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Optional

import openai
from openai import OpenAI
from pydantic import BaseModel, field_validator

from .config import Settings

logger = logging.getLogger(__name__)

MAX_DURATION = 1440

PROMPT = (
    'Given the task title "{title}", estimate the time in minutes it would take to complete. '
    'Return ONLY a valid JSON object with two keys: "duration" (an integer, e.g., 15, 30, 45) '
    'and "confidence" (a float between 0 and 1). Example: {{"duration": 45, "confidence": 0.8}}'
)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class Recommendation(BaseModel):
    duration: int
    confidence: float

    @field_validator("duration", mode="before")
    @classmethod
    def _clamp_duration(cls, v):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("duration must be a number")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("duration must be finite")
        return min(max(int(round(v)), 1), MAX_DURATION)

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("confidence must be finite")
        return min(max(v, 0.0), 1.0)


FALLBACK = Recommendation(duration=30, confidence=0.5)


def parse_recommendation(text: str) -> Recommendation:
    """Parse the model's reply. Raises ValueError on anything but the expected JSON object."""
    cleaned = _FENCE_RE.sub("", text or "").strip()
    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return Recommendation.model_validate(data)


class DurationRecommender:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.settings.ai_api_key,
                base_url=self.settings.ai_base_url,
                timeout=self.settings.ai_timeout_seconds,
                max_retries=0,
            )
        return self._client

    def recommend(self, title: str) -> Recommendation:
        if not self.settings.ai_api_key:
            logger.warning("No AI API key configured; returning fallback duration")
            return FALLBACK
        try:
            resp = self._get_client().chat.completions.create(
                model=self.settings.ai_model,
                messages=[{"role": "user", "content": PROMPT.format(title=title)}],
                temperature=0.2,
            )
            if not resp.choices:
                raise ValueError("reply has no choices")
            text = resp.choices[0].message.content or ""
            rec = parse_recommendation(text)
        except openai.OpenAIError as e:
            logger.error("AI API error for %r: %s", title, e)
            return FALLBACK
        except ValueError as e:
            logger.warning("Unparseable AI reply for %r: %s", title, e)
            return FALLBACK
        logger.debug("AI suggests %s min (confidence %.2f) for %r", rec.duration, rec.confidence, title)
        return rec
