import json
import logging
from typing import Any, List, Optional
from openai import OpenAI
from pydantic import BaseModel
from inkpress.core.config import settings
from inkpress.models.blog import Sentiment

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50
UNAVAILABLE_ANALYSIS = "unavailable"
MAX_SUGGESTIONS = 5

CLASSIFY_PROMPT = """You are a content moderation AI. Analyze the given blog content for:
1. Overall sentiment (positive, neutral, negative)
2. Quality score (0-100 based on writing quality, coherence, value)
3. Content appropriateness (flag inappropriate content)
4. Brief analysis summary

Respond with JSON in this exact format:
{
  "sentiment": "positive|neutral|negative",
  "score": number_0_to_100,
  "analysis": "brief analysis summary",
  "flagged": boolean,
  "flagReason": "reason if flagged, null otherwise"
}"""

EXCERPT_PROMPT = (
    "Generate a compelling 2-3 sentence excerpt from the given blog content that would "
    "encourage readers to click and read more. Keep it under {max_chars} characters."
)

SUGGEST_PROMPT = """Analyze the blog content and provide 3-5 specific, actionable suggestions for improvement.
Respond with JSON in this format:
{
  "suggestions": ["suggestion 1", "suggestion 2", "suggestion 3"]
}"""


class Verdict(BaseModel):
    sentiment: Sentiment = Sentiment.NEUTRAL
    score: int = DEFAULT_SCORE
    analysis: str = UNAVAILABLE_ANALYSIS
    flagged: bool = False
    flag_reason: Optional[str] = None

    @classmethod
    def unavailable(cls) -> "Verdict":
        return cls()


def clamp_score(value: Any) -> int:
    """Coerce an upstream score into 0..100, falling back to the neutral midpoint."""
    if isinstance(value, bool) or value is None:
        return DEFAULT_SCORE
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SCORE
    return max(0, min(100, score))


def parse_verdict(payload: Any) -> Verdict:
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")

    raw_sentiment = payload.get("sentiment")
    try:
        sentiment = Sentiment(raw_sentiment.strip().lower())
    except (AttributeError, ValueError):
        sentiment = Sentiment.NEUTRAL

    analysis = payload.get("analysis")
    if not isinstance(analysis, str) or not analysis.strip():
        analysis = "Content analyzed"

    flagged = payload.get("flagged") is True
    flag_reason = payload.get("flagReason")
    if not flagged or not isinstance(flag_reason, str) or not flag_reason.strip():
        flag_reason = None

    return Verdict(
        sentiment=sentiment,
        score=clamp_score(payload.get("score")),
        analysis=analysis.strip(),
        flagged=flagged,
        flag_reason=flag_reason,
    )


def truncate_excerpt(content: str, max_chars: int = 150) -> str:
    return content[:max_chars] + "..."


class ClassifierGateway:
    """
    Wraps the external language model. Every public method degrades to a
    deterministic fallback instead of raising.
    """

    def __init__(self, client: Optional[OpenAI], model: str, excerpt_max_chars: int = 150):
        self.client = client
        self.model = model
        self.excerpt_max_chars = excerpt_max_chars

    def _complete(self, system_prompt: str, content: str, json_mode: bool = False) -> str:
        if self.client is None:
            raise RuntimeError("OpenAI client is not configured")

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": content},
            ],
            **kwargs,
        )
        text = response.choices[0].message.content
        if not text or not text.strip():
            raise ValueError("Empty response from OpenAI")
        return text.strip()

    def classify(self, content: str) -> Verdict:
        if not content or not content.strip():
            return Verdict.unavailable()
        try:
            return parse_verdict(json.loads(self._complete(CLASSIFY_PROMPT, content, json_mode=True)))
        except Exception as e:
            logger.warning(f"AI analysis failed, using neutral verdict: {e}")
            return Verdict.unavailable()

    def summarize(self, content: str) -> str:
        try:
            prompt = EXCERPT_PROMPT.format(max_chars=self.excerpt_max_chars)
            return self._complete(prompt, content)
        except Exception as e:
            logger.warning(f"Excerpt generation failed, truncating content: {e}")
            return truncate_excerpt(content or "", self.excerpt_max_chars)

    def suggest_improvements(self, content: str) -> List[str]:
        try:
            result = json.loads(self._complete(SUGGEST_PROMPT, content, json_mode=True))
            suggestions = result.get("suggestions") if isinstance(result, dict) else None
            if not isinstance(suggestions, list):
                return []
            cleaned = [s.strip() for s in suggestions if isinstance(s, str) and s.strip()]
            return cleaned[:MAX_SUGGESTIONS]
        except Exception as e:
            logger.warning(f"Suggestion generation failed: {e}")
            return []


def build_openai_client() -> Optional[OpenAI]:
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set; AI analysis will use fallback verdicts")
        return None
    return OpenAI(
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.CLASSIFIER_TIMEOUT_SECONDS,
        max_retries=0,
    )


def build_classifier() -> ClassifierGateway:
    return ClassifierGateway(
        client=build_openai_client(),
        model=settings.OPENAI_MODEL,
        excerpt_max_chars=settings.EXCERPT_MAX_CHARS,
    )
