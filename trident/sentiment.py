# Trident Sentiment
# Best-effort sentiment classification of customer feedback via Claude

import json
import logging
import numbers
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from .config import SENTIMENTS
from .helpers import round_half_up, strip_markdown_json

logger = logging.getLogger(__name__)


class SentimentResult(NamedTuple):
    sentiment: str
    confidence: float
    rating: Optional[int] = None


# Returned whenever classification fails for any reason
FALLBACK_RESULT = SentimentResult(sentiment='neutral', confidence=0.1)

DEFAULT_CONFIDENCE = 0.5


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def normalize_result(raw):
    """Coerce a parsed classifier reply into a bounded SentimentResult.

    - sentiment: kept only if exactly one of the allowed labels, else 'neutral'
    - confidence: clamped to [0, 1], 0.5 when missing or not a number
    - rating: kept only if a number within [1, 5], rounded to an integer
    """
    if not isinstance(raw, dict):
        raw = {}

    sentiment = raw.get('sentiment')
    if sentiment not in SENTIMENTS:
        sentiment = 'neutral'

    confidence = raw.get('confidence')
    if not _is_number(confidence) or confidence != confidence:  # NaN
        confidence = DEFAULT_CONFIDENCE
    confidence = max(0.0, min(1.0, float(confidence)))

    rating = raw.get('rating')
    if _is_number(rating) and 1 <= rating <= 5:
        rating = round_half_up(rating)
    else:
        rating = None

    return SentimentResult(sentiment=sentiment, confidence=confidence, rating=rating)


class SentimentClassifier(ABC):
    """Interface: classify(text) -> SentimentResult, never raises."""

    @abstractmethod
    def classify(self, text):
        ...


class ClaudeSentimentClassifier(SentimentClassifier):
    """Classifies text with the Anthropic Messages API.

    The client may be None (no API key configured), in which case every
    call returns FALLBACK_RESULT.
    """

    def __init__(self, client, prompt, model, max_tokens=200):
        self.client = client
        self.prompt = prompt
        self.model = model
        self.max_tokens = max_tokens

    def classify(self, text):
        if self.client is None:
            logger.warning("No Anthropic client configured, using fallback sentiment")
            return FALLBACK_RESULT

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=0,
                system=self.prompt,
                messages=[
                    {'role': 'user', 'content': text}
                ]
            )

            content = response.content[0].text
            content = strip_markdown_json(content)
            result = normalize_result(json.loads(content))
            logger.info("Classified feedback as %s (confidence %.2f)", result.sentiment, result.confidence)
            return result

        except Exception:
            logger.exception("Failed to analyze sentiment, using fallback")
            return FALLBACK_RESULT
