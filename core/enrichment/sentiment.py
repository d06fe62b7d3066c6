"""Emoji and keyword based sentiment scoring.

emoji 2.14.1 or later stores its data in a separate data file. When building an executable,
make sure ``emoji.unicode_codes/*.json`` is collected with the rest of the package data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

import emoji
from packaging.version import Version

from models.language_patterns import EMOJI_SENTIMENT, NEGATIVE_WORDS, POSITIVE_WORDS
from models.translation_models import SentimentAnalysis, SentimentType
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["SentimentAnalyzer"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

if Version(emoji.__version__) < Version("2.14.1"):
    logger.warning(
        "The version of the emoji module currently in use is %s. Version 2.14.1 or later is required.",
        emoji.__version__,
    )

KEYWORD_WEIGHT: Final[float] = 0.3
POSITIVE_THRESHOLD: Final[float] = 0.2
NEGATIVE_THRESHOLD: Final[float] = -0.2
_VARIATION_SELECTOR: Final[str] = "\ufe0f"


class SentimentAnalyzer:
    """Scores the sentiment of a text from its emoji and a small keyword lexicon.

    The emoji part is the average weight over every lexicon emoji occurrence. Keywords shift
    the score by a fixed amount when positive or negative words dominate.
    """

    def analyze(self, text: str) -> SentimentAnalysis:
        """Analyze the sentiment of a text.

        Never raises; any internal failure yields the neutral analysis.

        Args:
            text (str): Original (untranslated) text.

        Returns:
            SentimentAnalysis: Category, clamped score and confidence.
        """
        try:
            score: float = self._emoji_score(text) + self._keyword_score(text)
        except Exception as err:  # noqa: BLE001
            logger.warning("Sentiment analysis failed: %s", err)
            return SentimentAnalysis.neutral()

        sentiment: SentimentType
        if score > POSITIVE_THRESHOLD:
            sentiment = "positive"
        elif score < NEGATIVE_THRESHOLD:
            sentiment = "negative"
        else:
            sentiment = "neutral"

        return SentimentAnalysis(
            sentiment=sentiment,
            score=min(1.0, max(-1.0, score)),
            confidence=min(100.0, max(0.0, abs(score) * 100)),
        )

    @staticmethod
    def _emoji_score(text: str) -> float:
        weights: list[float] = []
        for item in emoji.emoji_list(text):
            weight: float | None = EMOJI_SENTIMENT.get(item["emoji"].replace(_VARIATION_SELECTOR, ""))
            if weight is not None:
                weights.append(weight)
        return sum(weights) / len(weights) if weights else 0.0

    @staticmethod
    def _keyword_score(text: str) -> float:
        positive: int = StringUtils.count_phrase_hits(text, POSITIVE_WORDS)
        negative: int = StringUtils.count_phrase_hits(text, NEGATIVE_WORDS)
        if positive > negative:
            return KEYWORD_WEIGHT
        if negative > positive:
            return -KEYWORD_WEIGHT
        return 0.0
