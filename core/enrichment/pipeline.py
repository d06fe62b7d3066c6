"""Context enrichment attached to every translation result.

Both analyses look at the original text only and never depend on the provider response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from core.enrichment.context import ContextAnalyzer
from core.enrichment.sentiment import SentimentAnalyzer

if TYPE_CHECKING:
    from collections.abc import Mapping

    from models.translation_models import ContextAnalysis, SentimentAnalysis

__all__: list[str] = ["EnrichmentPipeline"]


class EnrichmentPipeline:
    """Runs the sentiment and context analyzers on a source text.

    Attributes:
        sentiment_analyzer (SentimentAnalyzer): Sentiment scorer.
        context_analyzer (ContextAnalyzer): Formality/domain/slang/culture analyzer.
    """

    def __init__(
        self,
        sentiment_analyzer: SentimentAnalyzer | None = None,
        context_analyzer: ContextAnalyzer | None = None,
    ) -> None:
        self.sentiment_analyzer: SentimentAnalyzer = sentiment_analyzer or SentimentAnalyzer()
        self.context_analyzer: ContextAnalyzer = context_analyzer or ContextAnalyzer()

    def enrich(
        self, text: str, context: Mapping[str, Any] | None = None
    ) -> tuple[SentimentAnalysis, ContextAnalysis]:
        """Analyze the original text.

        The analyzers degrade to their neutral defaults on failure, so this never raises.

        Args:
            text (str): Original text.
            context (Mapping[str, Any] | None): Caller context echoed into the context analysis.

        Returns:
            tuple[SentimentAnalysis, ContextAnalysis]: Sentiment and context of the text.
        """
        return self.sentiment_analyzer.analyze(text), self.context_analyzer.analyze(text, context)
