from __future__ import annotations

from unittest.mock import MagicMock

from core.enrichment.pipeline import EnrichmentPipeline
from models.translation_models import ContextAnalysis, SentimentAnalysis


def test_enrich_runs_both_analyzers_on_original_text() -> None:
    sentiment_analyzer = MagicMock()
    sentiment_analyzer.analyze.return_value = SentimentAnalysis("positive", 0.5, 50.0)
    context_analyzer = MagicMock()
    context_analyzer.analyze.return_value = ContextAnalysis(domain="technical")
    pipeline = EnrichmentPipeline(sentiment_analyzer, context_analyzer)

    sentiment, context = pipeline.enrich("text", {"k": "v"})

    assert sentiment.sentiment == "positive"
    assert context.domain == "technical"
    sentiment_analyzer.analyze.assert_called_once_with("text")
    context_analyzer.analyze.assert_called_once_with("text", {"k": "v"})


def test_default_pipeline_returns_analyses() -> None:
    sentiment, context = EnrichmentPipeline().enrich("Great meeting 😀")

    assert sentiment.sentiment == "positive"
    assert context.domain == "business"
    assert context.additional_context == {}
