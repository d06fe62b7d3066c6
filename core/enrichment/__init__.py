from core.enrichment.context import ContextAnalyzer
from core.enrichment.pipeline import EnrichmentPipeline
from core.enrichment.sentiment import SentimentAnalyzer

__all__: list[str] = ["ContextAnalyzer", "EnrichmentPipeline", "SentimentAnalyzer"]
