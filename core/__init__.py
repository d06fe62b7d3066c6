"""Core components of the LingoSphere translation engine.

This package contains the cascade orchestrator, the translation cache, the enrichment
analyzers and the pluggable translation engines.
"""

from core.cache.manager import TranslationCacheManager
from core.enrichment.pipeline import EnrichmentPipeline
from core.trans.manager import TransManager
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "EnrichmentPipeline",
    "TransManager",
    "TranslationCacheManager",
]
