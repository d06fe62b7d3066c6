"""Data models for LingoSphere.

This package contains dataclass definitions for configuration, translation requests and results,
cache entries, provider payloads and the lexical resources used for detection and enrichment.
"""

from __future__ import annotations

from models.cache_models import CacheEntry, CacheStatistics
from models.config_models import Config
from models.provider_models import CloudDetectionPayload, CloudTranslationPayload
from models.translation_models import (
    AUTO_LANGUAGE,
    IDENTITY_PROVIDER,
    ContextAnalysis,
    SentimentAnalysis,
    TranslationMetadata,
    TranslationRequest,
    TranslationResult,
)

__all__: list[str] = [
    "AUTO_LANGUAGE",
    "IDENTITY_PROVIDER",
    "CacheEntry",
    "CacheStatistics",
    "CloudDetectionPayload",
    "CloudTranslationPayload",
    "Config",
    "ContextAnalysis",
    "SentimentAnalysis",
    "TranslationMetadata",
    "TranslationRequest",
    "TranslationResult",
]
