from __future__ import annotations

import json

import pytest

from models.cache_models import CacheEntry, CacheStatistics
from models.translation_models import (
    ContextAnalysis,
    SentimentAnalysis,
    TranslationMetadata,
    TranslationRequest,
    TranslationResult,
)


def _result(provider: str = "google_api") -> TranslationResult:
    return TranslationResult(
        original_text="Bonjour",
        translated_text="Hello",
        source_lang="fr",
        target_lang="en",
        confidence="high",
        provider=provider,
        context=ContextAnalysis(cultural_markers=("uk_culture",), additional_context={"formality": "more"}),
    )


def test_request_is_auto_ignores_case() -> None:
    assert TranslationRequest(text="hi", tgt_lang="fr", src_lang="AUTO").is_auto is True
    assert TranslationRequest(text="hi", tgt_lang="fr", src_lang="en").is_auto is False


def test_neutral_defaults() -> None:
    assert SentimentAnalysis.neutral() == SentimentAnalysis("neutral", 0.0, 0.0)
    assert ContextAnalysis.neutral({"k": "v"}).additional_context == {"k": "v"}
    assert ContextAnalysis.neutral().formality == "neutral"


def test_processing_time_is_recorded_once() -> None:
    metadata = TranslationMetadata()
    assert metadata.processing_time_ms is None

    metadata.record_processing_time(0.1234)

    assert metadata.processing_time_ms == 123
    assert metadata.is_fast is True
    with pytest.raises(RuntimeError):
        metadata.record_processing_time(1.0)


def test_negative_processing_time_is_clamped() -> None:
    metadata = TranslationMetadata()

    metadata.record_processing_time(-1.0)

    assert metadata.processing_time == 0.0


def test_result_to_dict_is_json_serializable() -> None:
    result: TranslationResult = _result()
    result.metadata.record_processing_time(0.25)

    data = result.to_dict()

    assert data["provider"] == "google_api"
    assert data["context"]["cultural_markers"] == ["uk_culture"]
    assert data["metadata"]["processing_time_ms"] == 250
    assert data["sentiment"]["sentiment"] == "neutral"
    json.dumps(data)


def test_identity_flag() -> None:
    assert _result("none").is_identity is True
    assert _result().is_identity is False


def test_cache_entry_expiry_boundary() -> None:
    entry = CacheEntry(result=_result(), created_at=100.0, ttl=10.0)

    assert entry.is_expired(110.0) is False
    assert entry.is_expired(110.001) is True


def test_cache_statistics_hit_ratio() -> None:
    assert CacheStatistics().hit_ratio == 0.0
    stats = CacheStatistics(total_entries=2, valid_entries=2, hits=1, misses=2)

    assert stats.to_dict()["hit_ratio"] == 0.3333
