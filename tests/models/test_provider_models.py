from __future__ import annotations

from typing import Any

import pytest
from marshmallow.exceptions import ValidationError

from models.provider_models import CloudDetectionPayload, CloudTranslationPayload, load_payload


def test_translation_payload_reads_camel_case_keys() -> None:
    payload = load_payload(
        CloudTranslationPayload, {"translatedText": "Hello", "detectedSourceLanguage": "fr", "input": "Bonjour"}
    )

    assert isinstance(payload, CloudTranslationPayload)
    assert payload.translated_text == "Hello"
    assert payload.detected_source_language == "fr"
    assert payload.input == "Bonjour"


def test_translation_payload_optional_fields() -> None:
    payload = load_payload(CloudTranslationPayload, {"translatedText": "Hello"})

    assert payload.detected_source_language is None
    assert payload.input is None


def test_translation_payload_ignores_unknown_keys() -> None:
    payload = load_payload(CloudTranslationPayload, {"translatedText": "Hello", "model": "nmt"})

    assert payload.translated_text == "Hello"


def test_detection_payload() -> None:
    payload = load_payload(CloudDetectionPayload, {"language": "de", "confidence": 0.87})

    assert isinstance(payload, CloudDetectionPayload)
    assert payload.language == "de"
    assert payload.confidence == pytest.approx(0.87)


@pytest.mark.parametrize(
    "data",
    [
        {"detectedSourceLanguage": "fr"},
        {"translatedText": 123},
        {"translatedText": ["a"]},
        {"translatedText": None},
        {"translatedText": "Hello", "detectedSourceLanguage": 7},
    ],
)
def test_translation_payload_rejects_malformed_data(data: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        load_payload(CloudTranslationPayload, data)


@pytest.mark.parametrize(
    "data",
    [
        {"confidence": 0.9},
        {"language": 1, "confidence": 0.9},
        {"language": "en", "confidence": "high"},
    ],
)
def test_detection_payload_rejects_malformed_data(data: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        load_payload(CloudDetectionPayload, data)
