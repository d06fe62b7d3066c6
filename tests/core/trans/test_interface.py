"""Unit tests for core.trans.interface module."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import pytest

from core.trans.interface import (
    AllProvidersFailedError,
    EmptyTextError,
    EngineAttributes,
    Outcome,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
    Result,
    TextTooLongError,
    TransInterface,
    UnsupportedLanguagePairError,
)
from models.translation_models import TranslationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from models.config_models import Config


class StubEngine(TransInterface):
    """Engine whose answer is set per test."""

    def __init__(
        self,
        result: Result | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        super().__init__()
        self.result: Result = result or Result(text="Hello", detected_source_lang="fr")
        self.error: Exception | None = error
        self.delay: float = delay
        self.calls: list[tuple[str, str, str | None, Mapping[str, Any] | None]] = []
        self.engine_attributes = EngineAttributes(name="stub_provider", tier="general")

    @property
    def is_available(self) -> bool:
        return True

    @staticmethod
    def fetch_engine_name() -> str:
        return ""

    def initialize(self, config: Config) -> None:
        _ = config

    async def detect_language(self, content: str, tgt_lang: str) -> Result:
        return await self.translation(content, tgt_lang)

    async def translation(
        self,
        content: str,
        tgt_lang: str,
        src_lang: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result:
        self.calls.append((content, tgt_lang, src_lang, context))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        pass


def test_outcome_requires_exactly_one_side() -> None:
    with pytest.raises(ValueError):
        Outcome()
    with pytest.raises(ValueError):
        Outcome(
            result=TranslationResult("a", "b", "fr", "en", "high", "p"),
            error=ProviderError("x"),
        )


def test_outcome_failure_is_not_ok() -> None:
    outcome: Outcome = Outcome.failure(ProviderError("boom"))

    assert outcome.ok is False
    assert outcome.result is None


@pytest.mark.asyncio
async def test_translate_success_builds_enriched_result() -> None:
    engine = StubEngine()

    outcome: Outcome = await engine.translate("Bonjour, great day 😀", "fr", "en", {"formality": "more"})

    assert outcome.ok is True
    result: TranslationResult = outcome.result  # type: ignore[assignment]
    assert result.translated_text == "Hello"
    assert result.provider == "stub_provider"
    assert result.source_lang == "fr"
    assert result.confidence == "high"
    assert result.sentiment.sentiment == "positive"
    assert result.context.additional_context == {"formality": "more"}
    assert engine.calls[0][2] == "fr"


@pytest.mark.asyncio
async def test_translate_auto_passes_no_source_language() -> None:
    engine = StubEngine()

    outcome: Outcome = await engine.translate("Bonjour", "auto", "en")

    assert engine.calls[0][2] is None
    assert outcome.result is not None
    assert outcome.result.source_lang == "fr"
    assert outcome.result.confidence == "high"


@pytest.mark.asyncio
async def test_translate_disagreeing_detection_gives_medium_confidence() -> None:
    engine = StubEngine(result=Result(text="Hello", detected_source_lang="ES"))

    outcome: Outcome = await engine.translate("Bonjour", "fr", "en")

    assert outcome.result is not None
    assert outcome.result.source_lang == "es"
    assert outcome.result.confidence == "medium"


@pytest.mark.asyncio
async def test_translate_undetermined_language_keeps_requested_source() -> None:
    engine = StubEngine(result=Result(text="http://example.com", detected_source_lang="und"))

    outcome: Outcome = await engine.translate("http://example.com", "fr", "en")

    assert outcome.result is not None
    assert outcome.result.source_lang == "fr"


@pytest.mark.asyncio
async def test_translate_timeout_is_provider_timeout() -> None:
    engine = StubEngine(delay=1.0)
    engine.timeout = 0.01

    outcome: Outcome = await engine.translate("Bonjour", "fr", "en")

    assert isinstance(outcome.error, ProviderTimeoutError)


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_translate_empty_answer_is_response_error(text: str | None) -> None:
    engine = StubEngine(result=Result(text=text, detected_source_lang="fr"))

    outcome: Outcome = await engine.translate("Bonjour", "fr", "en")

    assert isinstance(outcome.error, ProviderResponseError)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw",
    [
        Result(text=["Hello"], detected_source_lang="fr"),  # type: ignore[arg-type]
        Result(text=123, detected_source_lang="fr"),  # type: ignore[arg-type]
        Result(text="Hello", detected_source_lang=["fr"]),  # type: ignore[arg-type]
    ],
)
async def test_translate_non_string_answer_is_response_error(raw: Result) -> None:
    engine = StubEngine(result=raw)

    outcome: Outcome = await engine.translate("Bonjour", "fr", "en")

    assert outcome.ok is False
    assert isinstance(outcome.error, ProviderResponseError)


@pytest.mark.asyncio
async def test_translate_provider_error_becomes_failure() -> None:
    engine = StubEngine(error=ProviderRateLimitError("slow down"))

    outcome: Outcome = await engine.translate("Bonjour", "fr", "en")

    assert isinstance(outcome.error, ProviderRateLimitError)
    assert engine.is_rate_limit_error(outcome.error) is True


@pytest.mark.asyncio
async def test_translate_unexpected_error_becomes_provider_error() -> None:
    engine = StubEngine(error=KeyError("bug"))

    outcome: Outcome = await engine.translate("Bonjour", "fr", "en")

    assert type(outcome.error) is ProviderError


def test_calculate_confidence() -> None:
    assert TransInterface.calculate_confidence("fr", "auto") == "high"
    assert TransInterface.calculate_confidence("FR", "fr") == "high"
    assert TransInterface.calculate_confidence("es", "fr") == "medium"


def test_engine_attributes_can_only_be_set_once() -> None:
    engine = StubEngine()

    with pytest.raises(RuntimeError):
        engine.engine_attributes = EngineAttributes(name="other")


def test_registration_by_distinguished_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(TransInterface, "registered", {})

    class NamedEngine(StubEngine):
        @staticmethod
        def fetch_engine_name() -> str:
            return "named"

    assert TransInterface.registered == {"named": NamedEngine}

    with pytest.raises(ValueError):

        class DuplicateEngine(StubEngine):
            @staticmethod
            def fetch_engine_name() -> str:
                return "named"


def test_get_authentication_key_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(TransInterface, "registered", {})

    class KeyedEngine(StubEngine):
        @staticmethod
        def fetch_engine_name() -> str:
            return "keyed"

    monkeypatch.delenv("KEYED_API_OAUTH", raising=False)
    assert KeyedEngine().get_authentication_key() == ""
    monkeypatch.setenv("KEYED_API_OAUTH", "secret")
    assert KeyedEngine().get_authentication_key() == "secret"


def test_error_user_messages_and_recoverability() -> None:
    too_long = TextTooLongError(6000, 5000)

    assert too_long.text_length == 6000
    assert "5000" in too_long.user_message
    assert too_long.is_recoverable is False
    assert EmptyTextError("x").is_recoverable is False
    assert UnsupportedLanguagePairError("x").is_recoverable is False
    assert ProviderTimeoutError("x").is_recoverable is True


def test_all_providers_failed_keeps_failures_in_order() -> None:
    err = AllProvidersFailedError({"deepl": ProviderError("a"), "google": ProviderResponseError("b")})

    assert list(err.failures) == ["deepl", "google"]
    assert "deepl: a" in str(err)
    assert "no engine available" in str(AllProvidersFailedError())
