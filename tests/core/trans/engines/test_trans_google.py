from __future__ import annotations

from typing import Any, ClassVar

import pytest

from core.trans.engines import trans_google as trans_google_module
from core.trans.engines.async_google_translate import (
    GoogleWebError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
    ResponseFormatError,
)
from core.trans.interface import (
    ProviderConfigurationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
    Result,
    UnsupportedLanguagePairError,
)
from models.config_models import Config


class DummyTranslator:
    error: ClassVar[Exception | None] = None
    detected: ClassVar[str] = "EN"

    def __init__(self, url_suffix: str, timeout: float, max_length: int) -> None:
        self.url_suffix: str = url_suffix
        self.timeout: float = timeout
        self.max_length: int = max_length
        self.closed = False
        self.calls: list[tuple[str, str, str | None]] = []

    async def translate(self, content: str, tgt_lang: str, src_lang: str | None) -> trans_google_module.TextResult:
        self.calls.append((content, tgt_lang, src_lang))
        if type(self).error is not None:
            raise type(self).error
        return trans_google_module.TextResult("ok", type(self).detected, metadata={"engine": "google"})

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def patch_translator(monkeypatch: pytest.MonkeyPatch) -> None:
    DummyTranslator.error = None
    DummyTranslator.detected = "EN"
    monkeypatch.setattr(trans_google_module, "AsyncTranslator", DummyTranslator)


@pytest.fixture
def config() -> Config:
    config = Config()
    config.TRANSLATION.GOOGLE_SUFFIX = "co.jp"
    config.PROVIDER.TIMEOUT = 7.0
    return config


@pytest.fixture
def engine(config: Config) -> trans_google_module.GoogleTranslation:
    engine = trans_google_module.GoogleTranslation()
    engine.initialize(config)
    return engine


def _translator(engine: trans_google_module.GoogleTranslation) -> DummyTranslator:
    return engine._inst  # type: ignore[return-value]


def test_inst_property_raises_when_uninitialized() -> None:
    engine = trans_google_module.GoogleTranslation()

    with pytest.raises(ProviderConfigurationError):
        _ = engine._inst
    assert engine.is_available is False


def test_initialize_sets_attributes_and_instance(engine: trans_google_module.GoogleTranslation) -> None:
    assert engine.engine_name == "google_package"
    assert engine.tier == "fallback"
    assert engine.timeout == 7.0
    translator: DummyTranslator = _translator(engine)
    assert translator.url_suffix == "co.jp"
    assert translator.timeout == 7.0
    assert translator.max_length == 5000


@pytest.mark.asyncio
async def test_translation_returns_result(engine: trans_google_module.GoogleTranslation) -> None:
    result: Result = await engine.translation("hello", tgt_lang="ja", src_lang="en")

    assert result.text == "ok"
    assert result.detected_source_lang == "en"
    assert _translator(engine).calls == [("hello", "ja", "en")]


@pytest.mark.asyncio
async def test_detect_language_delegates_to_translation(engine: trans_google_module.GoogleTranslation) -> None:
    DummyTranslator.detected = "fr"

    result: Result = await engine.detect_language("bonjour", "en")

    assert result.detected_source_lang == "fr"
    assert _translator(engine).calls == [("bonjour", "en", None)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (HTTPTooManyRequests(429, "too many"), ProviderRateLimitError),
        (InvalidLanguageCodeError("xx"), UnsupportedLanguagePairError),
        (ResponseFormatError("layout"), ProviderResponseError),
        (GoogleWebError("offline"), ProviderError),
    ],
)
async def test_translation_errors_are_mapped(
    engine: trans_google_module.GoogleTranslation, error: Exception, expected: type[Exception]
) -> None:
    DummyTranslator.error = error

    with pytest.raises(expected):
        await engine.translation("hello", "ja", "en")


@pytest.mark.asyncio
async def test_translate_reports_fallback_provider(engine: trans_google_module.GoogleTranslation) -> None:
    outcome: Any = await engine.translate("hello", "auto", "ja")

    assert outcome.result.provider == "google_package"
    assert outcome.result.source_lang == "en"


@pytest.mark.asyncio
async def test_close_calls_translator_close(engine: trans_google_module.GoogleTranslation) -> None:
    translator: DummyTranslator = _translator(engine)

    await engine.close()

    assert translator.closed is True
    assert engine.is_available is False
