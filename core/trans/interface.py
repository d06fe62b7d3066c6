"""This module defines the abstract base class for translation engines and the error hierarchy.

It includes the Result data class for raw engine responses, the Outcome value returned by
``TransInterface.translate()``, and the exceptions raised by validation, engines and the cascade.
"""

from __future__ import annotations

import asyncio
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Final, Literal

from core.enrichment.pipeline import EnrichmentPipeline
from models.translation_models import AUTO_LANGUAGE, UNDETERMINED_LANGUAGE, TranslationConfidence, TranslationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.config_models import Config

__all__: list[str] = [
    "TIER_ORDER",
    "AllProvidersFailedError",
    "EmptyTextError",
    "EngineAttributes",
    "EngineTier",
    "InvalidInputError",
    "Outcome",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderQuotaExceededError",
    "ProviderRateLimitError",
    "ProviderResponseError",
    "ProviderTimeoutError",
    "Result",
    "TextTooLongError",
    "TransInterface",
    "TranslationError",
    "UnsupportedLanguagePairError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_PROVIDER_TIMEOUT: Final[float] = 15.0

type EngineTier = Literal["premium", "general", "fallback"]

# Cascade order: lower value is tried first.
TIER_ORDER: Final[dict[str, int]] = {"premium": 0, "general": 1, "fallback": 2}


class TranslationError(Exception):
    """Base class of every error raised while translating.

    Attributes:
        default_user_message (ClassVar[str]): Message suitable for end users.
        recoverable (ClassVar[bool]): Whether retrying later may succeed.
    """

    default_user_message: ClassVar[str] = "Translation failed. Please try again."
    recoverable: ClassVar[bool] = True

    @property
    def user_message(self) -> str:
        return self.default_user_message

    @property
    def is_recoverable(self) -> bool:
        return self.recoverable


class InvalidInputError(TranslationError):
    """The request can never succeed as submitted."""

    default_user_message = "The text cannot be translated."
    recoverable = False


class EmptyTextError(InvalidInputError):
    """The text is empty or whitespace only."""

    default_user_message = "Please enter some text to translate."


class TextTooLongError(InvalidInputError):
    """The text exceeds the configured maximum length.

    Attributes:
        text_length (int): Length of the submitted text.
        max_length (int): Maximum accepted length.
    """

    def __init__(self, text_length: int, max_length: int) -> None:
        self.text_length: int = text_length
        self.max_length: int = max_length
        super().__init__(f"Text length {text_length} exceeds the maximum of {max_length} characters.")

    @property
    def user_message(self) -> str:
        return f"Text is too long for translation. Maximum length is {self.max_length} characters."


class ProviderError(TranslationError):
    """A single engine failed. The cascade recovers by trying the next engine."""


class UnsupportedLanguagePairError(ProviderError):
    """The engine does not support the requested language pair."""

    default_user_message = "This language pair is not supported."
    recoverable = False


class ProviderConfigurationError(ProviderError):
    """The engine is missing credentials or a usable client."""

    default_user_message = "Authentication failed. Please check the translation service settings."
    recoverable = False


class ProviderTimeoutError(ProviderError):
    """The engine did not answer within the per-call timeout."""

    default_user_message = "Please check your internet connection."


class ProviderRateLimitError(ProviderError):
    """The engine rejected the request because of rate limiting."""

    default_user_message = "The translation service is busy. Please try again shortly."


class ProviderQuotaExceededError(ProviderError):
    """The engine's character quota has been exhausted."""

    default_user_message = "Translation quota exceeded. Please try again later."


class ProviderResponseError(ProviderError):
    """The engine answered with a malformed or empty payload."""


class AllProvidersFailedError(TranslationError):
    """Every eligible engine failed.

    Attributes:
        failures (dict[str, ProviderError]): Failure per engine name, in the order they were tried.
    """

    def __init__(self, failures: Mapping[str, ProviderError] | None = None) -> None:
        self.failures: dict[str, ProviderError] = dict(failures or {})
        detail: str = "; ".join(f"{name}: {err}" for name, err in self.failures.items()) or "no engine available"
        super().__init__(f"All translation engines failed ({detail})")


@dataclass
class EngineAttributes:
    """Engine-specific capabilities and behavior flags.

    Attributes:
        name (str): Provider tag reported in translation results (e.g. 'google_api').
        tier (EngineTier): Position in the cascade.
    """

    name: str
    tier: EngineTier = "fallback"


@dataclass
class Result:
    """Raw engine response.

    Attributes:
        text (str | None): Translated text. None if translation fails.
        detected_source_lang (str | None): Detected source language code. None if detection fails.
        metadata (dict[str, str] | None): Engine-specific metadata.
    """

    text: str | None = None
    detected_source_lang: str | None = None
    metadata: dict[str, str] | None = None

    def __str__(self) -> str:
        if self.text is None:
            return ""
        return self.text


@dataclass(frozen=True)
class Outcome:
    """Either a translation result or the engine error, never both."""

    result: TranslationResult | None = None
    error: ProviderError | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            msg = "Outcome requires exactly one of result or error."
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        return self.result is not None

    @classmethod
    def success(cls, result: TranslationResult) -> Outcome:
        return cls(result=result)

    @classmethod
    def failure(cls, error: ProviderError) -> Outcome:
        return cls(error=error)


class TransInterface(ABC):
    """Abstract base class for translation engines.

    Subclasses implement ``translation()`` against their provider and raise ``ProviderError``
    subclasses on failure. Callers use ``translate()``, which adds the per-call timeout, converts
    failures into an ``Outcome`` and builds the enriched ``TranslationResult``.

    Attributes:
        registered (ClassVar[dict[str, type[TransInterface]]]): Registered engine classes,
            keyed by their distinguished names.
    """

    registered: ClassVar[dict[str, type[TransInterface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        """Register the subclass under its distinguished name.

        Raises:
            TypeError: If the subclass does not implement fetch_engine_name().
            ValueError: If the name is already registered.
        """
        super().__init_subclass__(**kwargs)
        if not hasattr(cls, "fetch_engine_name") or not callable(cls.fetch_engine_name):
            msg = "Subclasses of TransInterface must implement the static method fetch_engine_name()."
            raise TypeError(msg)

        if not isinstance(cls.fetch_engine_name(), str) or cls.fetch_engine_name() == "":
            return  # Engines with empty names (test doubles) are not registered.

        if cls.fetch_engine_name() in cls.registered:
            msg: str = f"A translation engine with the name '{cls.fetch_engine_name()}' is already registered."
            raise ValueError(msg)

        cls.registered[cls.fetch_engine_name()] = cls

    def __init__(self) -> None:
        self._engine_attributes: EngineAttributes | None = None
        self.timeout: float = DEFAULT_PROVIDER_TIMEOUT
        self.enrichment: EnrichmentPipeline = EnrichmentPipeline()

    @property
    def engine_attributes(self) -> EngineAttributes:
        if self._engine_attributes is None:
            msg = "Engine attributes have not been set."
            raise RuntimeError(msg)
        return self._engine_attributes

    @engine_attributes.setter
    def engine_attributes(self, attributes: EngineAttributes) -> None:
        if self._engine_attributes is not None:
            msg = "Engine attributes can only be set once during initialization."
            raise RuntimeError(msg)
        self._engine_attributes = attributes

    @property
    def engine_name(self) -> str:
        """Provider tag reported in results."""
        return self.engine_attributes.name

    @property
    def tier(self) -> EngineTier:
        return self.engine_attributes.tier

    def is_rate_limit_error(self, err: Exception) -> bool:
        """Check if the given exception indicates rate limiting.

        Args:
            err (Exception): Exception raised during translation or detection.

        Returns:
            bool: True if the exception represents rate limiting.
        """
        return isinstance(err, ProviderRateLimitError)

    def supports_pair(self, src_lang: str, tgt_lang: str) -> bool:
        """Check whether the engine accepts the language pair.

        Engines without a restricted language list accept every pair.

        Args:
            src_lang (str): Resolved source language code.
            tgt_lang (str): Target language code.

        Returns:
            bool: True if the engine should be tried for this pair.
        """
        _ = src_lang, tgt_lang
        return True

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if the translation engine is available.

        Returns:
            bool: True if the translation engine is available, False otherwise.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Fetch the distinguished name of the translation engine.

        This method is called during class registration in __init_subclass__, so the
        implementation must be available at subclass definition time.

        Returns:
            str: The distinguished name of the translation engine.
        """
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config) -> None:
        """Initialize the translation engine with the given configuration.

        Args:
            config (Config): Application configuration.

        Raises:
            ProviderConfigurationError: If credentials or the client are unavailable.
        """
        raise NotImplementedError

    @abstractmethod
    async def detect_language(self, content: str, tgt_lang: str) -> Result:
        """Detect the language of the input text.

        Some engines have no dedicated detection API. They translate to a known target language
        and report the detected source language of that translation instead, which is why a
        target language must be given.

        Args:
            content (str): Text to analyze for language detection.
            tgt_lang (str): Target language code used for detection.

        Returns:
            Result: Detection result with detected_source_lang populated.

        Raises:
            ProviderError: If detection fails.
        """
        raise NotImplementedError

    @abstractmethod
    async def translation(
        self,
        content: str,
        tgt_lang: str,
        src_lang: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result:
        """Translate input text to the target language.

        Args:
            content (str): Text to be translated.
            tgt_lang (str): Target language code.
            src_lang (str | None): Source language code. If None, the provider detects it.
            context (Mapping[str, Any] | None): Caller context (engines may honor hints such as formality).

        Returns:
            Result: Translation result with translated text.

        Raises:
            UnsupportedLanguagePairError: If the specified language is not supported.
            ProviderQuotaExceededError: If the character quota has been exceeded.
            ProviderRateLimitError: If the request is rate-limited by the API.
            ProviderError: If translation fails for any other reason.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release the engine's resources."""
        raise NotImplementedError

    async def translate(
        self,
        text: str,
        src_lang: str,
        tgt_lang: str,
        context: Mapping[str, Any] | None = None,
    ) -> Outcome:
        """Translate a text and build the enriched result.

        Never raises ``ProviderError``: every engine failure, including a timeout or an empty
        answer, is returned as a failed Outcome.

        Args:
            text (str): Original text.
            src_lang (str): Source language code, or 'auto'.
            tgt_lang (str): Target language code.
            context (Mapping[str, Any] | None): Caller context.

        Returns:
            Outcome: The translation result or the engine error.
        """
        requested_source: str | None = None if src_lang.lower() == AUTO_LANGUAGE else src_lang
        try:
            raw: Result = await asyncio.wait_for(
                self.translation(text, tgt_lang, requested_source, context=context), timeout=self.timeout
            )
        except TimeoutError:
            msg = f"{self.engine_name} did not respond within {self.timeout} seconds"
            return Outcome.failure(ProviderTimeoutError(msg))
        except ProviderError as err:
            return Outcome.failure(err)
        except Exception as err:  # noqa: BLE001
            logger.error("Unexpected error in '%s' translation: %s", self.engine_name, err)
            msg = f"{self.engine_name} failed unexpectedly: {err}"
            return Outcome.failure(ProviderError(msg))

        if not isinstance(raw.text, str) or not isinstance(raw.detected_source_lang, str | None):
            msg = f"{self.engine_name} returned a malformed result: {raw!r}"
            return Outcome.failure(ProviderResponseError(msg))
        if not raw.text.strip():
            msg = f"{self.engine_name} returned an empty translation"
            return Outcome.failure(ProviderResponseError(msg))

        detected: str = (raw.detected_source_lang or src_lang).lower()
        if detected == UNDETERMINED_LANGUAGE:
            detected = src_lang.lower()
        sentiment, context_analysis = self.enrichment.enrich(text, context)
        return Outcome.success(
            TranslationResult(
                original_text=text,
                translated_text=raw.text,
                source_lang=detected,
                target_lang=tgt_lang,
                confidence=self.calculate_confidence(detected, src_lang),
                provider=self.engine_name,
                sentiment=sentiment,
                context=context_analysis,
            )
        )

    @staticmethod
    def calculate_confidence(detected: str, expected: str) -> TranslationConfidence:
        """High when the caller asked for detection or the provider agrees with the caller, else medium."""
        if expected.lower() == AUTO_LANGUAGE or detected.lower() == expected.lower():
            return "high"
        return "medium"

    def get_authentication_key(self) -> str:
        """Retrieve the authentication key from environment variables.

        The key is read from an environment variable named after the engine's distinguished name
        with the suffix "_API_OAUTH", e.g. "DEEPL_API_OAUTH" for the engine "deepl".

        Returns:
            str: The authentication key, or an empty string if the environment variable is not set.
        """
        return os.getenv(f"{self.fetch_engine_name().upper()}_API_OAUTH", "")
