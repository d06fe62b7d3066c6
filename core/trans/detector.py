"""Two-stage source language detection.

A cheap lexical pass over curated phrase lists runs first; only when it is inconclusive is a
translation engine asked, through a throwaway translation into a fixed target language.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Final

from core.trans.interface import TranslationError
from models.language_patterns import DETECTION_LANGUAGES, FORMAL_PATTERNS, SLANG_PATTERNS
from models.translation_models import AUTO_LANGUAGE, UNDETERMINED_LANGUAGE
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from core.trans.interface import Result, TransInterface
    from models.config_models import Config

__all__: list[str] = ["LanguageDetector"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MIN_PATTERN_HITS: Final[int] = 2


class LanguageDetector:
    """Resolves the 'auto' source language of a request.

    Attributes:
        config (Config): Application configuration.
        engine (TransInterface | None): Engine used for provider-based detection. None disables
            the second stage.
    """

    def __init__(self, config: Config, engine: TransInterface | None = None) -> None:
        self.config: Config = config
        self.engine: TransInterface | None = engine
        self._phrases: dict[str, tuple[str, ...]] = {
            lang: SLANG_PATTERNS.get(lang, ()) + FORMAL_PATTERNS.get(lang, ()) for lang in DETECTION_LANGUAGES
        }

    @property
    def default_language(self) -> str:
        return self.config.TRANSLATION.DEFAULT_SOURCE_LANGUAGE.lower()

    def detect_by_pattern(self, text: str) -> str | None:
        """Lexical stage.

        Returns:
            str | None: The first language, in priority order, with at least two distinct phrase
                hits, or None.
        """
        for lang, phrases in self._phrases.items():
            if StringUtils.count_phrase_hits(text, phrases) >= MIN_PATTERN_HITS:
                logger.debug("Language detected by pattern: '%s'", lang)
                return lang
        return None

    async def detect(self, text: str) -> str:
        """Detect the language of a text.

        Never raises: provider failures, timeouts and undetermined answers resolve to
        ``TRANSLATION.DEFAULT_SOURCE_LANGUAGE``.

        Args:
            text (str): Text to analyze.

        Returns:
            str: Lower-case language code (or the configured default, possibly 'auto').
        """
        if (lang := self.detect_by_pattern(text)) is not None:
            return lang

        if self.engine is None or not self.engine.is_available:
            logger.debug("No detection engine available, using default '%s'", self.default_language)
            return self.default_language

        try:
            result: Result = await asyncio.wait_for(
                self.engine.detect_language(text, self.config.TRANSLATION.DETECTION_TARGET_LANGUAGE),
                timeout=self.config.PROVIDER.DETECTION_TIMEOUT,
            )
        except TimeoutError:
            logger.warning("Language detection timed out, using default '%s'", self.default_language)
            return self.default_language
        except TranslationError as err:
            logger.warning("Language detection failed: %s", err)
            return self.default_language
        except Exception as err:  # noqa: BLE001
            logger.error("Unexpected error during language detection: %s", err)
            return self.default_language

        detected: str = StringUtils.ensure_str(result.detected_source_lang).strip().lower()
        if detected in ("", UNDETERMINED_LANGUAGE, AUTO_LANGUAGE):
            logger.info("Unverifiable content. Using default language '%s'.", self.default_language)
            return self.default_language

        logger.debug("Language detected by '%s': '%s'", self.engine.engine_name, detected)
        return detected
