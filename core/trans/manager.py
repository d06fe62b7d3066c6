from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.cache.manager import TranslationCacheManager
from core.enrichment.pipeline import EnrichmentPipeline
from core.trans.detector import LanguageDetector
from core.trans.engines import (
    DeeplTranslation,  # noqa: F401
    GoogleCloudTranslation,  # noqa: F401
    GoogleTranslation,  # noqa: F401
)
from core.trans.interface import (
    TIER_ORDER,
    AllProvidersFailedError,
    EmptyTextError,
    InvalidInputError,
    Outcome,
    ProviderError,
    TextTooLongError,
    TransInterface,
    TranslationError,
    UnsupportedLanguagePairError,
)
from models.translation_models import AUTO_LANGUAGE, IDENTITY_PROVIDER, TranslationRequest, TranslationResult
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Mapping, Sequence

    from models.cache_models import CacheStatistics
    from models.config_models import Config


__all__: list[str] = ["TransManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ADAPTIVE_LIMITER_ENABLED: bool = True
ADAPTIVE_LIMITER_BASE_COOLDOWN_SEC: float = 1.0
ADAPTIVE_LIMITER_MAX_COOLDOWN_SEC: float = 30.0
ADAPTIVE_LIMITER_RESET_SEC: float = 60.0
ADAPTIVE_LIMITER_LOG_INTERVAL_SEC: float = 5.0


@dataclass
class RateLimitState:
    """Adaptive cooldown bookkeeping for one engine."""

    error_count: int = 0
    last_error: float = 0.0
    until: float = 0.0
    last_log: float = 0.0


class TransManager:
    """Cascade orchestrator.

    Turns a TranslationRequest into a TranslationResult: validate, look up the cache, resolve
    the source language, short-circuit identical languages, walk the engine cascade
    (premium, general, fallback) until one succeeds, then cache the result.

    Attributes:
        config (Config): Application configuration.
        cache_manager (TranslationCacheManager): Result cache.
        detector (LanguageDetector): Source language detector.
        enrichment (EnrichmentPipeline): Enrichment used for identity results.
    """

    def __init__(
        self,
        config: Config,
        cache_manager: TranslationCacheManager | None = None,
        detector: LanguageDetector | None = None,
        enrichment: EnrichmentPipeline | None = None,
    ) -> None:
        self.config: Config = config
        self.cache_manager: TranslationCacheManager = cache_manager or TranslationCacheManager(config)
        self.detector: LanguageDetector = detector or LanguageDetector(config)
        self.enrichment: EnrichmentPipeline = enrichment or EnrichmentPipeline()
        # Engine name -> instance, kept in cascade order.
        self._trans_instance: dict[str, TransInterface] = {}
        self._rate_limits: dict[str, RateLimitState] = {}
        logger.debug("Registered translation engines: %s", TransInterface.registered)

    async def initialize(self) -> None:
        """Instantiate and initialize the configured engines.

        Engines that cannot be initialized (typically missing credentials) are logged and left out
        of the cascade. The fallback engine, when loaded, also serves language detection.
        """
        logger.info("TransManager initialization started")

        for _name in self.config.TRANSLATION.ENGINE:
            if _name in self._trans_instance:
                continue
            _cls: type[TransInterface] | None = TransInterface.registered.get(_name)
            if _cls is None:
                logger.critical("Translation class not found: '%s'", _name)
                continue
            _instance: TransInterface = _cls()
            try:
                _instance.initialize(self.config)
            except TranslationError as err:
                logger.warning("Translation engine '%s' not loaded: %s", _name, err)
                continue
            except RuntimeError as err:
                logger.critical("RuntimeError in '%s' translation setup: %s", _name, err)
                continue
            self.add_engine(_name, _instance)
            logger.info("Translation engine initialized: '%s' (%s)", _name, _instance.tier)
            logger.debug("Engine attributes: %s", _instance.engine_attributes)

        if self.detector.engine is None:
            self.detector.engine = self._select_detection_engine()

        if not self._trans_instance:
            logger.error("No translation engine could be loaded")

    def add_engine(self, name: str, engine: TransInterface) -> None:
        """Insert an initialized engine into the cascade; engines of one tier keep insertion order."""
        engines: list[tuple[str, TransInterface]] = [*self._trans_instance.items(), (name, engine)]
        engines.sort(key=lambda item: TIER_ORDER[item[1].tier])
        self._trans_instance = dict(engines)

    def _select_detection_engine(self) -> TransInterface | None:
        engines: list[TransInterface] = list(self._trans_instance.values())
        for engine in engines:
            if engine.tier == "fallback":
                return engine
        return engines[0] if engines else None

    def engine_names(self) -> list[str]:
        """Names of the loaded engines, in cascade order."""
        return list(self._trans_instance)

    def cascade(self, src_lang: str, tgt_lang: str) -> list[tuple[str, TransInterface]]:
        """Engines eligible for a language pair, in the order they will be tried."""
        eligible: list[tuple[str, TransInterface]] = []
        for name, engine in self._trans_instance.items():
            if not engine.is_available:
                logger.debug("Skipping unavailable engine '%s'", name)
                continue
            if self._rate_limit_blocked(name):
                continue
            if not engine.supports_pair(src_lang, tgt_lang):
                logger.debug("Engine '%s' does not support %s > %s", name, src_lang, tgt_lang)
                continue
            eligible.append((name, engine))
        return eligible

    def _rate_limit_blocked(self, name: str) -> bool:
        """Check if an engine is cooling down after a rate limit."""
        if not ADAPTIVE_LIMITER_ENABLED:
            return False

        state: RateLimitState | None = self._rate_limits.get(name)
        if state is None:
            return False

        now: float = time.monotonic()
        if now < state.until:
            if now - state.last_log >= ADAPTIVE_LIMITER_LOG_INTERVAL_SEC:
                logger.warning("Engine '%s' temporarily throttled (%.1f sec remaining).", name, state.until - now)
                state.last_log = now
            return True
        return False

    def _register_rate_limit(self, name: str) -> None:
        """Register a rate-limit event and extend the engine's cooldown exponentially."""
        if not ADAPTIVE_LIMITER_ENABLED:
            return

        state: RateLimitState = self._rate_limits.setdefault(name, RateLimitState())
        now: float = time.monotonic()
        if now - state.last_error > ADAPTIVE_LIMITER_RESET_SEC:
            state.error_count = 0

        state.error_count += 1
        state.last_error = now

        backoff: float = ADAPTIVE_LIMITER_BASE_COOLDOWN_SEC * (2 ** (state.error_count - 1))
        backoff = min(backoff, ADAPTIVE_LIMITER_MAX_COOLDOWN_SEC)

        state.until = max(state.until, now + backoff)

    def _handle_rate_limit_error(self, name: str, engine: TransInterface, err: ProviderError) -> bool:
        if engine.is_rate_limit_error(err):
            self._register_rate_limit(name)
            logger.warning("Translation rate limit detected on '%s': %s", name, err)
            return True
        return False

    def validate(self, request: TranslationRequest) -> None:
        """Reject requests that can never succeed.

        Raises:
            EmptyTextError: If the text is empty or whitespace only.
            TextTooLongError: If the text exceeds TRANSLATION.MAX_TEXT_LENGTH.
            InvalidInputError: If no target language is given.
        """
        if not request.text or not request.text.strip():
            msg = "Text cannot be empty"
            raise EmptyTextError(msg)
        max_length: int = self.config.TRANSLATION.MAX_TEXT_LENGTH
        if len(request.text) > max_length:
            raise TextTooLongError(len(request.text), max_length)
        if not request.tgt_lang or not request.tgt_lang.strip():
            msg = "Target language cannot be empty"
            raise InvalidInputError(msg)

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate a single request.

        Args:
            request (TranslationRequest): The request.

        Returns:
            TranslationResult: The (possibly cached) result.

        Raises:
            InvalidInputError: If the request fails validation.
            AllProvidersFailedError: If every eligible engine failed.
        """
        started: float = time.perf_counter()
        self.validate(request)

        cache_key: str = self.cache_manager.make_key(request.text, request.src_lang, request.tgt_lang)
        if (cached := self.cache_manager.get(cache_key)) is not None:
            logger.debug("Translation cache hit: '%s'", cached.translated_text[:50])
            return cached

        src_lang: str = await self.detector.detect(request.text) if request.is_auto else request.src_lang.lower()
        tgt_lang: str = request.tgt_lang.lower()

        result: TranslationResult
        if src_lang == tgt_lang:
            logger.debug("Source and target language are both '%s', skipping translation", tgt_lang)
            result = self._identity_result(request, src_lang)
        else:
            result = await self._run_cascade(request, src_lang)
            self.cache_manager.put(cache_key, result)

        result.metadata.record_processing_time(time.perf_counter() - started)
        self._log_analytics(result)
        return result

    def _identity_result(self, request: TranslationRequest, lang: str) -> TranslationResult:
        sentiment, context = self.enrichment.enrich(request.text, request.context)
        return TranslationResult(
            original_text=request.text,
            translated_text=request.text,
            source_lang=lang,
            target_lang=request.tgt_lang,
            confidence="high",
            provider=IDENTITY_PROVIDER,
            sentiment=sentiment,
            context=context,
        )

    async def _run_cascade(self, request: TranslationRequest, src_lang: str) -> TranslationResult:
        failures: dict[str, ProviderError] = {}
        for name, engine in self.cascade(src_lang, request.tgt_lang):
            logger.debug("Trying engine '%s' (%s > %s)", name, src_lang, request.tgt_lang)
            outcome: Outcome = await engine.translate(request.text, src_lang, request.tgt_lang, request.context)
            if outcome.result is not None:
                return outcome.result

            err: ProviderError = outcome.error  # type: ignore[assignment]
            failures[name] = err
            if self._handle_rate_limit_error(name, engine, err):
                continue
            if isinstance(err, UnsupportedLanguagePairError):
                logger.info("Engine '%s' rejected the language pair: %s", name, err)
            else:
                logger.warning("Engine '%s' failed: %s", name, err)

        error = AllProvidersFailedError(failures)
        logger.error("%s", error)
        raise error

    async def translate_text(
        self,
        text: str,
        tgt_lang: str,
        src_lang: str = AUTO_LANGUAGE,
        context: Mapping[str, Any] | None = None,
    ) -> TranslationResult:
        """Convenience wrapper building the TranslationRequest."""
        return await self.translate(
            TranslationRequest(text=text, tgt_lang=tgt_lang, src_lang=src_lang, context=dict(context or {}))
        )

    async def translate_batch(
        self,
        texts: Iterable[str],
        tgt_lang: str,
        src_lang: str = AUTO_LANGUAGE,
        context: Mapping[str, Any] | None = None,
    ) -> list[TranslationResult]:
        """Translate several texts with the same language pair, preserving input order."""
        requests: list[TranslationRequest] = [
            TranslationRequest(text=text, tgt_lang=tgt_lang, src_lang=src_lang, context=dict(context or {}))
            for text in texts
        ]
        return await self.translate_requests(requests)

    async def translate_requests(self, requests: Sequence[TranslationRequest]) -> list[TranslationResult]:
        """Translate requests concurrently and return the results in input order.

        ``TRANSLATION.BATCH_CONCURRENCY`` > 0 bounds the number of concurrent orchestrations.
        The first failure fails the whole batch; the remaining requests are cancelled.

        Raises:
            TranslationError: The first error raised by any request.
        """
        limit: int = self.config.TRANSLATION.BATCH_CONCURRENCY
        semaphore: asyncio.Semaphore | None = asyncio.Semaphore(limit) if limit > 0 else None

        async def _run(request: TranslationRequest) -> TranslationResult:
            if semaphore is None:
                return await self.translate(request)
            async with semaphore:
                return await self.translate(request)

        tasks: list[asyncio.Task[TranslationResult]] = [asyncio.create_task(_run(request)) for request in requests]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def clear_cache(self) -> None:
        self.cache_manager.clear()

    def cache_statistics(self) -> CacheStatistics:
        return self.cache_manager.statistics()

    def _log_analytics(self, result: TranslationResult) -> None:
        logger.info(
            "Translation completed: %s > %s via %s (confidence: %s, %d chars, %s ms)",
            result.source_lang,
            result.target_lang,
            result.provider,
            result.confidence,
            len(result.original_text),
            result.metadata.processing_time_ms,
        )

    async def shutdown_engines(self) -> None:
        """Shut down all loaded translation engines."""
        logger.info("Class '%s' termination process started.", self.__class__.__name__)
        for _inst in self._trans_instance.values():
            await _inst.close()
        logger.info("Class '%s' termination process completed.", self.__class__.__name__)
