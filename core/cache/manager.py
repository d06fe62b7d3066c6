"""Translation cache manager.

Keeps successful translation results in memory for a fixed time to live, keyed by the
fingerprint of (text, requested source language, target language).
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from models.cache_models import CacheEntry, CacheStatistics
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from models.config_models import Config
    from models.translation_models import TranslationResult

__all__: list[str] = ["TranslationCacheManager"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class TranslationCacheManager:
    """In-memory, TTL-bounded translation cache.

    Entries expire ``CACHE.TTL_DAYS`` after insertion. When the store grows beyond
    ``CACHE.MAX_ENTRIES``, up to ``CACHE.SWEEP_BATCH`` expired entries are swept; if it is still
    too large after that, the oldest insertions are dropped until it fits. The cache is accessed
    only from the event loop and never raises on lookup or store.

    Attributes:
        config (Config): Application configuration.
    """

    def __init__(self, config: Config, *, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache manager.

        Args:
            config (Config): Application configuration.
            clock (Callable[[], float]): Monotonic clock in seconds, replaceable for tests.
        """
        self.config: Config = config
        self._clock: Callable[[], float] = clock
        # Insertion order is kept by the dict; overwrites move the key to the end.
        self._entries: dict[str, CacheEntry] = {}
        self._hits: int = 0
        self._misses: int = 0
        logger.debug("TranslationCacheManager instance created")

    @property
    def enabled(self) -> bool:
        return self.config.CACHE.ENABLED

    @property
    def ttl(self) -> float:
        return self.config.CACHE.ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @staticmethod
    def make_key(source_text: str, source_lang: str, target_lang: str) -> str:
        """Fingerprint a request (see ``StringUtils.generate_translation_hash_key``)."""
        return StringUtils.generate_translation_hash_key(source_text, source_lang, target_lang)

    def get(self, cache_key: str) -> TranslationResult | None:
        """Look up a cached translation result.

        An expired entry is evicted as a side effect and reported as a miss.

        Args:
            cache_key (str): Request fingerprint.

        Returns:
            TranslationResult | None: The cached result, or None on a miss.
        """
        if not self.enabled:
            return None

        entry: CacheEntry | None = self._entries.get(cache_key)
        if entry is None:
            self._misses += 1
            logger.debug("Cache miss for key: %s", cache_key[:16])
            return None

        if entry.is_expired(self._clock()):
            del self._entries[cache_key]
            self._misses += 1
            logger.debug("Cache entry expired for key: %s", cache_key[:16])
            return None

        self._hits += 1
        logger.debug("Cache hit for key: %s", cache_key[:16])
        return entry.result

    def put(self, cache_key: str, result: TranslationResult) -> None:
        """Store a translation result, overwriting any existing entry for the key.

        Args:
            cache_key (str): Request fingerprint.
            result (TranslationResult): Result to cache.
        """
        if not self.enabled:
            return

        self._entries.pop(cache_key, None)
        self._entries[cache_key] = CacheEntry(result=result, created_at=self._clock(), ttl=self.ttl)
        logger.debug("Translation cached for key: %s", cache_key[:16])

        if len(self._entries) > self.config.CACHE.MAX_ENTRIES:
            self._enforce_capacity_limit()

    def _enforce_capacity_limit(self) -> None:
        now: float = self._clock()
        expired: list[str] = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired[: self.config.CACHE.SWEEP_BATCH]:
            del self._entries[key]
        swept: int = min(len(expired), self.config.CACHE.SWEEP_BATCH)

        overflow: int = len(self._entries) - self.config.CACHE.MAX_ENTRIES
        if overflow > 0:
            for key in list(self._entries)[:overflow]:
                del self._entries[key]
        logger.info("Cache sweep removed %d expired and %d oldest entries", swept, max(overflow, 0))

    def clear(self) -> None:
        """Remove every entry and reset the hit/miss counters."""
        count: int = len(self._entries)
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Translation cache cleared (%d entries)", count)

    def statistics(self) -> CacheStatistics:
        """Return a snapshot of the cache usage."""
        now: float = self._clock()
        expired: int = sum(1 for entry in self._entries.values() if entry.is_expired(now))
        return CacheStatistics(
            total_entries=len(self._entries),
            valid_entries=len(self._entries) - expired,
            expired_entries=expired,
            hits=self._hits,
            misses=self._misses,
        )
