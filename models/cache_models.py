"""Models for translation cache data.

Defines the cache entry wrapping a translation result and the cache statistics snapshot.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from models.translation_models import TranslationResult

__all__: list[str] = [
    "CacheEntry",
    "CacheStatistics",
]


@dataclass(frozen=True)
class CacheEntry:
    """Translation cache entry data.

    Attributes:
        result (TranslationResult): Cached translation result.
        created_at (float): Insertion time on the cache clock (monotonic seconds).
        ttl (float): Time to live in seconds.
    """

    result: TranslationResult
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Check whether the entry has outlived its TTL at the given clock reading."""
        return now - self.created_at > self.ttl


@dataclass(frozen=True)
class CacheStatistics:
    """Cache usage statistics.

    Attributes:
        total_entries (int): Number of stored entries, expired ones included.
        valid_entries (int): Entries still within their TTL.
        expired_entries (int): Entries past their TTL but not yet evicted.
        hits (int): Lookups answered from the cache.
        misses (int): Lookups that found nothing usable.
    """

    total_entries: int = 0
    valid_entries: int = 0
    expired_entries: int = 0
    hits: int = 0
    misses: int = 0

    @property
    def hit_ratio(self) -> float:
        lookups: int = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = asdict(self)
        data["hit_ratio"] = round(self.hit_ratio, 4)
        return data
