"""Configuration data models for the translation engine.

Each data class maps one INI section; attribute names match the INI keys so the loader can
fill them in generically.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Cache",
    "Config",
    "General",
    "Provider",
    "Translation",
]

DEFAULT_PREMIUM_LANGUAGES: tuple[str, ...] = ("en", "de", "fr", "es", "pt", "it", "nl", "pl", "ru", "ja", "zh")


@dataclass
class General:
    DEBUG: bool = False
    SCRIPT_NAME: str = ""
    LOG_FILE: str = ""
    LOG_LEVEL: str = "INFO"


@dataclass
class Translation:
    ENGINE: list[str] = field(default_factory=lambda: ["deepl", "google_cloud", "google"])
    DEFAULT_SOURCE_LANGUAGE: str = "auto"
    DETECTION_TARGET_LANGUAGE: str = "en"
    MAX_TEXT_LENGTH: int = 5000
    BATCH_CONCURRENCY: int = 0
    PREMIUM_LANGUAGES: list[str] = field(default_factory=lambda: list(DEFAULT_PREMIUM_LANGUAGES))
    GOOGLE_SUFFIX: str = "com"


@dataclass
class Cache:
    ENABLED: bool = True
    TTL_DAYS: float = 7.0
    MAX_ENTRIES: int = 1000
    SWEEP_BATCH: int = 200

    @property
    def ttl_seconds(self) -> float:
        return self.TTL_DAYS * 24 * 60 * 60


@dataclass
class Provider:
    TIMEOUT: float = 15.0
    DETECTION_TIMEOUT: float = 5.0


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    CACHE: Cache = field(default_factory=Cache)
    PROVIDER: Provider = field(default_factory=Provider)
