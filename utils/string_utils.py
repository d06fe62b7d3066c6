from __future__ import annotations

import hashlib
import re
import unicodedata
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from re import Pattern

__all__: list[str] = ["StringUtils"]


@lru_cache(maxsize=512)
def _phrase_pattern(phrase: str) -> Pattern[str]:
    # Word boundaries that also work for phrases with apostrophes or spaces ("ain't", "sin embargo").
    return re.compile(rf"(?<!\w){re.escape(phrase.lower())}(?!\w)")


class StringUtils:
    """Utility class for string handling shared by the cache, the detector and the analyzers."""

    @staticmethod
    def ensure_str(value: str | None) -> str:
        """Return the value as a string, or an empty string if None.

        Whitespace is preserved; callers decide whether it is significant.
        """
        if not isinstance(value, str):
            value = str(value) if value is not None else ""
        return value

    @staticmethod
    def compress_blanks(value: str) -> str:
        """Collapse runs of whitespace into single spaces and trim both ends."""
        return " ".join(StringUtils.ensure_str(value).split())

    @staticmethod
    def normalize_text(text: str) -> str:
        """Normalize text using Unicode NFC normalization."""
        return unicodedata.normalize("NFC", text)

    @staticmethod
    def generate_translation_hash_key(source_text: str, source_lang: str, target_lang: str) -> str:
        """Build the cache fingerprint for a translation request.

        The same text and language pair always produce the same key. Language codes are
        compared case-insensitively, the text after NFC normalization.

        Args:
            source_text (str): Text to be translated.
            source_lang (str): Requested source language code (may be 'auto').
            target_lang (str): Target language code.

        Returns:
            str: Hex SHA-256 digest.
        """
        return StringUtils.generate_hash_key(
            StringUtils.normalize_text(source_text), source_lang.lower(), target_lang.lower()
        )

    @staticmethod
    def generate_hash_key(*parts: str) -> str:
        """Generate a SHA-256 hash key from '|'-joined parts."""
        key_data: str = "|".join(parts)
        return hashlib.sha256(key_data.encode("utf-8")).hexdigest()

    @staticmethod
    def count_words(text: str) -> int:
        """Count whitespace-separated words."""
        return len(StringUtils.ensure_str(text).split())

    @staticmethod
    def count_phrase_hits(text: str, phrases: Iterable[str]) -> int:
        """Count how many distinct phrases occur in the text.

        Matching is case-insensitive and respects word boundaries, so 'sup' does not match
        inside 'super'.

        Args:
            text (str): Text to search.
            phrases (Iterable[str]): Phrases to look for.

        Returns:
            int: Number of phrases found at least once.
        """
        lowered: str = StringUtils.ensure_str(text).lower()
        if not lowered:
            return 0
        return sum(1 for phrase in phrases if _phrase_pattern(phrase).search(lowered))

    @staticmethod
    def contains_phrase(text: str, phrase: str) -> bool:
        """Check whether a single phrase occurs in the text (see ``count_phrase_hits``)."""
        return StringUtils.count_phrase_hits(text, (phrase,)) > 0
