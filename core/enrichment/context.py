from __future__ import annotations

from typing import TYPE_CHECKING

from models.language_patterns import CULTURAL_MARKERS, DOMAIN_KEYWORDS, FORMAL_PATTERNS, SLANG_PATTERNS
from models.translation_models import ContextAnalysis, FormalityLevel, TextDomain
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping
    from typing import Any

__all__: list[str] = ["ContextAnalyzer"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ContextAnalyzer:
    """Derives formality, domain, slang level and cultural markers from a text."""

    def analyze(self, text: str, additional_context: Mapping[str, Any] | None = None) -> ContextAnalysis:
        """Analyze the context of a text.

        Never raises; any internal failure yields the neutral analysis carrying the caller context.

        Args:
            text (str): Original (untranslated) text.
            additional_context (Mapping[str, Any] | None): Caller context, echoed back unchanged.

        Returns:
            ContextAnalysis: The analysis.
        """
        try:
            slang_hits: int = self._count_hits(text, SLANG_PATTERNS)
            formal_hits: int = self._count_hits(text, FORMAL_PATTERNS)
            return ContextAnalysis(
                formality=self._formality(formal_hits, slang_hits),
                domain=self._domain(text),
                cultural_markers=self._cultural_markers(text),
                slang_level=self._slang_level(text, slang_hits),
                additional_context=dict(additional_context or {}),
            )
        except Exception as err:  # noqa: BLE001
            logger.warning("Context analysis failed: %s", err)
            return ContextAnalysis.neutral(additional_context)

    @staticmethod
    def _count_hits(text: str, patterns: Mapping[str, tuple[str, ...]]) -> int:
        return sum(StringUtils.count_phrase_hits(text, phrases) for phrases in patterns.values())

    @staticmethod
    def _formality(formal_hits: int, slang_hits: int) -> FormalityLevel:
        if formal_hits > slang_hits:
            return "formal"
        if slang_hits > formal_hits:
            return "informal"
        return "neutral"

    @staticmethod
    def _domain(text: str) -> TextDomain:
        for domain, keywords in DOMAIN_KEYWORDS.items():
            if StringUtils.count_phrase_hits(text, keywords):
                return domain  # type: ignore[return-value]
        return "general"

    @staticmethod
    def _cultural_markers(text: str) -> tuple[str, ...]:
        return tuple(
            tag
            for tag, (flag, keywords) in CULTURAL_MARKERS.items()
            if flag in text or StringUtils.count_phrase_hits(text, keywords)
        )

    @staticmethod
    def _slang_level(text: str, slang_hits: int) -> float:
        words: int = StringUtils.count_words(text)
        if words == 0:
            return 0.0
        return min(1.0, slang_hits / words)
