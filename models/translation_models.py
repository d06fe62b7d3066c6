"""Models for translation requests and results.

Defines the immutable request passed to the orchestrator, the result it produces, and the
sentiment/context analyses every result carries.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Final, Literal

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__: list[str] = [
    "AUTO_LANGUAGE",
    "IDENTITY_PROVIDER",
    "UNDETERMINED_LANGUAGE",
    "ContextAnalysis",
    "FormalityLevel",
    "SentimentAnalysis",
    "SentimentType",
    "TextDomain",
    "TranslationConfidence",
    "TranslationMetadata",
    "TranslationRequest",
    "TranslationResult",
]

AUTO_LANGUAGE: Final[str] = "auto"
IDENTITY_PROVIDER: Final[str] = "none"
FAST_TRANSLATION_SEC: Final[float] = 0.5
UNDETERMINED_LANGUAGE: Final[str] = "und"

type TranslationConfidence = Literal["high", "medium", "low"]
type SentimentType = Literal["positive", "neutral", "negative"]
type FormalityLevel = Literal["formal", "neutral", "informal"]
type TextDomain = Literal["business", "technical", "casual", "general"]


@dataclass(frozen=True)
class TranslationRequest:
    """A single translation request.

    Attributes:
        text (str): Source text.
        tgt_lang (str): Target language code.
        src_lang (str): Source language code, or 'auto' to detect it.
        context (Mapping[str, Any]): Free-form caller context (e.g. {"formality": "more"}).
    """

    text: str
    tgt_lang: str
    src_lang: str = AUTO_LANGUAGE
    context: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_auto(self) -> bool:
        return self.src_lang.lower() == AUTO_LANGUAGE


@dataclass(frozen=True)
class SentimentAnalysis:
    """Sentiment of the original text.

    Attributes:
        sentiment (SentimentType): Category.
        score (float): Normalized score in [-1.0, 1.0].
        confidence (float): Confidence percentage in [0.0, 100.0].
    """

    sentiment: SentimentType = "neutral"
    score: float = 0.0
    confidence: float = 0.0

    @classmethod
    def neutral(cls) -> SentimentAnalysis:
        return cls()


@dataclass(frozen=True)
class ContextAnalysis:
    """Contextual metadata about the original text.

    Attributes:
        formality (FormalityLevel): Detected register.
        domain (TextDomain): Detected subject area.
        cultural_markers (tuple[str, ...]): Cultural association tags such as 'uk_culture'.
        slang_level (float): Ratio of slang matches to words, in [0.0, 1.0].
        additional_context (Mapping[str, Any]): Caller context echoed back unchanged.
    """

    formality: FormalityLevel = "neutral"
    domain: TextDomain = "general"
    cultural_markers: tuple[str, ...] = ()
    slang_level: float = 0.0
    additional_context: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def neutral(cls, additional_context: Mapping[str, Any] | None = None) -> ContextAnalysis:
        return cls(additional_context=dict(additional_context or {}))


@dataclass
class TranslationMetadata:
    """Timing information attached to a result.

    ``processing_time`` is the only field of a result that changes after construction: it is
    filled in exactly once by the orchestrator when the total elapsed time is known.

    Attributes:
        timestamp (datetime): Wall-clock time at which the result was produced.
        processing_time (float | None): Total processing time in seconds, None until recorded.
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
    processing_time: float | None = None

    def record_processing_time(self, seconds: float) -> None:
        """Record the total processing time.

        Raises:
            RuntimeError: If the processing time was already recorded.
        """
        if self.processing_time is not None:
            msg = "Processing time can only be recorded once."
            raise RuntimeError(msg)
        self.processing_time = max(0.0, seconds)

    @property
    def processing_time_ms(self) -> int | None:
        if self.processing_time is None:
            return None
        return round(self.processing_time * 1000)

    @property
    def is_fast(self) -> bool:
        return self.processing_time is not None and self.processing_time < FAST_TRANSLATION_SEC


@dataclass(frozen=True)
class TranslationResult:
    """The unit of value produced by the orchestrator and stored in the cache.

    Attributes:
        original_text (str): Text as submitted.
        translated_text (str): Translation. Never empty.
        source_lang (str): Resolved source language code.
        target_lang (str): Target language code.
        confidence (TranslationConfidence): Coarse confidence level.
        provider (str): Tag of the engine that produced the translation, 'none' for identity results.
        sentiment (SentimentAnalysis): Sentiment of the original text.
        context (ContextAnalysis): Context of the original text.
        metadata (TranslationMetadata): Timestamp and processing time.
    """

    original_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    confidence: TranslationConfidence
    provider: str
    sentiment: SentimentAnalysis = field(default_factory=SentimentAnalysis)
    context: ContextAnalysis = field(default_factory=ContextAnalysis)
    metadata: TranslationMetadata = field(default_factory=TranslationMetadata)

    @property
    def is_identity(self) -> bool:
        return self.provider == IDENTITY_PROVIDER

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        data: dict[str, Any] = asdict(self)
        data["context"]["cultural_markers"] = list(self.context.cultural_markers)
        data["context"]["additional_context"] = dict(self.context.additional_context)
        data["metadata"] = {
            "timestamp": self.metadata.timestamp.isoformat(),
            "processing_time_ms": self.metadata.processing_time_ms,
        }
        return data
