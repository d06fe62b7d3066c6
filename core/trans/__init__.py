"""Translation engine management and interfaces.

This package provides the cascade orchestrator, the language detector and the pluggable
engine implementations (DeepL, Google Cloud Translation, Google Translate web).
"""

from core.trans.detector import LanguageDetector
from core.trans.interface import (
    AllProvidersFailedError,
    EmptyTextError,
    InvalidInputError,
    Outcome,
    ProviderError,
    Result,
    TextTooLongError,
    TransInterface,
    TranslationError,
)
from core.trans.manager import TransManager

__all__: list[str] = [
    "AllProvidersFailedError",
    "EmptyTextError",
    "InvalidInputError",
    "LanguageDetector",
    "Outcome",
    "ProviderError",
    "Result",
    "TextTooLongError",
    "TransInterface",
    "TransManager",
    "TranslationError",
]
