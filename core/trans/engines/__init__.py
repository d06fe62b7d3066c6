"""Translation engine implementations.

Importing this package registers every engine with TransInterface.

Modules:
- DeeplTranslation: premium engine (DeepL API).
- GoogleCloudTranslation: general engine (Google Cloud Translation API v2).
- GoogleTranslation: fallback engine (Google Translate web endpoint through AsyncTranslator).
"""

from core.trans.engines.async_google_translate import (
    AsyncTranslator,
    GoogleWebError,
    HTTPConnectionError,
    HTTPError,
    HTTPTimeoutError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
    ResponseFormatError,
    TextResult,
)
from core.trans.engines.const_google import DEFAULT_SERVICE_URLS, LANGUAGES
from core.trans.engines.trans_deepl import DeeplTranslation
from core.trans.engines.trans_google import GoogleTranslation
from core.trans.engines.trans_google_cloud import GoogleCloudTranslation

__all__: list[str] = [
    "DEFAULT_SERVICE_URLS",
    "LANGUAGES",
    "AsyncTranslator",
    "DeeplTranslation",
    "GoogleCloudTranslation",
    "GoogleTranslation",
    "GoogleWebError",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "InvalidLanguageCodeError",
    "ResponseFormatError",
    "TextResult",
]
