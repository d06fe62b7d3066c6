from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, ClassVar, Final

from deepl import DeepLClient, Language, TextResult
from deepl.exceptions import (
    AuthorizationException,
    ConnectionException,
    DeepLException,
    QuotaExceededException,
    TooManyRequestsException,
)

from core.trans.interface import (
    EngineAttributes,
    ProviderConfigurationError,
    ProviderError,
    ProviderQuotaExceededError,
    ProviderRateLimitError,
    ProviderResponseError,
    Result,
    TransInterface,
    UnsupportedLanguagePairError,
)
from models.config_models import DEFAULT_PREMIUM_LANGUAGES
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.config_models import Config


__all__: list[str] = ["DeeplTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Regional target variants DeepL requires instead of the bare code.
_PREFERRED_TARGETS: Final[dict[str, str]] = {"en": "EN-US", "pt": "PT-BR", "zh": "ZH"}
# Caller formality hints accepted by DeepL. Plain "more"/"less" are softened to the prefer_
# variants so languages without formality support do not reject the request.
_FORMALITY_OPTIONS: Final[dict[str, str]] = {
    "more": "prefer_more",
    "less": "prefer_less",
    "formal": "prefer_more",
    "informal": "prefer_less",
    "prefer_more": "prefer_more",
    "prefer_less": "prefer_less",
    "default": "default",
}


class DeeplTranslation(TransInterface):
    """Premium engine backed by the DeepL API.

    Only language pairs whose both ends are in ``TRANSLATION.PREMIUM_LANGUAGES`` are accepted.
    Quota exhaustion disables the engine for the rest of the process.
    """

    _source_codes: ClassVar[dict[str, str]] = {}  # Mapping of source language codes to DeepL's format
    _target_codes: ClassVar[dict[str, str]] = {}  # Mapping of target language codes to DeepL's format

    def __init__(self) -> None:
        super().__init__()
        self.__inst: DeepLClient | None = None
        self.__available: bool = False
        self._premium_languages: frozenset[str] = frozenset(DEFAULT_PREMIUM_LANGUAGES)
        self._generate_langcode_mappings()

    def _generate_langcode_mappings(self) -> None:
        """Populate the source/target code tables from the constants of ``deepl.Language``.

        Regional variants ('en-US') collapse onto their base code ('en'); the target table then
        takes the preferred regional variant where DeepL requires one.
        """
        for code in self._get_language_constants(Language).values():
            base_code: str = code.split("-")[0].lower()
            DeeplTranslation._source_codes[base_code] = base_code.upper()
            DeeplTranslation._target_codes.setdefault(base_code, base_code.upper())

        DeeplTranslation._target_codes.update(_PREFERRED_TARGETS)
        for zh_variant in ("zh-cn", "zh-tw"):
            DeeplTranslation._source_codes[zh_variant] = "ZH"
            DeeplTranslation._target_codes[zh_variant] = "ZH"

        logger.debug("Language code mapping generated for DeepL.")

    @staticmethod
    def _get_language_constants(cls) -> dict[str, str]:
        return {name: value for name, value in vars(cls).items() if isinstance(value, str) and name.isupper()}

    @property
    def _inst(self) -> DeepLClient:
        if self.__inst is None:
            msg = "The DeepL instance is not initialised"
            raise ProviderConfigurationError(msg)
        return self.__inst

    @_inst.setter
    def _inst(self, inst: DeepLClient | None) -> None:
        self.__inst = inst
        self.__available = inst is not None
        logger.debug("'%s': 'set instance'", self.__class__.__name__)

    @property
    def is_available(self) -> bool:
        return self.__available

    @staticmethod
    def fetch_engine_name() -> str:
        return "deepl"

    def initialize(self, config: Config) -> None:
        """Create the DeepL client.

        Authentication happens on the first API call, so this only checks that a key exists.

        Args:
            config (Config): Application configuration.

        Raises:
            ProviderConfigurationError: If no key is set or the client cannot be created.
        """
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="deepl", tier="premium")
        self.timeout = config.PROVIDER.TIMEOUT
        self._premium_languages = frozenset(lang.lower() for lang in config.TRANSLATION.PREMIUM_LANGUAGES)

        auth_key: str = self.get_authentication_key()
        if not auth_key:
            msg = f"DeepL is disabled: environment variable {self.fetch_engine_name().upper()}_API_OAUTH is not set"
            raise ProviderConfigurationError(msg)

        try:
            self._inst = DeepLClient(auth_key)
        except (AttributeError, ValueError) as err:
            msg = "An error occurred while creating the DeepL client instance"
            raise ProviderConfigurationError(msg) from err

    def supports_pair(self, src_lang: str, tgt_lang: str) -> bool:
        """Both languages must be in the premium whitelist."""
        return src_lang.lower() in self._premium_languages and tgt_lang.lower() in self._premium_languages

    async def detect_language(self, content: str, tgt_lang: str) -> Result:
        result: Result = await self.translation(content, tgt_lang=tgt_lang)
        logger.debug("Detected language: '%s'", result.detected_source_lang)
        return result

    async def translation(
        self,
        content: str,
        tgt_lang: str,
        src_lang: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result:
        """Translate through DeepL, forwarding the caller's formality hint.

        Raises:
            UnsupportedLanguagePairError: If either language has no DeepL code.
            ProviderQuotaExceededError: If the DeepL quota is exhausted.
            ProviderRateLimitError: If DeepL throttles the request.
            ProviderConfigurationError: If the key is rejected.
            ProviderError: On connection or other DeepL failures.
        """
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        try:
            _src_lang: str | None = DeeplTranslation._source_codes[src_lang.lower()] if src_lang else None
            _tgt_lang: str = DeeplTranslation._target_codes[tgt_lang.lower()]
        except KeyError:
            msg: str = (
                f"Languages not supported by DeepL. Source language: '{src_lang}'. Target language: '{tgt_lang}'."
            )
            raise UnsupportedLanguagePairError(msg) from None

        options: dict[str, Any] = {"preserve_formatting": True}
        formality: str | None = _FORMALITY_OPTIONS.get(str((context or {}).get("formality", "")).lower())
        if formality:
            options["formality"] = formality

        try:
            results: TextResult | list[TextResult] = await asyncio.to_thread(
                self._inst.translate_text,
                content,
                source_lang=_src_lang,
                target_lang=_tgt_lang,
                **options,
            )
        except QuotaExceededException as err:
            self.__available = False
            msg = "DeepL character quota exceeded"
            raise ProviderQuotaExceededError(msg) from err
        except AuthorizationException:
            msg = "Authorisation failed. Please check your authentication key"
            raise ProviderConfigurationError(msg) from None
        except TooManyRequestsException as err:
            msg = "DeepL rate limit reached"
            raise ProviderRateLimitError(msg) from err
        except ConnectionException:
            msg = "An error occurred when connecting to the DeepL server"
            raise ProviderError(msg) from None
        except (DeepLException, ValueError, TypeError):
            msg = "An anomaly occurred during the translation process at DeepL"
            raise ProviderError(msg) from None

        logger.info("translation completed (%s > %s)", _src_lang, _tgt_lang)
        return self._build_result(results)

    def _build_result(self, results: TextResult | list[TextResult]) -> Result:
        if isinstance(results, list):
            if not results:
                msg = "DeepL returned no translation"
                raise ProviderResponseError(msg)
            results = results[0]
        if not isinstance(results, TextResult):
            msg = "An anomaly occurred during the translation process at DeepL"
            raise ProviderResponseError(msg)

        _result = Result(
            text=results.text,
            detected_source_lang=(results.detected_source_lang or "").lower() or None,
            metadata={"engine": "deepl"},
        )
        logger.debug("'return': '%s'", _result)
        return _result

    async def close(self) -> None:
        if self.__inst is not None:
            await asyncio.to_thread(self.__inst.close)
        self._inst = None
        logger.debug("'%s' process termination", self.__class__.__name__)
