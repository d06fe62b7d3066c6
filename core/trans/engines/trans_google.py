"""Google Translate fallback engine.

Uses the unauthenticated web endpoint through AsyncTranslator, so it needs no credentials and
is always loaded. It is also the default language identification engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from core.trans.engines.async_google_translate import (
    AsyncTranslator,
    GoogleWebError,
    HTTPTooManyRequests,
    InvalidLanguageCodeError,
    ResponseFormatError,
    TextResult,
)
from core.trans.interface import (
    EngineAttributes,
    ProviderConfigurationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
    Result,
    TransInterface,
    UnsupportedLanguagePairError,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.config_models import Config

__all__: list[str] = ["GoogleTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class GoogleTranslation(TransInterface):
    def __init__(self) -> None:
        super().__init__()
        self.__inst: AsyncTranslator | None = None

    @property
    def _inst(self) -> AsyncTranslator:
        if self.__inst is None:
            msg = "The google instance is not initialised"
            raise ProviderConfigurationError(msg)
        return self.__inst

    @_inst.setter
    def _inst(self, inst: AsyncTranslator | None) -> None:
        self.__inst = inst
        logger.debug("'%s': 'set instance'", self.__class__.__name__)

    @property
    def is_available(self) -> bool:
        return self.__inst is not None

    @staticmethod
    def fetch_engine_name() -> str:
        return "google"

    def initialize(self, config: Config) -> None:
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="google_package", tier="fallback")
        self.timeout = config.PROVIDER.TIMEOUT
        try:
            self._inst = AsyncTranslator(
                url_suffix=config.TRANSLATION.GOOGLE_SUFFIX,
                timeout=config.PROVIDER.TIMEOUT,
                max_length=config.TRANSLATION.MAX_TEXT_LENGTH,
            )
        except (AttributeError, ValueError) as err:
            msg = "an error occurred in instance creation"
            raise ProviderConfigurationError(msg) from err

    async def detect_language(self, content: str, tgt_lang: str) -> Result:
        logger.debug("'%s': 'detect language'", self.__class__.__name__)
        result: Result = await self.translation(content, tgt_lang=tgt_lang)
        logger.debug("%s", result)
        return result

    async def translation(
        self,
        content: str,
        tgt_lang: str,
        src_lang: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result:
        _ = context
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)

        try:
            result: TextResult = await self._inst.translate(content, tgt_lang, src_lang)
        except HTTPTooManyRequests as err:
            msg = "Google rate limit reached"
            raise ProviderRateLimitError(msg) from err
        except InvalidLanguageCodeError as err:
            raise UnsupportedLanguagePairError(str(err)) from err
        except ResponseFormatError as err:
            msg = f"unexpected response from Google: {err}"
            raise ProviderResponseError(msg) from err
        except GoogleWebError as err:
            msg = f"an anomaly occurred during translation at Google: {err}"
            raise ProviderError(msg) from err

        logger.info("translation completed (%s > %s)", src_lang or result.detected_source_lang, tgt_lang)
        _result = Result(
            text=result.text,
            detected_source_lang=result.detected_source_lang.lower(),
            metadata=result.metadata,
        )
        logger.debug("'return': '%s'", _result)
        return _result

    async def close(self) -> None:
        if self.__inst is not None:
            await self.__inst.close()
        self._inst = None
        logger.info("'%s' process termination", self.__class__.__name__)
