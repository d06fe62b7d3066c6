"""Google Cloud Translation API Basic (v2) implementation.

General-tier engine. Requires the google-cloud-translate library and either an API key
(GOOGLE_CLOUD_API_OAUTH) or a service account (GOOGLE_APPLICATION_CREDENTIALS).
"""

from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import BadRequest, Forbidden, GoogleAPIError, TooManyRequests, Unauthorized
from google.auth.credentials import AnonymousCredentials
from google.auth.exceptions import DefaultCredentialsError
from google.auth.transport.requests import AuthorizedSession
from google.cloud import translate_v2 as translate
from marshmallow.exceptions import ValidationError

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
from models.provider_models import CloudDetectionPayload, CloudTranslationPayload, load_payload
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from models.config_models import Config

__all__: list[str] = ["GoogleCloudTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class APIKeySession:
    """HTTP session that appends the API key to every request URL."""

    def __init__(self, api_key: str) -> None:
        self.api_key: str = api_key
        self._session: AuthorizedSession = AuthorizedSession(AnonymousCredentials())

    def request(self, method: str, url: str, **kwargs):
        separator = "&" if "?" in url else "?"
        return self._session.request(method, f"{url}{separator}key={self.api_key}", **kwargs)

    def close(self) -> None:
        self._session.close()


class GoogleCloudTranslation(TransInterface):
    """Google Cloud Translation API Basic (v2) engine, reported as 'google_api'.

    Authentication:
    1. API key: GOOGLE_CLOUD_API_OAUTH env var (takes precedence)
    2. Service account JSON key file: GOOGLE_APPLICATION_CREDENTIALS env var
    """

    def __init__(self) -> None:
        super().__init__()
        self.__inst: translate.Client | None = None
        self.__session: APIKeySession | None = None

    @property
    def _inst(self) -> translate.Client:
        if self.__inst is None:
            msg = "The Google Cloud Translate instance is not initialised"
            raise ProviderConfigurationError(msg)
        return self.__inst

    @_inst.setter
    def _inst(self, inst: translate.Client | None) -> None:
        self.__inst = inst
        logger.debug("'%s': 'set instance'", self.__class__.__name__)

    @property
    def is_available(self) -> bool:
        return self.__inst is not None

    @staticmethod
    def fetch_engine_name() -> str:
        return "google_cloud"

    def initialize(self, config: Config) -> None:
        """Create the Translation API client.

        No request is made here; invalid credentials surface on the first translation.

        Args:
            config (Config): Application configuration.

        Raises:
            ProviderConfigurationError: If no credentials are configured or the client cannot be created.
        """
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        self.engine_attributes = EngineAttributes(name="google_api", tier="general")
        self.timeout = config.PROVIDER.TIMEOUT

        api_key: str = self.get_authentication_key()
        try:
            if api_key:
                logger.debug("Using API key authentication")
                self.__session = APIKeySession(api_key)
                self._inst = translate.Client(credentials=AnonymousCredentials(), _http=self.__session)
            elif os.getenv("GOOGLE_APPLICATION_CREDENTIALS"):
                logger.debug("Using default credentials (GOOGLE_APPLICATION_CREDENTIALS)")
                self._inst = translate.Client()
            else:
                msg = (
                    "Google Cloud Translation is disabled: set GOOGLE_CLOUD_API_OAUTH "
                    "or GOOGLE_APPLICATION_CREDENTIALS"
                )
                raise ProviderConfigurationError(msg)
        except DefaultCredentialsError as err:
            msg = f"Failed to load Google Cloud credentials: {err}"
            raise ProviderConfigurationError(msg) from err

    async def detect_language(self, content: str, tgt_lang: str) -> Result:
        """Detect the language with the dedicated detection API.

        The target language is not used; Result.text is None.

        Raises:
            ProviderRateLimitError: If the API throttles the request.
            ProviderResponseError: If the payload is malformed.
            ProviderError: On any other API failure.
        """
        _ = tgt_lang
        try:
            response: Any = await asyncio.to_thread(self._inst.detect_language, content)
        except TooManyRequests as err:
            msg: str = f"Language detection rate limited: {err}"
            raise ProviderRateLimitError(msg) from err
        except GoogleAPIError as err:
            msg: str = f"Language detection failed: {err}"
            raise ProviderError(msg) from err

        payload: CloudDetectionPayload = self._parse(CloudDetectionPayload, response)
        logger.debug("Detected language: '%s' with confidence: %s", payload.language, payload.confidence)
        return Result(
            text=None,
            detected_source_lang=payload.language.lower(),
            metadata={"engine": "google_cloud", "confidence": str(payload.confidence)},
        )

    async def translation(
        self,
        content: str,
        tgt_lang: str,
        src_lang: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result:
        """Translate through the v2 API. Without a source language the service detects it.

        Raises:
            UnsupportedLanguagePairError: If the API rejects the language codes.
            ProviderConfigurationError: If the credentials are rejected.
            ProviderQuotaExceededError: If the project quota is exhausted.
            ProviderRateLimitError: If the API throttles the request.
            ProviderResponseError: If the payload is malformed.
            ProviderError: On any other API failure.
        """
        _ = context
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)
        try:
            response: Any = await asyncio.to_thread(
                self._inst.translate, content, target_language=tgt_lang, source_language=src_lang, format_="text"
            )
        except BadRequest as err:
            msg: str = f"Unsupported language pair (src: '{src_lang}', tgt: '{tgt_lang}'): {err}"
            raise UnsupportedLanguagePairError(msg) from err
        except Unauthorized as err:
            msg: str = f"Authentication failed: {err}"
            raise ProviderConfigurationError(msg) from err
        except Forbidden as err:
            msg: str = f"Google Cloud quota exceeded or access denied: {err}"
            raise ProviderQuotaExceededError(msg) from err
        except TooManyRequests as err:
            msg: str = f"Translation rate limited: {err}"
            raise ProviderRateLimitError(msg) from err
        except GoogleAPIError as err:
            msg: str = f"Translation failed: {err}"
            raise ProviderError(msg) from err

        payload: CloudTranslationPayload = self._parse(CloudTranslationPayload, response)
        detected_lang: str | None = payload.detected_source_language or src_lang
        result = Result(
            text=payload.translated_text,
            detected_source_lang=detected_lang.lower() if detected_lang else None,
            metadata={"engine": "google_cloud"},
        )
        logger.info("translation completed (%s > %s)", result.detected_source_lang, tgt_lang)
        logger.debug("'return': '%s'", result)
        return result

    @staticmethod
    def _parse[T: (CloudTranslationPayload, CloudDetectionPayload)](model: type[T], response: Any) -> T:
        # A single string input yields a single dict; a list input yields a list.
        if isinstance(response, list):
            response = response[0] if response else None
        if not isinstance(response, dict):
            msg = f"Unexpected Google Cloud response type: {type(response).__name__}"
            raise ProviderResponseError(msg)
        try:
            return load_payload(model, response)
        except ValidationError as err:
            msg = f"Malformed Google Cloud response: {err.messages}"
            raise ProviderResponseError(msg) from err

    async def close(self) -> None:
        if self.__session is not None:
            self.__session.close()
            self.__session = None
        self._inst = None
        logger.info("'%s' process termination", self.__class__.__name__)
