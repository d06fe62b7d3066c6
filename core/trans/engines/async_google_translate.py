"""Asynchronous client for the unauthenticated Google Translate web endpoint.

The endpoint speaks the ``batchexecute`` RPC protocol: the request is a form-encoded,
doubly JSON-encoded RPC envelope and the answer is a line-oriented body in which one line
carries the doubly JSON-encoded translation payload.

Note:
    The payload layout is undocumented. Any structural surprise is reported as
    ResponseFormatError rather than guessed around.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any, ClassVar, Final
from urllib.parse import quote

import aiohttp

from core.trans.engines.const_google import DEFAULT_SERVICE_URLS, LANGUAGES
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = [
    "AsyncTranslator",
    "GoogleWebError",
    "HTTPConnectionError",
    "HTTPError",
    "HTTPTimeoutError",
    "HTTPTooManyRequests",
    "InvalidLanguageCodeError",
    "ResponseFormatError",
    "TextResult",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

URL_SUFFIX_DEFAULT: Final[str] = "com"
URL_SUFFIXES: Final[frozenset[str]] = frozenset(
    url.removeprefix("translate.google.") for url in DEFAULT_SERVICE_URLS
)
UNDETERMINED_LANGUAGE: Final[str] = "und"
_BODY_PREVIEW_LIMIT: Final[int] = 500


class GoogleWebError(Exception):
    """Base class of the web endpoint errors."""


class ResponseFormatError(GoogleWebError):
    """The response did not have the expected layout.

    If this happens on every call, the endpoint format has most likely changed.
    """


class InvalidLanguageCodeError(GoogleWebError):
    """A language code unknown to Google Translate was given in code-sensitive mode."""


class HTTPConnectionError(GoogleWebError):
    pass


class HTTPTimeoutError(GoogleWebError):
    pass


class HTTPError(GoogleWebError):
    """Non-2xx HTTP status.

    Attributes:
        status (int): HTTP status code.
    """

    def __init__(self, status: int, message: str) -> None:
        self.status: int = status
        super().__init__(message)


class HTTPTooManyRequests(HTTPError):
    """HTTP 429."""


@dataclass
class TextResult:
    """Decoded translation payload.

    Attributes:
        text (str): Translated text, sentences joined with single spaces.
        detected_source_lang (str): Source language reported by the endpoint ('und' if unknown).
        pronunciation (str | None): Romanization of the translation, when provided.
        metadata (dict[str, str]): Payload kind and engine name.
    """

    text: str
    detected_source_lang: str = UNDETERMINED_LANGUAGE
    pronunciation: str | None = None
    metadata: dict[str, str] = field(default_factory=lambda: {"engine": "google"})


class AsyncTranslator:
    """Sends translation RPCs to translate.google.<suffix> over a shared aiohttp session.

    The session is opened on first use, inside the running event loop, and reopened if it
    was closed.
    """

    RPC_ID: ClassVar[str] = "MkEWBc"
    USER_AGENT: ClassVar[str] = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )

    def __init__(
        self,
        url_suffix: str = URL_SUFFIX_DEFAULT,
        timeout: float = 10.0,
        proxy: str | None = None,
        *,
        code_sensitive: bool = False,
        max_length: int = 5000,
    ) -> None:
        if url_suffix not in URL_SUFFIXES:
            logger.warning("Unknown Google domain suffix '%s', using '%s'", url_suffix, URL_SUFFIX_DEFAULT)
            url_suffix = URL_SUFFIX_DEFAULT
        self.url_suffix: str = url_suffix
        self.url: str = f"https://translate.google.{url_suffix}/_/TranslateWebserverUi/data/batchexecute"
        self.timeout: float = timeout
        self.proxy: str | None = proxy
        self.code_sensitive: bool = code_sensitive
        self.max_length: int = max_length
        self.__session: aiohttp.ClientSession | None = None

    @property
    def _session(self) -> aiohttp.ClientSession:
        if self.__session is None or self.__session.closed:
            self.__session = aiohttp.ClientSession(
                headers={
                    "Referer": f"https://translate.google.{self.url_suffix}/",
                    "User-Agent": self.USER_AGENT,
                    "Content-Type": "application/x-www-form-urlencoded;charset=utf-8",
                }
            )
        return self.__session

    async def close(self) -> None:
        if self.__session is not None and not self.__session.closed:
            await self.__session.close()
        self.__session = None
        logger.debug("'%s': 'session closed'", self.__class__.__name__)

    def normalize_langcode(self, lang: str | None) -> str:
        """Map a language code onto the endpoint's list, case-insensitively.

        Unknown codes become 'auto' unless the translator is code-sensitive.

        Raises:
            InvalidLanguageCodeError: If the code is unknown and code_sensitive is set.
        """
        if not lang or lang.lower() == "auto":
            return "auto"
        code: str = lang.lower()
        if code in LANGUAGES:
            return code
        if code == "zh":
            return "zh-cn"
        if self.code_sensitive:
            msg: str = f"Invalid language code passed ({lang})"
            raise InvalidLanguageCodeError(msg)
        return "auto"

    def _package_rpc(self, text: str, lang_src: str, lang_tgt: str) -> str:
        parameter: str = json.dumps([[text.strip(), lang_src, lang_tgt, True], [1]], separators=(",", ":"))
        envelope: str = json.dumps([[[self.RPC_ID, parameter, None, "generic"]]], separators=(",", ":"))
        return f"f.req={quote(envelope)}&"

    async def translate(self, text: str, lang_tgt: str, lang_src: str | None = None) -> TextResult:
        """Translate text.

        Args:
            text (str): Text to translate.
            lang_tgt (str): Target language code.
            lang_src (str | None): Source language code; None or 'auto' lets Google detect it.

        Returns:
            TextResult: Decoded translation.

        Raises:
            GoogleWebError: On validation, transport or decoding failures.
        """
        if not text.strip():
            msg = "No characters to translate"
            raise GoogleWebError(msg)
        if len(text) > self.max_length:
            msg = f"Can only translate up to {self.max_length} characters"
            raise GoogleWebError(msg)

        rpc: str = self._package_rpc(text, self.normalize_langcode(lang_src), self.normalize_langcode(lang_tgt))
        return self.parse_response(await self._post(rpc))

    async def _post(self, data: str) -> str:
        try:
            async with self._session.post(
                self.url,
                data=data,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                proxy=self.proxy,
            ) as response:
                body: str = await response.text()
                if response.status == 429:
                    raise HTTPTooManyRequests(response.status, self._describe(response, body))
                if response.status >= 300:
                    raise HTTPError(response.status, self._describe(response, body))
                return body
        except TimeoutError:
            msg = f"No response from {self.url} within {self.timeout} seconds"
            raise HTTPTimeoutError(msg) from None
        except (aiohttp.ClientConnectionError, ConnectionResetError) as err:
            raise HTTPConnectionError(str(err)) from err

    def _describe(self, response: aiohttp.ClientResponse, body: str) -> str:
        preview: str = body.strip().replace("\n", "\\n")
        if len(preview) > _BODY_PREVIEW_LIMIT:
            preview = f"{preview[:_BODY_PREVIEW_LIMIT]}..."
        return f"HTTP {response.status} {response.reason or ''} from {self.url}. Body: {preview}"

    @classmethod
    def parse_response(cls, body: str) -> TextResult:
        """Decode the RPC answer.

        Raises:
            ResponseFormatError: If no line carries a decodable payload.
        """
        for line in body.splitlines():
            if cls.RPC_ID not in line:
                continue
            logger.debug(line)
            try:
                payload: Any = json.loads(json.loads(line)[0][2])
                detected: str = payload[1][3] or UNDETERMINED_LANGUAGE
                segments: Any = payload[1][0]
            except JSONDecodeError as err:
                msg = "failed to decode response"
                raise ResponseFormatError(msg) from err
            except (IndexError, KeyError, TypeError) as err:
                msg = "invalid response format"
                raise ResponseFormatError(msg) from err
            return cls._build_result(segments, detected)

        msg = "unknown response format"
        raise ResponseFormatError(msg)

    @staticmethod
    def _build_result(segments: Any, detected: str) -> TextResult:
        try:
            first: Any = segments[0]
            if len(first) > 5 and first[5]:
                text: str = " ".join(sentence[0].strip() for sentence in first[5] if sentence and sentence[0])
                return TextResult(
                    text=text,
                    detected_source_lang=detected,
                    pronunciation=first[1] if isinstance(first[1], str) else None,
                    metadata={"engine": "google", "type": "single translation"},
                )
            if len(segments) > 1:
                return TextResult(
                    text=" ".join(str(segment[0]) for segment in segments),
                    detected_source_lang=detected,
                    metadata={"engine": "google", "type": "multiple translation"},
                )
            # The endpoint echoes URLs without detecting a language.
            return TextResult(
                text=str(first[0]),
                detected_source_lang=UNDETERMINED_LANGUAGE,
                metadata={"engine": "google", "type": "url recognition"},
            )
        except (IndexError, TypeError) as err:
            msg = "invalid response format for sentences"
            raise ResponseFormatError(msg) from err
