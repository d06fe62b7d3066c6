from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, Self, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils"]

type LevelType = Literal[
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2
_CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(lineno)4d %(name)-40s\t%(funcName)s\t%(message)s"

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
NAMESPACE: Final[str] = "LingoSphere"


class LogLevel(NamedTuple):
    """Logging level as both name and numeric value.

    Attributes:
        name (str): Level name, e.g. 'DEBUG'.
        value (int): Numeric level.
    """

    name: str
    value: int


class LoggerUtils:
    """Singleton that configures the LingoSphere log sinks.

    Console output carries warnings and errors only; the optional rotating log file receives
    everything from DEBUG upwards. Modules never configure handlers themselves, they call
    ``LoggerUtils.get_logger(__name__)`` and inherit whatever the entry point configured.
    Handler setup problems are reported through the logger and otherwise ignored.

    Attributes:
        _configured (bool): Whether the sinks have already been attached.
        _instance (LoggerUtils | None): The singleton instance.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        """Return the process-wide instance, creating it on first use.

        Arguments are accepted only so that construction with ``__init__`` parameters works.

        Returns:
            Self: The singleton instance.
        """
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(
        self,
        filename: str | Path = "",
        *,
        level: LevelType | str = "INFO",
        use_null_console: bool = False,
    ) -> None:
        """Attach the console and file handlers to the namespace root logger.

        Later constructions return the configured instance unchanged.

        Args:
            filename (str | Path): Log file path. Empty disables file logging.
            level (LevelType | str): Initial namespace level, see ``set_level``.
            use_null_console (bool): Replace console output with a NullHandler (used by tests and
                embedding applications that own stderr).
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self._use_null_console: bool = bool(use_null_console) or sys.stderr is None
        # The logger level must be at or below the handler levels, otherwise nothing reaches them.
        self.set_level(level)

        self._console_logging()
        if str(filename).strip():
            self._file_logging(str(filename))

        warnings.showwarning = self.warning_to_log
        LoggerUtils._configured = True

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """Log a ``warnings.warn`` call instead of printing it to stderr.

        Installed as ``warnings.showwarning``, whose signature it follows; ``file`` and ``line``
        are ignored.

        Args:
            message (Warning | str): Warning instance or text.
            category (type[Warning]): Warning class.
            filename (str): Source file that raised the warning.
            lineno (int): Line number in that file.
        """
        _ = file, line
        self.root_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    def _console_logging(self) -> None:
        """Attach the stderr handler (WARNING and above), or a NullHandler when console output is off."""
        if self._use_null_console:
            if not self._has_handler(NullHandler):
                self.root_logger.addHandler(NullHandler())
            return

        if self._has_handler(StreamHandler):
            self.root_logger.warning("Console logging is already configured.")
            return

        console_handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(Formatter(_CONSOLE_FORMAT))
        self.root_logger.addHandler(console_handler)

    def _file_logging(self, filename: str) -> None:
        """Attach a UTF-8 rotating file handler (DEBUG and above).

        An unusable path is reported on the console and file logging is skipped.

        Args:
            filename (str): Path to the log file.
        """
        if self._has_handler(RotatingFileHandler):
            self.root_logger.warning("File logging is already configured.")
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            self.root_logger.error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(Formatter(_FILE_FORMAT))
        self.root_logger.addHandler(file_handler)
        self.root_logger.debug("Logging to file: %s", filename)

    def _has_handler(self, handler_type: type) -> bool:
        """Check for a handler of exactly the given type.

        RotatingFileHandler subclasses StreamHandler, so ``isinstance`` would mistake the file sink
        for a console sink.

        Returns:
            bool: True if such a handler is attached.
        """
        return any(type(h) is handler_type for h in self.root_logger.handlers)

    def set_level(self, level: LevelType | str) -> None:
        """Set the namespace logging level.

        Level names are case-insensitive. An unknown name selects INFO and logs a warning.

        Args:
            level (LevelType | str): Level name.
        """
        level_map: dict[str, int] = logging.getLevelNamesMapping()
        try:
            self.root_logger.setLevel(level_map[level.upper()])
        except KeyError:
            self.root_logger.setLevel(DEFAULT_LOG_LEVEL)
            self.root_logger.warning("Unknown logging level '%s' specified. Logging level set to 'INFO'.", level)

    def get_level(self) -> LogLevel:
        """Return the effective namespace level.

        Returns:
            LogLevel: Level name and numeric value.
        """
        level_value: int = self.root_logger.getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(level_value), value=level_value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger below the LingoSphere namespace.

        Args:
            name (str | None): Module name. None returns the namespace root logger.

        Returns:
            logging.Logger: The logger instance.
        """
        namespace: str = LoggerUtils._LOGGER_NAMESPACE
        return logging.getLogger(f"{namespace}.{name}" if name else namespace)
