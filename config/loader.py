"""Configuration file loader and validator.

Handles reading, formatting, and validating settings from the INI configuration file.
Raises exceptions for any issues encountered during loading.
"""

from __future__ import annotations

import ast
import configparser
import logging
import re
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Config
from models.translation_models import AUTO_LANGUAGE
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Callable
    from dataclasses import Field as DataclassField
else:
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ALLOWED_TRANSLATION_ENGINES: Final[list[str]] = ["deepl", "google_cloud", "google"]
LANGUAGE_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,4})?$", re.IGNORECASE)


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of configuration settings.

    Keys missing from the file keep their dataclass defaults. An empty file name skips the file
    entirely and validates the defaults.

    Args:
        config_filename (str): INI file name to load, or "" to use the defaults.
        script_name (str): Executing script name, used in error messaging.
        debug (bool): Optional override forcing GENERAL.DEBUG on.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(
        self,
        *,
        config_filename: str,
        script_name: str,
        **args,
    ) -> None:
        self.config = Config()
        self.config.GENERAL.SCRIPT_NAME = script_name

        if config_filename:
            self._convert_settings(self._read(config_filename, script_name))

        # Apply command-line argument overrides
        if args.get("debug", False):
            self.config.GENERAL.DEBUG = True
            self.config.GENERAL.LOG_LEVEL = "DEBUG"
        self._validate_settings()

    @staticmethod
    def _read(config_filename: str, script_name: str) -> ConfigParser:
        msg: str
        if not Path(config_filename).exists():
            msg = (
                f"Configuration file '{config_filename}' not found. "
                f"Please create '{config_filename}' in the same directory as '{script_name}'."
            )
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser()
        parser.optionxform = str.upper  # type: ignore[assignment, method-assign]
        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None
        return parser

    def _convert_settings(self, parser: ConfigParser) -> None:
        """Copy every key defined in the INI file onto the matching Config field.

        Raises:
            ConfigFormatError: If a value cannot be parsed or coerced to the expected type.
        """
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Skipping undefined section: '%s'", section.name)
                continue
            for key in fields(getattr(self.config, section.name)):
                if not parser.has_option(section.name, key.name):
                    logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                    continue
                setattr(getattr(self.config, section.name), key.name, formatter.apply_format(section, key))

    def _validate_settings(self) -> None:
        """Validate engines, language codes, sizes and timeouts.

        Raises:
            ConfigFormatError: If validation fails for any setting.
        """
        try:
            self._inspect_defined_item("TRANSLATION", "ENGINE", ALLOWED_TRANSLATION_ENGINES)
            self._validate_language_code("TRANSLATION", "DEFAULT_SOURCE_LANGUAGE", allow_auto=True)
            self._validate_language_code("TRANSLATION", "DETECTION_TARGET_LANGUAGE")
            self._validate_language_list("TRANSLATION", "PREMIUM_LANGUAGES")
            for section_name, key_name in (
                ("TRANSLATION", "MAX_TEXT_LENGTH"),
                ("CACHE", "TTL_DAYS"),
                ("CACHE", "MAX_ENTRIES"),
                ("CACHE", "SWEEP_BATCH"),
                ("PROVIDER", "TIMEOUT"),
                ("PROVIDER", "DETECTION_TIMEOUT"),
            ):
                self._validate_positive(section_name, key_name)
            self._validate_positive("TRANSLATION", "BATCH_CONCURRENCY", allow_zero=True)
            self._validate_log_level("GENERAL", "LOG_LEVEL")
        except (AttributeError, TypeError) as err:
            msg: str = f"Invalid configuration value: {err}"
            raise ConfigTypeError(msg) from None

    def _inspect_defined_item(self, section_name: str, key_name: str, defined_list: list[str]) -> None:
        """Verify that configuration values match allowed options.

        Logs warnings for unrecognized values but does not raise exceptions.

        Raises:
            ConfigTypeError: If the configured value is neither list nor str.
        """
        value: str | list[str] = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"

        if isinstance(value, str):
            value = [value]
            setattr(getattr(self.config, section_name), key_name, value)
        if not isinstance(value, list):
            msg: str = f"Unsupported type used for '{field_name}': {type(value)}"
            raise ConfigTypeError(msg)

        for val in value:
            if val not in defined_list:
                logger.warning("Unknown value '%s' is set for '%s'", val, field_name)

    def _validate_language_code(self, section_name: str, key_name: str, *, allow_auto: bool = False) -> None:
        value: Any = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"
        if not isinstance(value, str):
            msg: str = f"'{field_name}' must be a string: {value!r}"
            raise ConfigTypeError(msg)
        if not (allow_auto and value.lower() == AUTO_LANGUAGE) and not LANGUAGE_CODE_PATTERN.match(value):
            msg: str = f"Malformed language code for '{field_name}': '{value}'"
            raise ConfigValueError(msg)
        setattr(getattr(self.config, section_name), key_name, value.lower())

    def _validate_language_list(self, section_name: str, key_name: str) -> None:
        value: Any = getattr(getattr(self.config, section_name), key_name)
        field_name: str = f"{section_name}.{key_name}"
        if not isinstance(value, (list, tuple)):
            msg: str = f"'{field_name}' must be a list of language codes: {value!r}"
            raise ConfigTypeError(msg)
        for code in value:
            if not isinstance(code, str) or not LANGUAGE_CODE_PATTERN.match(code):
                msg: str = f"Malformed language code in '{field_name}': {code!r}"
                raise ConfigValueError(msg)
        setattr(getattr(self.config, section_name), key_name, [code.lower() for code in value])

    def _validate_positive(self, section_name: str, key_name: str, *, allow_zero: bool = False) -> None:
        value: int | float = getattr(getattr(self.config, section_name), key_name)
        if value < 0 or (value == 0 and not allow_zero):
            requirement: str = "zero or greater" if allow_zero else "greater than zero"
            msg: str = f"'{section_name}.{key_name}' must be {requirement}: {value}"
            raise ConfigValueError(msg)

    def _validate_log_level(self, section_name: str, key_name: str) -> None:
        value: str = getattr(getattr(self.config, section_name), key_name)
        if str(value).upper() not in logging.getLevelNamesMapping():
            msg: str = f"Unknown logging level for '{section_name}.{key_name}': '{value}'"
            raise ConfigValueError(msg)
        setattr(getattr(self.config, section_name), key_name, str(value).upper())


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, int, float, str, list)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert INI value to the expected Python type based on the Config field's default.

        Strings may be written bare or quoted; lists use Python literal syntax.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[type, Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float | str]] = {
            bool: self.parse_as_boolean,
            int: self.parse_as_integer,
            float: self.parse_as_float,
            str: self.parse_as_string,
        }

        formatter: Callable[[DataclassField[Any], DataclassField[Any]], bool | int | float | str] | None = (
            formatters.get(type(getattr(getattr(self.config, section.name), key.name)))
        )
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            return ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        """Convert INI string to float."""
        return float(self._unquote(self.parser.get(section.name, key.name)))

    def parse_as_integer(self, section: DataclassField[Any], key: DataclassField[Any]) -> int:
        """Convert INI string to integer."""
        return int(float(self._unquote(self.parser.get(section.name, key.name))))

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        """Convert INI string to boolean."""
        return self.parser.getboolean(section.name, key.name)

    def parse_as_string(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Return the INI string with surrounding quotes removed."""
        return self._unquote(self.parser.get(section.name, key.name))

    @staticmethod
    def _unquote(value: str) -> str:
        value = value.strip()
        for char in ("'", '"'):
            value = value.removeprefix(char).removesuffix(char)
        return value
