from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING

import pytest

from config.loader import (
    ConfigFileNotFoundError,
    ConfigFormatError,
    ConfigLoader,
    ConfigTypeError,
    ConfigValueError,
)

if TYPE_CHECKING:
    from pathlib import Path


def _write_ini(tmp_path: Path, content: str) -> Path:
    ini_path: Path = tmp_path / "lingosphere.ini"
    ini_path.write_text(dedent(content), encoding="utf-8")
    return ini_path


def test_config_loader_raises_for_missing_file(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "missing.ini"
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_empty_file_name_uses_defaults() -> None:
    loader = ConfigLoader(config_filename="", script_name="lingosphere.py")

    assert loader.config.GENERAL.SCRIPT_NAME == "lingosphere.py"
    assert loader.config.TRANSLATION.ENGINE == ["deepl", "google_cloud", "google"]
    assert loader.config.CACHE.ttl_seconds == 7 * 24 * 60 * 60
    assert loader.config.PROVIDER.TIMEOUT == 15.0


def test_values_are_converted_to_field_types(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False
        LOG_LEVEL = "warning"

        [TRANSLATION]
        ENGINE = ["google"]
        DEFAULT_SOURCE_LANGUAGE = EN
        MAX_TEXT_LENGTH = 200
        BATCH_CONCURRENCY = 4
        PREMIUM_LANGUAGES = ["EN", "fr", "pt-BR"]
        GOOGLE_SUFFIX = co.jp

        [CACHE]
        ENABLED = no
        TTL_DAYS = 1.5
        MAX_ENTRIES = 10

        [PROVIDER]
        TIMEOUT = 3
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.GENERAL.LOG_LEVEL == "WARNING"
    assert config.TRANSLATION.ENGINE == ["google"]
    assert config.TRANSLATION.DEFAULT_SOURCE_LANGUAGE == "en"
    assert config.TRANSLATION.MAX_TEXT_LENGTH == 200
    assert config.TRANSLATION.BATCH_CONCURRENCY == 4
    assert config.TRANSLATION.PREMIUM_LANGUAGES == ["en", "fr", "pt-br"]
    assert config.TRANSLATION.GOOGLE_SUFFIX == "co.jp"
    assert config.CACHE.ENABLED is False
    assert config.CACHE.TTL_DAYS == 1.5
    assert config.CACHE.MAX_ENTRIES == 10
    assert config.CACHE.SWEEP_BATCH == 200
    assert config.PROVIDER.TIMEOUT == 3.0


def test_debug_override(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [GENERAL]
        DEBUG = False
        LOG_LEVEL = "INFO"
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test", debug=True).config

    assert config.GENERAL.DEBUG is True
    assert config.GENERAL.LOG_LEVEL == "DEBUG"


def test_single_engine_string_becomes_list(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = "deepl"
        """,
    )

    config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.ENGINE == ["deepl"]


def test_unknown_engine_is_only_warned(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = ["google", "babelfish"]
        """,
    )

    with caplog.at_level("WARNING"):
        config = ConfigLoader(config_filename=str(ini_path), script_name="test").config

    assert config.TRANSLATION.ENGINE == ["google", "babelfish"]
    assert "babelfish" in caplog.text


@pytest.mark.parametrize(
    ("section", "content"),
    [
        ("TRANSLATION", "MAX_TEXT_LENGTH = 0"),
        ("TRANSLATION", "BATCH_CONCURRENCY = -1"),
        ("CACHE", "TTL_DAYS = 0"),
        ("CACHE", "MAX_ENTRIES = -5"),
        ("CACHE", "SWEEP_BATCH = 0"),
        ("PROVIDER", "TIMEOUT = 0"),
        ("PROVIDER", "DETECTION_TIMEOUT = -1.5"),
        ("TRANSLATION", 'DEFAULT_SOURCE_LANGUAGE = "english!"'),
        ("TRANSLATION", 'DETECTION_TARGET_LANGUAGE = "auto"'),
        ("TRANSLATION", 'PREMIUM_LANGUAGES = ["en", "x"]'),
        ("GENERAL", 'LOG_LEVEL = "chatty"'),
        ("CACHE", "MAX_ENTRIES = many"),
    ],
)
def test_invalid_values_raise_value_error(tmp_path: Path, section: str, content: str) -> None:
    ini_path: Path = _write_ini(tmp_path, f"[{section}]\n{content}\n")

    with pytest.raises(ConfigValueError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_invalid_list_literal_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        PREMIUM_LANGUAGES = ["en", "fr"
        """,
    )

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_wrong_engine_type_raises_type_error(tmp_path: Path) -> None:
    ini_path: Path = _write_ini(
        tmp_path,
        """
        [TRANSLATION]
        ENGINE = 42
        """,
    )

    with pytest.raises(ConfigTypeError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")


def test_malformed_file_raises_format_error(tmp_path: Path) -> None:
    ini_path: Path = tmp_path / "lingosphere.ini"
    ini_path.write_text("TIMEOUT = 3\n", encoding="utf-8")

    with pytest.raises(ConfigFormatError):
        ConfigLoader(config_filename=str(ini_path), script_name="test")
