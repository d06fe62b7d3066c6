from __future__ import annotations

import logging
import warnings
from logging import NullHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def fresh_logger_utils(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(LoggerUtils, "_instance", None)
    monkeypatch.setattr(LoggerUtils, "_configured", False)
    monkeypatch.setattr(LoggerUtils, "_LOGGER_NAMESPACE", "LingoSphereTest")
    monkeypatch.setattr(warnings, "showwarning", warnings.showwarning)
    yield
    root: logging.Logger = logging.getLogger("LingoSphereTest")
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


def test_get_logger_uses_namespace() -> None:
    assert LoggerUtils.get_logger("core.trans.manager").name == "LingoSphere.core.trans.manager"
    assert LoggerUtils.get_logger().name == "LingoSphere"


@pytest.mark.usefixtures("fresh_logger_utils")
def test_logger_utils_is_singleton() -> None:
    assert LoggerUtils(use_null_console=True) is LoggerUtils()


@pytest.mark.usefixtures("fresh_logger_utils")
def test_null_console_installs_null_handler() -> None:
    log_utils = LoggerUtils(use_null_console=True)

    assert any(isinstance(h, NullHandler) for h in log_utils.root_logger.handlers)


@pytest.mark.usefixtures("fresh_logger_utils")
def test_file_logging_attaches_rotating_handler(tmp_path: Path) -> None:
    log_utils = LoggerUtils(tmp_path / "lingosphere.log", use_null_console=True)

    handlers = [h for h in log_utils.root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(handlers) == 1
    assert handlers[0].level == logging.DEBUG


@pytest.mark.usefixtures("fresh_logger_utils")
def test_set_level_and_unknown_level_fallback() -> None:
    log_utils = LoggerUtils(use_null_console=True)

    log_utils.set_level("debug")
    assert log_utils.get_level().name == "DEBUG"

    log_utils.set_level("chatty")
    assert log_utils.get_level().value == logging.INFO


@pytest.mark.usefixtures("fresh_logger_utils")
def test_initial_level_from_constructor() -> None:
    log_utils = LoggerUtils(level="debug", use_null_console=True)

    assert log_utils.get_level().value == logging.DEBUG


@pytest.mark.usefixtures("fresh_logger_utils")
def test_reconstruction_keeps_configuration() -> None:
    log_utils = LoggerUtils(level="warning", use_null_console=True)

    assert LoggerUtils(level="debug") is log_utils
    assert log_utils.get_level().name == "WARNING"
