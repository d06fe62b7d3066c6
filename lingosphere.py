"""Command-line front end for the LingoSphere translation engine.

Translates one or more texts through the engine cascade and prints the results as JSON.

Exit status:
    0: every text was translated.
    1: a translation failed (all engines failed).
    2: invalid input, arguments or configuration.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, NoReturn

from config.loader import ConfigLoader, ConfigLoaderError
from core.trans.interface import AllProvidersFailedError, InvalidInputError, TranslationError
from core.trans.manager import TransManager
from core.version import VERSION
from models.translation_models import AUTO_LANGUAGE
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from models.config_models import Config
    from models.translation_models import TranslationResult

__all__: list[str] = ["main", "run"]

CFG_FILE: Final[str] = "lingosphere.ini"
EXIT_OK: Final[int] = 0
EXIT_TRANSLATION_FAILED: Final[int] = 1
EXIT_INVALID: Final[int] = 2

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(EXIT_INVALID)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        prog="lingosphere",
        description="Translate text through the LingoSphere engine cascade",
        epilog="Example: python lingosphere.py 'Bonjour le monde' --to en --from fr",
    )
    parser.add_argument("text", nargs="+", metavar="TEXT", help="Text to translate (one result per argument)")
    parser.add_argument("--to", dest="tgt_lang", metavar="LANG", required=True, help="Target language code")
    parser.add_argument(
        "--from", dest="src_lang", metavar="LANG", default=AUTO_LANGUAGE, help="Source language code (default: auto)"
    )
    parser.add_argument(
        "--config", dest="config", metavar="FILE", default=None, help=f"Configuration file (default: {CFG_FILE})"
    )
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply CLI overrides.

    Without --config the default file is used when present, otherwise the built-in defaults.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    config_filename: str = args.config if args.config is not None else ""
    if args.config is None and Path(CFG_FILE).exists():
        config_filename = CFG_FILE
    script_name: str = Path(sys.argv[0]).name
    return ConfigLoader(config_filename=config_filename, script_name=script_name, debug=args.debug).config


def setup_logging(config: Config) -> None:
    LoggerUtils(config.GENERAL.LOG_FILE, level=config.GENERAL.LOG_LEVEL)
    logger.info("LingoSphere %s started (%s)", VERSION, config.GENERAL.SCRIPT_NAME)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _error_payload(err: TranslationError) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "error": type(err).__name__,
        "message": str(err),
        "user_message": err.user_message,
        "recoverable": err.is_recoverable,
    }
    if isinstance(err, AllProvidersFailedError):
        payload["failures"] = {name: str(failure) for name, failure in err.failures.items()}
    return payload


async def run(config: Config, args: argparse.Namespace) -> int:
    """Translate the requested texts and print the results.

    Returns:
        int: Process exit status.
    """
    manager = TransManager(config)
    await manager.initialize()
    try:
        results: list[TranslationResult] = await manager.translate_batch(
            args.text, tgt_lang=args.tgt_lang, src_lang=args.src_lang
        )
    except InvalidInputError as err:
        _print_json(_error_payload(err))
        return EXIT_INVALID
    except TranslationError as err:
        _print_json(_error_payload(err))
        return EXIT_TRANSLATION_FAILED
    finally:
        await manager.shutdown_engines()

    _print_json([result.to_dict() for result in results])
    logger.debug("Cache statistics: %s", manager.cache_statistics().to_dict())
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point.

    Returns:
        int: Process exit status.
    """
    args: argparse.Namespace = parse_arguments(argv)
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return EXIT_INVALID

    setup_logging(config)
    try:
        return asyncio.run(run(config, args))
    except KeyboardInterrupt:
        print("\n\nTranslation cancelled by user.", file=sys.stderr)
        return EXIT_TRANSLATION_FAILED


if __name__ == "__main__":
    sys.exit(main())
