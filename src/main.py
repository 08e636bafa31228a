# src/main.py
"""CLI entry point: process, batch, status and cache-clear commands.

Usage:
    contentengine process --type summarize --content "..." [--option k=v ...]
    contentengine batch requests.json
    contentengine status
    contentengine cache-clear

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from contentengine.processing.errors import ContentProcessingError
from contentengine.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CLIENT_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ContentProcessingError as exc:
        from contentengine.api.facade import error_body, http_status_for

        _print_json(error_body(exc))
        return EXIT_CLIENT_ERROR if http_status_for(exc) == 400 else EXIT_ERROR
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="contentengine",
        description=f"contentengine v{__version__}: cached AI content processing",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- process ---
    p_process = subparsers.add_parser("process", help="Process a single content item")
    p_process.add_argument(
        "-t", "--type", dest="processing_type", required=True,
        help="summarize, analyze-sentiment, extract-keywords, generate-content, translate",
    )
    source = p_process.add_mutually_exclusive_group(required=True)
    source.add_argument("-c", "--content", help="Content text")
    source.add_argument("-f", "--file", type=Path, help="Read content from a file")
    p_process.add_argument(
        "-o", "--option", action="append", default=[], metavar="KEY=VALUE",
        help="Processing option (repeatable); values are parsed as JSON when possible",
    )
    p_process.set_defaults(func=_cmd_process)

    # --- batch ---
    p_batch = subparsers.add_parser("batch", help="Process a JSON file of requests")
    p_batch.add_argument(
        "requests_file", type=Path,
        help='JSON file: {"requests": [...]} or a bare list of requests',
    )
    p_batch.set_defaults(func=_cmd_batch)

    # --- status ---
    p_status = subparsers.add_parser("status", help="Show service status")
    p_status.set_defaults(func=_cmd_status)

    # --- cache-clear ---
    p_clear = subparsers.add_parser("cache-clear", help="Flush all cached results")
    p_clear.set_defaults(func=_cmd_cache_clear)

    return parser


def parse_option(raw: str) -> tuple[str, Any]:
    """Parse KEY=VALUE, decoding VALUE as JSON when it is valid JSON."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Invalid option {raw!r}, expected KEY=VALUE")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


async def _cmd_process(args: argparse.Namespace) -> int:
    """Execute a single processing request."""
    from contentengine.api.facade import ContentEngine

    if args.file is not None:
        if not args.file.exists():
            logger.error("File not found: %s", args.file)
            return EXIT_ERROR
        content = args.file.read_text(encoding="utf-8")
    else:
        content = args.content

    try:
        options = dict(parse_option(o) for o in args.option)
    except argparse.ArgumentTypeError as e:
        logger.error("%s", e)
        return EXIT_CLIENT_ERROR

    payload = {"type": args.processing_type, "content": content, "options": options}
    async with ContentEngine.from_settings() as engine:
        result = await engine.process(payload)
    _print_json(result.to_dict())
    return EXIT_OK


async def _cmd_batch(args: argparse.Namespace) -> int:
    """Execute a batch file."""
    from contentengine.api.facade import ContentEngine

    path: Path = args.requests_file
    if not path.exists():
        logger.error("File not found: %s", path)
        return EXIT_ERROR
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        return EXIT_CLIENT_ERROR
    if isinstance(data, list):
        data = {"requests": data}

    async with ContentEngine.from_settings() as engine:
        response = await engine.batch(data)
    _print_json(response.to_dict())
    return EXIT_OK


async def _cmd_status(args: argparse.Namespace) -> int:
    """Print service status."""
    from contentengine.api.facade import ContentEngine

    async with ContentEngine.from_settings() as engine:
        status = await engine.status()
    _print_json(status.to_dict())
    return EXIT_OK


async def _cmd_cache_clear(args: argparse.Namespace) -> int:
    """Flush the cache."""
    from contentengine.api.facade import ContentEngine

    async with ContentEngine.from_settings() as engine:
        cleared = await engine.clear_cache()
    _print_json({"cleared": cleared})
    return EXIT_OK if cleared else EXIT_ERROR


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage from settings, verbose forcing DEBUG."""
    from contentengine.config.settings import ConfigurationError, Settings
    from contentengine.logging.logger import setup_logging

    try:
        settings = Settings()
        level, log_format = settings.log_level, settings.log_format
        log_file, rotation, retention = (
            settings.log_file, settings.log_rotation, settings.log_retention,
        )
    except (ValueError, ConfigurationError):
        level, log_format, log_file, rotation, retention = "INFO", "text", None, "10MB", 30

    setup_logging(
        level="DEBUG" if verbose else level,
        log_format=log_format,
        log_file=log_file,
        rotation=rotation,
        retention=retention,
    )
    # Quiet noisy libraries
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
