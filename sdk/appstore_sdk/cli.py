"""
Command line tool for the app store.

Commands:
- publish: Publish a version read from stdin and/or flags
- latest: Print the latest version of an app's channel

Usage:
    echo '{"name": "r1.0.2", "dockerTag": "latest", "maturity": "stable"}' \\
        | appstore publish a-company/a-container
    appstore latest a-company/a-container --maturity beta

Environment variables:
    APPSTORE_LOGIN_USERNAME, APPSTORE_LOGIN_PASSWORD: credentials for publish
    APPSTORE_URL: app store server (optional)
    DEBUG / APPSTORE_DEBUG: print full error details

Invariants:
    - Missing required input prints usage and exits with 2
    - Failed operations print the error and exit with 1
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import traceback
from typing import Any, TextIO

from .client import get_app_by_environment
from .config import AppStoreSettings
from .errors import AppStoreError
from .logging_setup import setup_logging
from .types import REQUIRED_PUBLISH_FIELDS, Maturity

logger = logging.getLogger(__name__)

PUBLISH_EPILOG = """\
Example:
  echo '{
    "name": "r1.0.2",
    "changelog": "### Bug Fixes\\n\\n* **adapters:** fixed write & method rejection",
    "dockerTag": "latest",
    "maturity": "stable"
  }' | appstore publish a-company/a-container

Environment variables:
  APPSTORE_LOGIN_USERNAME
  APPSTORE_LOGIN_PASSWORD
"""

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="appstore", description="App store client")
    parser.add_argument("--debug", action="store_true", help="Print full error details")
    parser.add_argument("--log-level", help="Log level (default from APPSTORE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    publish_parser = subparsers.add_parser(
        "publish",
        help="Publish a version",
        description="Uses stdin or flags to publish json to app-store",
        epilog=PUBLISH_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    publish_parser.add_argument("app", nargs="?", help="Docker image, <vendor>/<app>")
    publish_parser.add_argument(
        "--maturity", choices=[m.value for m in Maturity], help="alpha, beta or stable"
    )
    publish_parser.add_argument("--name", help="Name of the release")
    publish_parser.add_argument("--docker-tag", dest="docker_tag", help="Tag of the image")
    publish_parser.add_argument("--changelog", help="Optional changelog. You can use markdown")
    publish_parser.set_defaults(help_parser=publish_parser)

    latest_parser = subparsers.add_parser(
        "latest",
        help="Print the latest version",
        description="Retrieve latest version for an app",
    )
    latest_parser.add_argument("app", nargs="?", help="Docker image, <vendor>/<app>")
    latest_parser.add_argument(
        "--maturity",
        "-m",
        default=Maturity.STABLE.value,
        choices=[m.value for m in Maturity],
        help="alpha, beta or stable. stable per default",
    )
    latest_parser.set_defaults(help_parser=latest_parser)

    return parser


def read_stdin_version(stream: TextIO) -> dict[str, Any]:
    """Version fields piped on stdin (empty when stdin is a terminal)."""
    if stream.isatty():
        return {}
    content = stream.read().strip()
    if not content:
        return {}
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("stdin must contain a JSON object")
    return data


def merge_publish_flags(version: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    """Flags override stdin fields."""
    flags = {
        "maturity": args.maturity,
        "name": args.name,
        "dockerTag": args.docker_tag,
        "changelog": args.changelog,
    }
    return {**version, **{key: value for key, value in flags.items() if value is not None}}


def print_error(error: BaseException, debug: bool, prefix: str = "") -> None:
    message = str(error.message if isinstance(error, AppStoreError) else error)
    print(f"{prefix}{message}", file=sys.stderr)
    if debug:
        traceback.print_exception(type(error), error, error.__traceback__, file=sys.stderr)


async def publish(app: str, version: dict[str, Any], settings: AppStoreSettings) -> dict[str, Any]:
    async with get_app_by_environment(app, settings) as handle:
        return await handle.publish_version(version)


async def latest(app: str, maturity: str, settings: AppStoreSettings) -> Any:
    async with get_app_by_environment(app, settings) as handle:
        return await handle.get_latest_version(maturity)


def _run_publish(
    args: argparse.Namespace,
    settings: AppStoreSettings,
    stdin: TextIO,
) -> int:
    if not args.app or not settings.has_credentials:
        args.help_parser.print_help()
        return EXIT_USAGE

    try:
        version = merge_publish_flags(read_stdin_version(stdin), args)
    except ValueError as e:
        print_error(e, settings.debug, prefix="invalid version on stdin: ")
        return EXIT_USAGE

    if not all(version.get(key) for key in REQUIRED_PUBLISH_FIELDS):
        args.help_parser.print_help()
        return EXIT_USAGE

    try:
        entry = asyncio.run(publish(args.app, version, settings))
    except AppStoreError as e:
        print_error(e, settings.debug)
        return EXIT_FAILED

    print(json.dumps(entry, indent=4, default=str))
    return EXIT_OK


def _run_latest(
    args: argparse.Namespace,
    settings: AppStoreSettings,
) -> int:
    if not args.app:
        args.help_parser.print_help()
        return EXIT_USAGE

    try:
        version = asyncio.run(latest(args.app, args.maturity, settings))
    except (AppStoreError, OSError, ValueError) as e:
        print_error(e, settings.debug, prefix="retrieval not possible: ")
        return EXIT_FAILED

    print(json.dumps(version, indent=4, default=str))
    return EXIT_OK


def main(
    argv: list[str] | None = None,
    settings: AppStoreSettings | None = None,
    stdin: TextIO | None = None,
) -> int:
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = settings or AppStoreSettings()
    if args.debug:
        settings = settings.model_copy(update={"debug": True})
    level = args.log_level or ("DEBUG" if settings.debug else settings.log_level)
    setup_logging(level, settings.log_format)

    if args.command == "publish":
        return _run_publish(args, settings, stdin or sys.stdin)
    if args.command == "latest":
        return _run_latest(args, settings)

    parser.print_help()
    return EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
