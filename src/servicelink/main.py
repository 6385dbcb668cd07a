"""
servicelink CLI

Usage:
    servicelink <command> [args]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from servicelink import __version__
from servicelink.cli.matching import handle_matching_command, register_matching_parsers
from servicelink.config.settings import get_settings
from servicelink.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servicelink",
        description="Match PagerDuty services to Backstage catalog components",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Log level (default: from SERVICELINK_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")
    register_matching_parsers(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)

    if args.command is None:
        parser.print_help()
        sys.exit(2)

    sys.exit(handle_matching_command(args))


if __name__ == "__main__":
    main()
