"""
Command-line interface for gerrit-cli.

Usage: gerrit [--verbose ...] [--dry-run] <command> [args...]

Only the global options in front of the command token are parsed with
argparse. The command token and everything after it go to the command
registry untouched, so `-v` and `-h` stay commands rather than flags.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG_PATH, RunConfig
from .errors import GerritCliError
from .logging_utils import configure_logging
from .pipeline import run_command

PROG = "gerrit"
GLOBAL_OPTIONS = ("--verbose", "--dry-run")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Short aliases for cloning, committing and pushing to Gerrit.",
        add_help=False,
    )
    parser.add_argument(
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the commands without running them or saving config.",
    )
    return parser


def split_global_options(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Split argv into leading global options and the command tokens.
    """

    index = 0
    while index < len(argv) and argv[index] in GLOBAL_OPTIONS:
        index += 1
    return list(argv[:index]), list(argv[index:])


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    options, tokens = split_global_options(argv)
    args = build_arg_parser().parse_args(options)

    config = RunConfig(
        verbosity=args.verbose,
        dry_run=args.dry_run,
        config_path=DEFAULT_CONFIG_PATH,
    )

    configure_logging(verbosity=config.verbosity)

    try:
        run_command(tokens, config)
    except KeyboardInterrupt:
        return 130
    except GerritCliError as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
