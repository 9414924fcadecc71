"""Command-line front end: sort lines of text with numeric-aware ordering."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator
from typing import Any

from .compare import NumericStringComparator
from .errors import InvalidConfiguration
from .log import configure_logging
from .settings import CaseSensitivity, ComparisonConfig, load_config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Construct argument parser for the ``numsort`` command."""
    parser = argparse.ArgumentParser(
        prog="numsort",
        description="Sort lines so that embedded numbers order by value.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="input files; read standard input when omitted or '-'",
    )
    parser.add_argument("--settings", help="path to JSON/TOML comparison settings")
    parser.add_argument(
        "--lexicographic",
        action="store_true",
        help="compare digits as plain characters",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        help="treat letters differing only in case as equal",
    )
    parser.add_argument("--locale", help="locale used to collate text")
    parser.add_argument(
        "--backend",
        choices=("codepoint", "system", "icu"),
        help="collation backend",
    )
    parser.add_argument(
        "-r", "--reverse", action="store_true", help="reverse the result"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug output to stderr"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> ComparisonConfig:
    """Merge the settings file with command line overrides."""
    base = load_config(args.settings) if args.settings else ComparisonConfig()
    overrides: dict[str, Any] = {}
    if args.lexicographic:
        overrides["numeric"] = False
    if args.ignore_case:
        overrides["case_sensitivity"] = CaseSensitivity.INSENSITIVE
    if args.locale is not None:
        overrides["locale"] = args.locale
    if args.backend is not None:
        overrides["backend"] = args.backend
    if not overrides:
        return base
    return ComparisonConfig.model_validate(base.model_dump() | overrides)


def _read_lines(paths: Iterable[str]) -> Iterator[str]:
    for path in paths:
        if path == "-":
            yield from (line.rstrip("\r\n") for line in sys.stdin)
            continue
        with open(path, encoding="utf-8") as fh:
            yield from (line.rstrip("\r\n") for line in fh)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    log_dir = configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    if log_dir is not None:
        logger.debug("Writing logs to %s", log_dir)
    try:
        config = resolve_config(args)
        comparator = NumericStringComparator(config)
    except InvalidConfiguration as exc:
        sys.stderr.write(f"numsort: {exc}\n")
        return EXIT_CONFIG_ERROR
    try:
        lines = list(_read_lines(args.files or ["-"]))
    except (OSError, UnicodeDecodeError) as exc:
        logger.info("Cannot read input: %s", exc)
        sys.stderr.write(f"numsort: {exc}\n")
        return EXIT_INPUT_ERROR
    for line in comparator.sort(lines, reverse=args.reverse):
        sys.stdout.write(f"{line}\n")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
