"""
Main orchestrator for contentlint

Coordinates configuration, file discovery, the check engine and reporting.
"""

import argparse
import os
import pathlib
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, TextIO

from . import __version__
from .config import ConfigError, describe, load_config
from .engine import CheckEngine
from .fileset import resolve_patterns
from .reporters import (
    EXIT_CONFIG_ERROR,
    EXIT_INTERNAL_ERROR,
    EXIT_INTERRUPTED,
    determine_exit_code,
    log,
    output_github,
    output_human,
    output_json,
    output_sarif,
)

FORMATS = ("human", "github")


@dataclass
class LintArgs:
    """Arguments for a contentlint run. ``None`` means "not given here"."""
    patterns: Optional[List[str]] = None
    config_path: Optional[pathlib.Path] = None
    check_utf8: Optional[bool] = None
    check_single_trailing_newline: Optional[bool] = None
    check_trailing_whitespace: Optional[bool] = None
    jobs: Optional[int] = None
    output_format: Optional[str] = None
    json_output: Optional[pathlib.Path] = None
    sarif_output: Optional[pathlib.Path] = None
    verbose: bool = False

    def overrides(self) -> Dict[str, Any]:
        """Settings given on the command line, for the top config layer."""
        return {
            "patterns": self.patterns or None,
            "check_utf8": self.check_utf8,
            "check_single_trailing_newline": self.check_single_trailing_newline,
            "check_trailing_whitespace": self.check_trailing_whitespace,
            "jobs": self.jobs,
        }


def default_format(environ: Mapping[str, str]) -> str:
    return "github" if environ.get("GITHUB_ACTIONS") == "true" else "human"


def run_lint(
    args: LintArgs,
    environ: Optional[Mapping[str, str]] = None,
    root: Optional[pathlib.Path] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Run contentlint and return the process exit code.

    Returns:
        0: No issues
        2: Configuration error
        3: Issues found
        10: Internal error
    """
    env = os.environ if environ is None else environ
    root = root or pathlib.Path.cwd()
    out = stdout or sys.stdout

    try:
        config = load_config(args.overrides(), config_path=args.config_path, root=root, environ=env)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        for line in describe(config):
            log(f"config {line}", args.verbose)

        unmatched: List[str] = []
        paths = resolve_patterns(config.patterns, root=root, unmatched=unmatched)
        for pattern in unmatched:
            log(f"Pattern matched no files: {pattern}", args.verbose)
        log(f"Found {len(paths)} files to check", args.verbose)

        result = CheckEngine(config, root=root).run(paths)

        if args.verbose:
            for file_outcome in result.files:
                status = "skipped (not UTF-8)" if file_outcome.skipped else file_outcome.outcome.value
                log(f"{file_outcome.path}: {status}")

        if args.json_output:
            output_json(result, args.json_output, __version__)
        if args.sarif_output:
            output_sarif(result, args.sarif_output, __version__)

        if (args.output_format or default_format(env)) == "github":
            output_github(result, out)
        else:
            output_human(result, out)

        return determine_exit_code(result)

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Internal error: {str(e)}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc(file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser for contentlint."""
    parser = argparse.ArgumentParser(
        prog="contentlint",
        description="Check files for valid UTF-8, Unix line endings, a single trailing newline "
                    "and no trailing whitespace"
    )

    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Glob patterns of files to check (prefix with ! to exclude)"
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        type=pathlib.Path,
        help="Read settings from FILE (.yaml, .yml or .toml)"
    )

    # Optional checks; line-ending checking is always on
    parser.add_argument(
        "--check-utf8",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report files that are not valid UTF-8"
    )
    parser.add_argument(
        "--check-single-trailing-newline",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Require exactly one newline at the end of non-empty files"
    )
    parser.add_argument(
        "--check-trailing-whitespace",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report lines ending in whitespace"
    )
    parser.add_argument(
        "--jobs", "-j",
        type=int,
        metavar="N",
        help="Check files on N worker threads"
    )

    # Output options
    parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Output format (default: github inside GitHub Actions, else human)"
    )
    parser.add_argument(
        "--json",
        metavar="FILE",
        type=pathlib.Path,
        help="Also write findings as JSON to FILE"
    )
    parser.add_argument(
        "--sarif",
        metavar="FILE",
        type=pathlib.Path,
        help="Also write findings as SARIF to FILE"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"contentlint {__version__}"
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> LintArgs:
    """Parse command line arguments."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    return LintArgs(
        patterns=args.patterns or None,
        config_path=args.config,
        check_utf8=args.check_utf8,
        check_single_trailing_newline=args.check_single_trailing_newline,
        check_trailing_whitespace=args.check_trailing_whitespace,
        jobs=args.jobs,
        output_format=args.format,
        json_output=args.json,
        sarif_output=args.sarif,
        verbose=args.verbose
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for contentlint."""
    args = parse_args(argv)
    try:
        return run_lint(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
