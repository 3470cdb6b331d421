"""Command line interface for the locale linter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from . import __version__
from .config import ENV_PREFIX, LintSettings, load_settings
from .diff_core import Report, build_report
from .errors import LintError
from .loaders import PARSERS, load_locale_set
from .reporters import OUTPUT_FORMATS, PROGRAM, render

logger = logging.getLogger(__name__)

EXIT_SETUP_ERROR = 2


def lint(settings: LintSettings) -> Report:
    """Load the locale set described by *settings* and diff it."""

    locales = load_locale_set(settings.dir, settings.base, settings.formats)
    report = build_report(locales)
    logger.info(
        "Compared %d language(s) against '%s': %s",
        len(report.langs) - 1,
        report.base,
        report.totals.to_dict(),
    )
    return report


def run(settings: LintSettings, stream: TextIO | None = None) -> int:
    """Lint, print the rendered report and return the policy exit code.

    Setup problems propagate as :class:`~i18n_lint.errors.LintError` and
    nothing is printed.
    """

    report = lint(settings)
    print(render(report, settings.format), file=stream or sys.stdout)
    return settings.policy().exit_code(report)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description=(
            "Lint localization files (json/ron/yaml): missing keys, extra keys, "
            "placeholder mismatches."
        ),
        epilog=f"Every option can also be set with {ENV_PREFIX}<OPTION> variables.",
    )
    parser.add_argument(
        "--dir", type=Path, default=None, help="Locale directory (default: assets/i18n)"
    )
    parser.add_argument("--base", default=None, help="Base language (default: en)")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on any finding, not only missing keys",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--fail-on-extra",
        action="store_true",
        default=None,
        help="Fail when a language has keys the base does not",
    )
    parser.add_argument(
        "--fail-on-placeholder",
        action="store_true",
        default=None,
        help="Fail when placeholders differ from the base",
    )
    parser.add_argument(
        "--formats",
        default=None,
        help=(
            "Comma separated file extensions to scan "
            f"(default: json,ron; known: {','.join(sorted(PARSERS))})"
        ),
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))
    _configure_logging(args.verbose)
    try:
        settings = load_settings(
            args.config,
            dir=args.dir,
            base=args.base,
            strict=args.strict,
            format=args.format,
            fail_on_extra=args.fail_on_extra,
            fail_on_placeholder=args.fail_on_placeholder,
            formats=args.formats,
        )
        return run(settings)
    except LintError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_SETUP_ERROR


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
