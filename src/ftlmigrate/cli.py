"""Command-line entry point.

Usage:
    ftlmigrate --ftl-dir locale/en --ftl-file main.ftl \\
        --po-file messages.po --locale-dir locale [--trial-run]

Exit Codes:
    0: Every locale migrated or was skipped
    1: At least one locale failed
    2: Fatal error (unreadable source, missing locale root, invalid options)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from ftlmigrate.config import DEFAULT_EXCLUDED_LOCALES, MergeOptions, MigrationConfig
from ftlmigrate.enums import QuoteMode
from ftlmigrate.errors import MigrationError
from ftlmigrate.pipeline import MigrationSummary, run_migration

__all__ = ["build_config", "main", "parse_args"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOCALE_FAILED = 1
EXIT_FATAL = 2


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="ftlmigrate",
        description="Migrate gettext (.po) translations into Fluent (.ftl) resources.",
    )
    parser.add_argument(
        "--ftl-dir",
        type=Path,
        required=True,
        help="Directory containing the canonical English .ftl file",
    )
    parser.add_argument(
        "--ftl-file",
        required=True,
        help="Name of the canonical .ftl file (also the output file name)",
    )
    parser.add_argument(
        "--po-file",
        required=True,
        help="Name of the .po file holding current translations",
    )
    parser.add_argument(
        "--locale-dir",
        type=Path,
        required=True,
        help="Locale root with one directory per locale, each with an LC_MESSAGES directory",
    )
    parser.add_argument(
        "--other-ftl-file",
        help="Translated .ftl file in each locale directory to recover term translations from",
    )
    parser.add_argument(
        "--trial-run",
        action="store_true",
        help="Log merged output for the first two locales instead of writing files",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Append only new message ids to existing locale files",
    )

    merge_group = parser.add_argument_group("merge options")
    merge_group.add_argument(
        "--no-terms",
        action="store_true",
        help="Do not substitute or emit term references",
    )
    merge_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Drop the license header and message comments from output",
    )
    merge_group.add_argument(
        "--quote-mode",
        type=QuoteMode,
        choices=list(QuoteMode),
        default=QuoteMode.GLOBAL,
        help="Quotation mark normalization (default: %(default)s)",
    )
    merge_group.add_argument(
        "--brand-term",
        action="append",
        dest="brand_terms",
        metavar="NAME",
        help="Term name whose 'lowercase' variant is used (repeatable; default: brand-name)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="LOCALE",
        help="Additional locale directory to leave untouched (repeatable)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")

    return parser.parse_args(args)


def build_config(parsed: argparse.Namespace) -> MigrationConfig:
    """Translate parsed arguments into a MigrationConfig.

    Raises:
        ConfigError: If the arguments describe an invalid configuration
    """
    merge = MergeOptions(
        terms=not parsed.no_terms,
        comments=not parsed.no_comments,
        quote_mode=parsed.quote_mode,
        brand_terms=tuple(parsed.brand_terms) if parsed.brand_terms else MergeOptions().brand_terms,
    )
    excluded = tuple(dict.fromkeys([*DEFAULT_EXCLUDED_LOCALES, *parsed.exclude]))
    return MigrationConfig(
        ftl_dir=parsed.ftl_dir,
        ftl_file=parsed.ftl_file,
        po_file=parsed.po_file,
        locale_dir=parsed.locale_dir,
        other_ftl_file=parsed.other_ftl_file,
        trial_run=parsed.trial_run,
        append=parsed.append,
        merge=merge,
        excluded_locales=excluded,
    )


def _configure_logging(parsed: argparse.Namespace) -> None:
    if parsed.verbose:
        level = logging.DEBUG
    elif parsed.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _report(summary: MigrationSummary) -> None:
    for result in summary.get_skipped():
        logger.warning("Skipped %s: %s", result.locale, result.reason)
    for result in summary.get_failed():
        logger.error("Failed %s: %s", result.locale, result.error)


def main(args: Sequence[str] | None = None) -> int:
    """Run the migration from the command line.

    Returns:
        Process exit code
    """
    parsed = parse_args(args)
    _configure_logging(parsed)

    try:
        config = build_config(parsed)
        summary = run_migration(config)
    except (MigrationError, OSError) as e:
        logger.error("Migration aborted: %s", e)
        return EXIT_FATAL

    _report(summary)
    return EXIT_LOCALE_FAILED if summary.has_failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
