"""Enumerations for ftlmigrate type-safe constants.

Uses StrEnum so members compare equal to their string values, which lets
argparse choices and log output use them directly.

Python 3.13+.
"""

from enum import StrEnum


class QuoteMode(StrEnum):
    """How quotation marks are normalized when matching and emitting text.

    StrEnum provides automatic string conversion: str(QuoteMode.GLOBAL) == "global"
    """

    GLOBAL = "global"
    """Fold and curl every quotation mark in the string."""

    FIRST = "first"
    """Legacy behavior: only the first occurrence of each mark is replaced."""

    OFF = "off"
    """No folding when matching and no curling on output."""


class LocaleStatus(StrEnum):
    """Outcome of migrating a single locale.

    StrEnum provides automatic string conversion: str(LocaleStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Locale merged and written (or logged, in a trial run)."""

    SKIPPED = "skipped"
    """Locale not processed: no catalog, or beyond the trial run limit."""

    FAILED = "failed"
    """Reading, parsing or writing the locale raised an error."""


class LineKind(StrEnum):
    """Origin of a line in a merged resource."""

    TERM = "term"
    TRANSLATED = "translated"
    FALLBACK = "fallback"


__all__ = [
    "LineKind",
    "LocaleStatus",
    "QuoteMode",
]
