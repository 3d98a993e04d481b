"""Exception hierarchy for the migration pipeline.

Fatal conditions (an unreadable canonical source, an invalid configuration)
propagate to the caller. Per-locale conditions are caught by the pipeline and
recorded on the locale's result instead of stopping the run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "CatalogError",
    "ConfigError",
    "LocaleWriteError",
    "MigrationError",
    "SourceError",
]


class MigrationError(Exception):
    """Base exception for all migration errors.

    Attributes:
        locale: Locale the error belongs to, or None for run-level errors
    """

    def __init__(self, message: str, *, locale: str | None = None) -> None:
        """Initialize MigrationError.

        Args:
            message: Human-readable error message
            locale: Locale code the error belongs to (optional)
        """
        super().__init__(message)
        self.locale = locale


class SourceError(MigrationError):
    """Canonical English resource is missing or unreadable.

    Fatal: without the source there is nothing to migrate.
    """


class CatalogError(MigrationError):
    """A locale's gettext catalog could not be parsed."""


class LocaleWriteError(MigrationError):
    """Writing a locale's output resource failed."""


class ConfigError(MigrationError, ValueError):
    """Invalid migration configuration."""
