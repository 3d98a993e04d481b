"""Migration orchestration across all locales.

Reads the canonical resource once, then merges and writes each locale
independently. A locale that fails does not stop the run: its outcome is
recorded in the returned MigrationSummary.

Components:
    LocaleResult - Immutable outcome of migrating a single locale
    MigrationSummary - Immutable aggregate of all locale outcomes
    run_migration - Run the pipeline for a MigrationConfig

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ftlmigrate.catalog import load_term_translations, load_translations
from ftlmigrate.config import MigrationConfig
from ftlmigrate.enums import LocaleStatus
from ftlmigrate.errors import MigrationError, SourceError
from ftlmigrate.extraction import extract_source
from ftlmigrate.merger import MergeResult, merge_locale
from ftlmigrate.records import LocaleCode, SourceResource, TermTranslation
from ftlmigrate.writer import Rejection, copy_passthrough, discover_locales, write_locale

__all__ = [
    "LocaleResult",
    "MigrationSummary",
    "load_source",
    "migrate_locale",
    "run_migration",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleResult:
    """Outcome of migrating one locale.

    Attributes:
        locale: Locale directory name
        status: Success, skipped or failed
        reason: Why the locale was skipped (None otherwise)
        error: Exception if status is FAILED, None otherwise
        merge: Merged resource, when merging completed
        written_ids: Ids written to the output file (empty in a trial run)
        output_path: File written, None in a trial run or on failure
    """

    locale: LocaleCode
    status: LocaleStatus
    reason: str | None = None
    error: Exception | None = None
    merge: MergeResult | None = None
    written_ids: tuple[str, ...] = ()
    output_path: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == LocaleStatus.SUCCESS

    @property
    def is_skipped(self) -> bool:
        return self.status == LocaleStatus.SKIPPED

    @property
    def is_failed(self) -> bool:
        return self.status == LocaleStatus.FAILED


@dataclass(frozen=True, slots=True)
class MigrationSummary:
    """Immutable aggregate of a migration run.

    Attributes:
        results: Per-locale outcomes, in processing order
        ignored: Locale root entries that were not treated as locales
        passthrough: Files the canonical resource was copied to
    """

    results: tuple[LocaleResult, ...]
    ignored: tuple[Rejection[str], ...] = ()
    passthrough: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return (
            f"MigrationSummary(total={self.total}, "
            f"ok={self.successful}, "
            f"skipped={self.skipped}, "
            f"failed={self.failed})"
        )

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.is_success)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.is_skipped)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.is_failed)

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    @property
    def all_successful(self) -> bool:
        """True if no locale failed (skipped locales do not count as failures)."""
        return self.failed == 0

    def get_successful(self) -> tuple[LocaleResult, ...]:
        return tuple(r for r in self.results if r.is_success)

    def get_skipped(self) -> tuple[LocaleResult, ...]:
        return tuple(r for r in self.results if r.is_skipped)

    def get_failed(self) -> tuple[LocaleResult, ...]:
        return tuple(r for r in self.results if r.is_failed)

    def get_by_locale(self, locale: LocaleCode) -> LocaleResult | None:
        for result in self.results:
            if result.locale == locale:
                return result
        return None


def load_source(config: MigrationConfig) -> SourceResource:
    """Read and extract the canonical English resource.

    Raises:
        SourceError: If the source file cannot be read
    """
    path = config.source_path
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read source resource {path}: {e}"
        raise SourceError(msg) from e
    return extract_source(text, brand_terms=config.merge.brand_terms)


def _load_term_translations(
    config: MigrationConfig,
    locale: LocaleCode,
    source: SourceResource,
) -> tuple[TermTranslation, ...]:
    path = config.other_ftl_path(locale)
    if path is None or not config.merge.terms:
        return ()
    if not path.is_file():
        logger.debug("No secondary resource for %s at %s", locale, path)
        return ()
    return load_term_translations(
        path.read_text(encoding="utf-8"),
        source.terms,
        brand_terms=config.merge.brand_terms,
    )


def migrate_locale(
    config: MigrationConfig,
    locale: LocaleCode,
    source: SourceResource,
) -> LocaleResult:
    """Merge and persist (or, in a trial run, log) one locale.

    Errors are caught and reported on the returned result.
    """
    catalog_path = config.catalog_path(locale)
    if not catalog_path.is_file():
        logger.warning("Skipping %s: no catalog at %s", locale, catalog_path)
        return LocaleResult(locale, LocaleStatus.SKIPPED, reason=f"missing catalog {catalog_path}")

    try:
        entries = load_translations(catalog_path.read_bytes(), locale=locale)
        term_translations = _load_term_translations(config, locale, source)
        merged = merge_locale(
            source,
            entries,
            term_translations=term_translations,
            options=config.merge,
        )

        if config.trial_run:
            logger.info("Trial run output for %s:\n%s", locale, merged.render())
            return LocaleResult(locale, LocaleStatus.SUCCESS, merge=merged)

        outcome = write_locale(
            config.output_path(locale),
            merged,
            locale=locale,
            append=config.append,
        )
    except (MigrationError, OSError, ValueError) as e:
        logger.error("Failed to migrate %s: %s", locale, e)
        return LocaleResult(locale, LocaleStatus.FAILED, error=e)

    logger.info("Migrated %s: %r", locale, merged)
    return LocaleResult(
        locale,
        LocaleStatus.SUCCESS,
        merge=merged,
        written_ids=outcome.written_ids,
        output_path=str(outcome.path),
    )


def run_migration(config: MigrationConfig) -> MigrationSummary:
    """Migrate every locale under the configured locale root.

    Args:
        config: Run configuration

    Returns:
        MigrationSummary with one result per discovered locale

    Raises:
        SourceError: If the canonical resource cannot be read
        FileNotFoundError: If the locale root does not exist
        LocaleWriteError: If copying the source into a passthrough locale fails
    """
    source = load_source(config)
    logger.info(
        "Loaded %d messages and %d terms from %s",
        len(source.messages),
        len(source.terms),
        config.source_path,
    )

    discovered = discover_locales(config.locale_dir, excluded=config.excluded_locales)

    results: list[LocaleResult] = []
    for position, locale in enumerate(discovered.kept):
        if config.trial_run and position >= config.trial_locale_limit:
            results.append(LocaleResult(locale, LocaleStatus.SKIPPED, reason="trial run limit"))
            continue
        results.append(migrate_locale(config, locale, source))

    passthrough: tuple[str, ...] = ()
    if config.trial_run:
        logger.info("Trial run: not copying source to %s", ", ".join(config.passthrough_locales))
    else:
        copied = copy_passthrough(
            config.source_path,
            config.locale_dir,
            config.passthrough_locales,
            config.ftl_file,
        )
        passthrough = tuple(str(path) for path in copied)

    summary = MigrationSummary(
        results=tuple(results),
        ignored=discovered.rejected,
        passthrough=passthrough,
    )
    logger.info("Migration finished: %r", summary)
    return summary
