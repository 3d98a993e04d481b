"""ftlmigrate - migrate gettext (.po) translations into Fluent (.ftl) resources.

Parses the canonical English Fluent resource, matches each message against a
locale's gettext catalog by English text, and writes a translated Fluent
resource per locale.

Public API:
    run_migration - Run the full pipeline for a MigrationConfig
    MigrationConfig - Locations and switches for a run
    MergeOptions - Merge policy (terms, comments, quote folding)
    MigrationSummary - Per-locale outcomes of a run
    extract_source - Canonical FTL source to message and term records
    load_translations - gettext catalog bytes to translation entries
    merge_locale - Merge one locale's entries into the canonical messages

Exceptions:
    MigrationError - Base exception class
    SourceError - Canonical resource unreadable (fatal)
    CatalogError - Locale catalog unparseable
    LocaleWriteError - Locale output could not be written
    ConfigError - Invalid configuration

Python 3.13+.
"""

from .catalog import convert_po_variables, load_term_translations, load_translations
from .config import MergeOptions, MigrationConfig
from .enums import LocaleStatus, QuoteMode
from .errors import CatalogError, ConfigError, LocaleWriteError, MigrationError, SourceError
from .extraction import extract_source
from .merger import MergeResult, merge_locale
from .pipeline import LocaleResult, MigrationSummary, run_migration
from .records import (
    AttributeRecord,
    MessageRecord,
    SourceResource,
    TermRecord,
    TermTranslation,
    TranslationEntry,
)

try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("ftlmigrate")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AttributeRecord",
    "CatalogError",
    "ConfigError",
    "LocaleResult",
    "LocaleStatus",
    "LocaleWriteError",
    "MergeOptions",
    "MergeResult",
    "MessageRecord",
    "MigrationConfig",
    "MigrationError",
    "MigrationSummary",
    "QuoteMode",
    "SourceError",
    "SourceResource",
    "TermRecord",
    "TermTranslation",
    "TranslationEntry",
    "__version__",
    "convert_po_variables",
    "extract_source",
    "load_term_translations",
    "load_translations",
    "merge_locale",
    "run_migration",
]
