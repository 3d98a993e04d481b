"""Migration configuration.

A single immutable configuration object is built once (by the CLI or by the
caller) and passed explicitly into each stage of the pipeline.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ftlmigrate.enums import QuoteMode
from ftlmigrate.errors import ConfigError
from ftlmigrate.records import LocaleCode

__all__ = [
    "DEFAULT_EXCLUDED_LOCALES",
    "DEFAULT_PASSTHROUGH_LOCALES",
    "MergeOptions",
    "MigrationConfig",
]

# Canonical/template directories; never translation targets
DEFAULT_EXCLUDED_LOCALES: tuple[LocaleCode, ...] = ("templates", "en", "en-US")

# Locale slots that receive a verbatim copy of the canonical resource
DEFAULT_PASSTHROUGH_LOCALES: tuple[LocaleCode, ...] = ("en", "templates")


@dataclass(frozen=True, slots=True)
class MergeOptions:
    """Policy switches for the merge stage.

    Attributes:
        terms: Substitute term references into candidates and emit terms
        comments: Emit the license header and attached message comments
        quote_mode: Quotation mark folding/curling policy
        brand_terms: Term names whose ``lowercase`` variant is preferred when
            the term value is a select expression
    """

    terms: bool = True
    comments: bool = True
    quote_mode: QuoteMode = QuoteMode.GLOBAL
    brand_terms: tuple[str, ...] = ("brand-name",)


@dataclass(frozen=True, slots=True)
class MigrationConfig:
    """Locations and switches for one migration run.

    Example:
        >>> config = MigrationConfig(
        ...     ftl_dir=Path("locale/en"),
        ...     ftl_file="main.ftl",
        ...     po_file="messages.po",
        ...     locale_dir=Path("locale"),
        ... )
        >>> config.catalog_path("fr")
        PosixPath('locale/fr/LC_MESSAGES/messages.po')
    """

    ftl_dir: Path
    ftl_file: str
    po_file: str
    locale_dir: Path
    other_ftl_file: str | None = None
    trial_run: bool = False
    trial_locale_limit: int = 2
    append: bool = False
    merge: MergeOptions = field(default_factory=MergeOptions)
    excluded_locales: tuple[LocaleCode, ...] = DEFAULT_EXCLUDED_LOCALES
    passthrough_locales: tuple[LocaleCode, ...] = DEFAULT_PASSTHROUGH_LOCALES
    messages_dir: str = "LC_MESSAGES"

    def __post_init__(self) -> None:
        """Normalize path fields and validate file names.

        Raises:
            ConfigError: If a file name is empty or contains a path separator,
                or the trial locale limit is not positive
        """
        object.__setattr__(self, "ftl_dir", Path(self.ftl_dir))
        object.__setattr__(self, "locale_dir", Path(self.locale_dir))

        names = {"ftl_file": self.ftl_file, "po_file": self.po_file}
        if self.other_ftl_file is not None:
            names["other_ftl_file"] = self.other_ftl_file
        for label, name in names.items():
            if not name or not name.strip():
                msg = f"{label} cannot be empty"
                raise ConfigError(msg)
            if "/" in name or "\\" in name:
                msg = f"{label} must be a file name, not a path: '{name}'"
                raise ConfigError(msg)

        if self.trial_locale_limit < 1:
            msg = f"trial_locale_limit must be positive, got {self.trial_locale_limit}"
            raise ConfigError(msg)

    @property
    def source_path(self) -> Path:
        """Path of the canonical English resource."""
        return self.ftl_dir / self.ftl_file

    def locale_path(self, locale: LocaleCode) -> Path:
        return self.locale_dir / locale

    def catalog_path(self, locale: LocaleCode) -> Path:
        """Path of the gettext catalog for a locale."""
        return self.locale_path(locale) / self.messages_dir / self.po_file

    def output_path(self, locale: LocaleCode) -> Path:
        """Path the merged resource for a locale is written to."""
        return self.locale_path(locale) / self.ftl_file

    def other_ftl_path(self, locale: LocaleCode) -> Path | None:
        """Path of the secondary translated resource, if one is configured."""
        if self.other_ftl_file is None:
            return None
        return self.locale_path(locale) / self.other_ftl_file
