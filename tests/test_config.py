"""Tests for MigrationConfig validation and derived paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from ftlmigrate.config import DEFAULT_EXCLUDED_LOCALES, MergeOptions, MigrationConfig
from ftlmigrate.enums import QuoteMode
from ftlmigrate.errors import ConfigError, MigrationError


def config(**overrides: object) -> MigrationConfig:
    params: dict[str, object] = {
        "ftl_dir": "locale/en",
        "ftl_file": "main.ftl",
        "po_file": "messages.po",
        "locale_dir": "locale",
    }
    params.update(overrides)
    return MigrationConfig(**params)  # type: ignore[arg-type]


class TestPaths:
    """Derived file locations."""

    def test_strings_normalized_to_paths(self) -> None:
        cfg = config()

        assert cfg.ftl_dir == Path("locale/en")
        assert cfg.locale_dir == Path("locale")

    def test_source_path(self) -> None:
        assert config().source_path == Path("locale/en/main.ftl")

    def test_catalog_path(self) -> None:
        assert config().catalog_path("fr") == Path("locale/fr/LC_MESSAGES/messages.po")

    def test_output_path(self) -> None:
        assert config().output_path("pt-BR") == Path("locale/pt-BR/main.ftl")

    def test_other_ftl_path(self) -> None:
        assert config().other_ftl_path("fr") is None
        assert config(other_ftl_file="brand.ftl").other_ftl_path("fr") == Path(
            "locale/fr/brand.ftl"
        )


class TestDefaults:
    def test_defaults(self) -> None:
        cfg = config()

        assert not cfg.trial_run
        assert cfg.trial_locale_limit == 2
        assert cfg.excluded_locales == DEFAULT_EXCLUDED_LOCALES
        assert cfg.merge == MergeOptions()
        assert cfg.merge.quote_mode is QuoteMode.GLOBAL


class TestValidation:
    """Invalid values raise ConfigError."""

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_file_name(self, name: str) -> None:
        with pytest.raises(ConfigError, match="cannot be empty"):
            config(ftl_file=name)

    @pytest.mark.parametrize("name", ["sub/main.ftl", "sub\\messages.po"])
    def test_path_rejected(self, name: str) -> None:
        with pytest.raises(ConfigError, match="not a path"):
            config(po_file=name)

    def test_other_ftl_file_validated(self) -> None:
        with pytest.raises(ConfigError):
            config(other_ftl_file="../brand.ftl")

    def test_trial_limit_positive(self) -> None:
        with pytest.raises(ConfigError, match="trial_locale_limit"):
            config(trial_locale_limit=0)

    def test_config_error_hierarchy(self) -> None:
        """ConfigError is both a MigrationError and a ValueError."""
        with pytest.raises(ValueError):
            config(ftl_file="")
        assert issubclass(ConfigError, MigrationError)
