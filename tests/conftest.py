"""Pytest configuration for the ftlmigrate test suite.

Hypothesis profiles:
- dev: Local development with 200 examples
- ci: CI runs with 50 examples, derandomized
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Shared fixtures build a locale tree on disk:

    <tmp>/locale/en/main.ftl
    <tmp>/locale/<locale>/LC_MESSAGES/messages.po
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from ftlmigrate.config import MigrationConfig
from tests.helpers.catalogs import FR_PO, SOURCE_FTL

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# LOCALE TREE FIXTURES
# =============================================================================


@pytest.fixture
def locale_root(tmp_path: Path) -> Path:
    """Locale root with the canonical source in en/ and a French catalog."""
    root = tmp_path / "locale"
    (root / "en").mkdir(parents=True)
    (root / "en" / "main.ftl").write_text(SOURCE_FTL, encoding="utf-8")
    (root / "templates").mkdir()
    catalog_dir = root / "fr" / "LC_MESSAGES"
    catalog_dir.mkdir(parents=True)
    (catalog_dir / "messages.po").write_text(FR_PO, encoding="utf-8")
    return root


@pytest.fixture
def add_locale(locale_root: Path) -> Callable[[str, str], Path]:
    """Factory adding a locale directory with the given catalog source."""

    def _add(locale: str, po_source: str) -> Path:
        catalog_dir = locale_root / locale / "LC_MESSAGES"
        catalog_dir.mkdir(parents=True)
        path = catalog_dir / "messages.po"
        path.write_text(po_source, encoding="utf-8")
        return path

    return _add


@pytest.fixture
def make_config(locale_root: Path) -> Callable[..., MigrationConfig]:
    """Factory for a MigrationConfig pointing at locale_root."""

    def _make(**overrides: object) -> MigrationConfig:
        params: dict[str, object] = {
            "ftl_dir": locale_root / "en",
            "ftl_file": "main.ftl",
            "po_file": "messages.po",
            "locale_dir": locale_root,
        }
        params.update(overrides)
        return MigrationConfig(**params)  # type: ignore[arg-type]

    return _make
