"""Translation loading: gettext catalogs and previously translated terms.

Catalogs are parsed with Babel's PO reader, which resolves escapes and joins
multi-line strings. Each translated entry becomes a TranslationEntry keyed by
its English msgid. In both msgid and msgstr, gettext ``%(name)s`` variables
are rewritten into Fluent ``{ $name }`` placeables so that msgids compare
equal to the placeholder text extracted from the canonical resource.

Python 3.13+.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Collection, Iterable

from babel.messages.pofile import PoFileError, read_po
from ftllexengine import parse_ftl
from ftllexengine.syntax.ast import Term

from ftlmigrate.errors import CatalogError
from ftlmigrate.extraction import term_text
from ftlmigrate.records import FTLSource, LocaleCode, TermRecord, TermTranslation, TranslationEntry

__all__ = [
    "PO_VARIABLE_PATTERN",
    "convert_po_variables",
    "load_term_translations",
    "load_translations",
]

logger = logging.getLogger(__name__)

# gettext named substitution: %(name)s
PO_VARIABLE_PATTERN = re.compile(r"%\((?P<name>[^()\s]+?)\)s")


def convert_po_variables(text: str) -> str:
    """Rewrite every ``%(name)s`` variable as a Fluent ``{ $name }`` placeable.

    Handles any number of variables, in any order, including repeats.

    Example:
        >>> convert_po_variables("%(count)s files in %(folder)s")
        '{ $count } files in { $folder }'
    """
    return PO_VARIABLE_PATTERN.sub(lambda match: f"{{ ${match['name']} }}", text)


def _first_form(value: str | tuple[str, ...] | list[str] | None) -> str:
    """Return the singular form of a possibly pluralized msgid/msgstr."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value[0] if value else ""


def load_translations(data: bytes, *, locale: LocaleCode | None = None) -> tuple[TranslationEntry, ...]:
    """Parse a gettext catalog into translation entries.

    Args:
        data: Raw bytes of the ``.po`` file
        locale: Locale the catalog belongs to (used in errors and logs)

    Returns:
        Entries in catalog order; untranslated entries and the catalog
        header are omitted

    Raises:
        CatalogError: If Babel cannot parse the catalog
    """
    try:
        catalog = read_po(io.BytesIO(data), abort_invalid=False)
    except (PoFileError, ValueError) as e:
        msg = f"Failed to parse catalog: {e}"
        raise CatalogError(msg, locale=locale) from e

    entries: list[TranslationEntry] = []
    untranslated = 0
    for message in catalog:
        english = _first_form(message.id)
        if not english:
            continue
        translated = _first_form(message.string)
        if not translated.strip():
            untranslated += 1
            continue
        entries.append(
            TranslationEntry(
                english_key=convert_po_variables(english),
                translated_text=convert_po_variables(translated),
            )
        )

    logger.debug(
        "Loaded %d translations (%d untranslated) for locale: %s",
        len(entries),
        untranslated,
        locale,
    )
    return tuple(entries)


def load_term_translations(
    source: FTLSource,
    terms: Iterable[TermRecord],
    *,
    brand_terms: Collection[str] = (),
) -> tuple[TermTranslation, ...]:
    """Recover translated term values from an already translated resource.

    Only terms that also exist in the canonical resource are returned; the
    value is taken with the same rules as canonical term extraction.

    Args:
        source: FTL source of the locale's secondary resource
        terms: Canonical term records
        brand_terms: Term names whose ``lowercase`` variant is preferred

    Returns:
        Term translations in the order they appear in ``source``
    """
    known = {term.id for term in terms}
    translations: list[TermTranslation] = []
    for entry in parse_ftl(source).entries:
        if not isinstance(entry, Term):
            continue
        term_id = f"-{entry.id.name}"
        if term_id not in known:
            logger.debug("Ignoring term not present in source: %s", term_id)
            continue
        text = term_text(entry, brand_terms)
        if text:
            translations.append(TermTranslation(id=term_id, translated_text=text))
    return tuple(translations)
