"""Merge stage: align English messages with catalog translations.

For every English message the merger looks for a catalog entry whose msgid
equals the message text once term names in the msgid have been replaced by
term references. The first matching entry in catalog order wins; there is no
scoring of candidates.

Messages without a translation are dropped rather than shipped in English,
unless their whole text is a single placeable (``{ $count }``,
``{ -brand }``), which reads the same in every locale. Terms are the
exception to that rule: a term without a locale-specific value falls back to
its English text.

Attributes are matched the same way as values. A message is emitted with all
of its attributes or dropped as a whole.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ftlmigrate.config import MergeOptions
from ftlmigrate.enums import LineKind
from ftlmigrate.extraction import serialize_comment
from ftlmigrate.quotes import curl_quotes, fold_quotes, split_placeables
from ftlmigrate.records import (
    MessageRecord,
    MessageId,
    SourceResource,
    TermRecord,
    TermTranslation,
    TranslationEntry,
)

__all__ = [
    "CONTINUATION_INDENT",
    "MergeResult",
    "MergedLine",
    "is_bare_placeholder",
    "merge_locale",
    "render_lines",
    "substitute_terms",
]

logger = logging.getLogger(__name__)

# Indentation for continuation lines of multi-line values
CONTINUATION_INDENT = "    "

# Characters that start a variant key or an attribute at the beginning of a line
_SPECIAL_LINE_STARTS = ("[", "*", ".")


def _indent_value(text: str, indent: str) -> str:
    """Indent continuation lines, quoting a leading syntax character as a literal.

    Example:
        >>> _indent_value("Done\\n[note] here", "    ")
        'Done\\n    { "[" }note] here'
    """
    first, *rest = text.split("\n")
    lines = [first]
    for line in rest:
        stripped = line.lstrip(" ")
        if stripped[:1] in _SPECIAL_LINE_STARTS:
            line = f'{{ "{stripped[0]}" }}{stripped[1:]}'
        lines.append(indent + line)
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class MergedLine:
    """One entry of a merged resource.

    Attributes:
        id: Message id, or term id including the leading dash
        text: Value emitted after ``id =``
        kind: Whether the line is a term, a translation or an English fallback
        comment: Comment content emitted above the line, if any
        attributes: (name, text) pairs emitted as indented ``.name = text`` lines
    """

    id: MessageId
    text: str
    kind: LineKind
    comment: str | None = None
    attributes: tuple[tuple[str, str], ...] = ()

    def render(self) -> str:
        line = f"{self.id} = {_indent_value(self.text, CONTINUATION_INDENT)}"
        attribute_indent = CONTINUATION_INDENT * 2
        for name, text in self.attributes:
            line += f"\n{CONTINUATION_INDENT}.{name} = {_indent_value(text, attribute_indent)}"
        if self.comment:
            return f"{serialize_comment(self.comment)}\n{line}"
        return line


def render_lines(lines: Iterable[MergedLine]) -> str:
    """Render merged lines as FTL source, one entry per line."""
    return "".join(f"{line.render()}\n" for line in lines)


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Merged resource for one locale.

    Attributes:
        lines: Terms first, then messages in source order
        header: License header emitted at the top, if any
        dropped: Ids of messages omitted for lack of a translation
    """

    lines: tuple[MergedLine, ...]
    header: str | None = None
    dropped: tuple[MessageId, ...] = ()

    def __repr__(self) -> str:
        return (
            f"MergeResult(terms={self.term_count}, "
            f"translated={self.translated_count}, "
            f"fallback={self.fallback_count}, "
            f"dropped={len(self.dropped)})"
        )

    def _count(self, kind: LineKind) -> int:
        return sum(1 for line in self.lines if line.kind is kind)

    @property
    def term_count(self) -> int:
        return self._count(LineKind.TERM)

    @property
    def translated_count(self) -> int:
        return self._count(LineKind.TRANSLATED)

    @property
    def fallback_count(self) -> int:
        return self._count(LineKind.FALLBACK)

    @property
    def entry_ids(self) -> tuple[MessageId, ...]:
        """Ids of every emitted entry, in output order."""
        return tuple(line.id for line in self.lines)

    def render(self) -> str:
        """Render the full resource body, ending with a newline."""
        body = render_lines(self.lines)
        if self.header:
            return f"{self.header}\n\n{body}"
        return body


def is_bare_placeholder(text: str) -> bool:
    """Check whether text is exactly one placeable and nothing else.

    Example:
        >>> is_bare_placeholder("{ $count }")
        True
        >>> is_bare_placeholder("{ $count } items")
        False
    """
    stripped = text.strip()
    return (
        stripped.startswith("{")
        and stripped.endswith("}")
        and stripped.find("}") == len(stripped) - 1
    )


def substitute_terms(text: str, replacements: Sequence[tuple[str, str]]) -> str:
    """Replace term values with term references outside existing placeables.

    Replacements are applied in the given order, which must be longest value
    first: with "Product Suite" and "Product", the longer value has to be
    replaced before the shorter one can match inside it.

    Args:
        text: Catalog text to rewrite
        replacements: (value, reference) pairs, longest value first

    Returns:
        Text with every occurrence of each value replaced by its reference
    """
    for needle, reference in replacements:
        if not needle or needle not in text:
            continue
        text = "".join(
            segment if is_placeable else segment.replace(needle, reference)
            for segment, is_placeable in split_placeables(text)
        )
    return text


def _term_replacements(
    terms: Sequence[TermRecord],
    translated: dict[MessageId, str],
) -> tuple[list[tuple[str, str]], list[tuple[str, str]]]:
    """Build (value, reference) pairs for msgids and for msgstrs."""
    key_pairs = [(term.english_text, term.reference) for term in terms]
    text_pairs = [(translated.get(term.id, term.english_text), term.reference) for term in terms]
    # Translated values have their own lengths; keep longest-first ordering
    text_pairs.sort(key=lambda pair: len(pair[0]), reverse=True)
    return key_pairs, text_pairs


def _prepare_candidates(
    entries: Sequence[TranslationEntry],
    terms: Sequence[TermRecord],
    translated: dict[MessageId, str],
) -> dict[str, tuple[int, TranslationEntry]]:
    """Index term-substituted candidates by stripped msgid.

    Only the first candidate per msgid is kept, so lookups preserve
    first-match-wins in catalog order.
    """
    key_pairs, text_pairs = _term_replacements(terms, translated)
    index: dict[str, tuple[int, TranslationEntry]] = {}
    for position, entry in enumerate(entries):
        candidate = TranslationEntry(
            english_key=substitute_terms(entry.english_key, key_pairs),
            translated_text=substitute_terms(entry.translated_text, text_pairs),
        )
        index.setdefault(candidate.english_key.strip(), (position, candidate))
    return index


def _find_candidate(
    english_text: str,
    index: dict[str, tuple[int, TranslationEntry]],
    options: MergeOptions,
) -> TranslationEntry | None:
    exact = index.get(english_text.strip())
    folded = index.get(fold_quotes(english_text, options.quote_mode).strip())
    matches = [match for match in (exact, folded) if match is not None]
    if not matches:
        return None
    return min(matches, key=lambda match: match[0])[1]


def _merge_attributes(
    message: MessageRecord,
    index: dict[str, tuple[int, TranslationEntry]],
    options: MergeOptions,
) -> tuple[tuple[str, str], ...] | None:
    """Translate every attribute of a message, or return None if one is missing.

    Attributes follow the same rules as message values: a catalog match is
    curled, a bare placeholder is kept in English.
    """
    merged: list[tuple[str, str]] = []
    for attribute in message.attributes:
        candidate = _find_candidate(attribute.english_text, index, options)
        if candidate is not None:
            text = curl_quotes(candidate.translated_text, options.quote_mode)
            merged.append((attribute.name, text))
        elif is_bare_placeholder(attribute.english_text):
            merged.append((attribute.name, attribute.english_text))
        else:
            logger.debug("No translation for attribute: %s.%s", message.id, attribute.name)
            return None
    return tuple(merged)


def _term_lines(
    terms: Sequence[TermRecord],
    translated: dict[MessageId, str],
) -> list[MergedLine]:
    lines: list[MergedLine] = []
    for term in terms:
        text = translated.get(term.id, term.english_text)
        if not text:
            logger.debug("Skipping term with empty value: %s", term.id)
            continue
        lines.append(MergedLine(id=term.id, text=text, kind=LineKind.TERM))
    return lines


def merge_locale(
    source: SourceResource,
    entries: Sequence[TranslationEntry],
    *,
    term_translations: Iterable[TermTranslation] = (),
    options: MergeOptions | None = None,
) -> MergeResult:
    """Merge one locale's catalog entries into the canonical messages.

    Args:
        source: Records extracted from the canonical English resource
        entries: The locale's translation entries, in catalog order
        term_translations: Locale-specific term values, if known
        options: Merge policy (defaults to MergeOptions())

    Returns:
        MergeResult with terms first, then translated or fallback messages
        in source order, and the ids of dropped messages

    Example:
        >>> from ftlmigrate.extraction import extract_source
        >>> source = extract_source("welcome = Welcome, { $name }!")
        >>> entry = TranslationEntry("Welcome, { $name }!", "Bienvenue, { $name }!")
        >>> merge_locale(source, [entry]).render()
        'welcome = Bienvenue, { $name }!\\n'
    """
    options = options or MergeOptions()
    terms = source.terms if options.terms else ()
    translated = {term.id: term.translated_text for term in term_translations}

    index = _prepare_candidates(entries, terms, translated)

    lines = _term_lines(terms, translated)
    dropped: list[MessageId] = []
    for message in source.messages:
        comment = message.comment if options.comments else None
        attributes = _merge_attributes(message, index, options)
        candidate = _find_candidate(message.english_text, index, options)
        if attributes is None:
            # A message is emitted whole or not at all
            dropped.append(message.id)
        elif candidate is not None:
            text = curl_quotes(candidate.translated_text, options.quote_mode)
            lines.append(MergedLine(message.id, text, LineKind.TRANSLATED, comment, attributes))
        elif is_bare_placeholder(message.english_text):
            lines.append(
                MergedLine(message.id, message.english_text, LineKind.FALLBACK, comment, attributes)
            )
        else:
            logger.debug("No translation for message: %s", message.id)
            dropped.append(message.id)

    return MergeResult(
        lines=tuple(lines),
        header=source.header if options.comments else None,
        dropped=tuple(dropped),
    )
