"""Source extraction: canonical English resource to message and term records.

Walks the parsed Fluent AST of the canonical resource and rebuilds each
message's display text with embedded references rewritten into a canonical
placeholder form, so the text can be compared against gettext msgids:

    welcome = Welcome to { -brand }, { $name }!

becomes ``MessageRecord(id="welcome", english_text="Welcome to { -brand }, { $name }!")``.

Terms are collected separately and ordered longest English text first; the
merge stage relies on that order when substituting term references.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from ftllexengine import parse_ftl, serialize_ftl
from ftllexengine.enums import CommentType
from ftllexengine.syntax.ast import (
    Comment,
    Identifier,
    Junk,
    Message,
    MessageReference,
    NumberLiteral,
    Pattern,
    Placeable,
    Resource,
    SelectExpression,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
)

from ftlmigrate.records import (
    AttributeRecord,
    FTLSource,
    MessageRecord,
    SourceResource,
    TermRecord,
)

__all__ = [
    "LOWERCASE_VARIANT",
    "extract_resource",
    "extract_source",
    "pattern_text",
    "serialize_comment",
    "term_text",
]

logger = logging.getLogger(__name__)

# Variant key preferred for brand terms declared as select expressions
LOWERCASE_VARIANT = "lowercase"

# Placeholder id for serializing a lone placeable through a stub message
_STUB_ID = "stub"


def _serialize_placeable(placeable: Placeable) -> str:
    """Serialize a placeable the way ftllexengine writes it inside a pattern."""
    stub = Message(
        id=Identifier(name=_STUB_ID),
        value=Pattern(elements=(placeable,)),
        attributes=(),
    )
    text = serialize_ftl(Resource(entries=(stub,)))
    return text.removeprefix(f"{_STUB_ID} = ").removesuffix("\n")


def _placeable_text(placeable: Placeable) -> str:
    """Canonical placeholder text for one placeable (term arguments dropped)."""
    match placeable.expression:
        case TermReference(id=Identifier(name=name), attribute=None):
            return f"{{ -{name} }}"
        case TermReference(id=Identifier(name=name), attribute=Identifier(name=attr)):
            return f"{{ -{name}.{attr} }}"
        case VariableReference(id=Identifier(name=name)):
            return f"{{ ${name} }}"
        case MessageReference(id=Identifier(name=name), attribute=None):
            return f"{{ {name} }}"
        case MessageReference(id=Identifier(name=name), attribute=Identifier(name=attr)):
            return f"{{ {name}.{attr} }}"
        case StringLiteral(value=value):
            return value
        case NumberLiteral(raw=raw):
            return raw
        case _:
            # Function calls, selectors and nested placeables keep their FTL form
            return _serialize_placeable(placeable)


def pattern_text(pattern: Pattern) -> str:
    """Concatenate a pattern's elements into canonical display text.

    Args:
        pattern: Message, term or variant value

    Returns:
        Text with literal runs kept verbatim and placeables rewritten as
        ``{ -term }``, ``{ $variable }`` or ``{ message }``

    Note:
        Term references keep only their name and attribute. Call arguments
        are dropped: ``{ -brand(case: "gen") }`` becomes ``{ -brand }``, and
        a matched translation references the term in that reduced form.
    """
    parts: list[str] = []
    for element in pattern.elements:
        match element:
            case TextElement(value=value):
                parts.append(value)
            case Placeable():
                parts.append(_placeable_text(element))
    return "".join(parts)


def _pick_variant(term_name: str, select: SelectExpression, brand_terms: Collection[str]) -> Variant:
    if term_name in brand_terms:
        for variant in select.variants:
            if isinstance(variant.key, Identifier) and variant.key.name == LOWERCASE_VARIANT:
                return variant
    for variant in select.variants:
        if variant.default:
            return variant
    return select.variants[0]


def term_text(term: Term, brand_terms: Collection[str] = ()) -> str:
    """Return the English value of a term from its first pattern element.

    A term whose value starts with a select expression (case or gender
    variants) yields the ``lowercase`` variant when the term is listed in
    ``brand_terms``, and its default variant otherwise.

    Args:
        term: Parsed term entry
        brand_terms: Term names (without dash) known to be brand identifiers

    Returns:
        Literal text of the first element, or "" for an empty term
    """
    if not term.value.elements:
        return ""
    first = term.value.elements[0]
    match first:
        case TextElement(value=value):
            return value
        case Placeable(expression=SelectExpression() as select) if select.variants:
            variant = _pick_variant(term.id.name, select, brand_terms)
            return pattern_text(variant.value)
        case Placeable():
            return _placeable_text(first)
    return ""


def serialize_comment(content: str, comment_type: CommentType = CommentType.COMMENT) -> str:
    """Render comment content as FTL comment lines (no trailing newline)."""
    text = serialize_ftl(Resource(entries=(Comment(content=content, type=comment_type),)))
    return text.removesuffix("\n")


def extract_resource(resource: Resource, *, brand_terms: Collection[str] = ()) -> SourceResource:
    """Extract message and term records from a parsed canonical resource.

    Args:
        resource: Parsed canonical English resource
        brand_terms: Term names whose ``lowercase`` variant is preferred

    Returns:
        SourceResource with messages in file order, terms longest first and
        the leading standalone comment (license header), if present
    """
    messages: list[MessageRecord] = []
    terms: list[TermRecord] = []
    header: str | None = None

    for index, entry in enumerate(resource.entries):
        match entry:
            case Comment(content=content, type=comment_type) if index == 0:
                header = serialize_comment(content, comment_type)
            case Message(id=Identifier(name=name), value=Pattern() as value, comment=comment):
                text = pattern_text(value)
                if not text:
                    logger.debug("Skipping message with empty text: %s", name)
                    continue
                messages.append(
                    MessageRecord(
                        id=name,
                        english_text=text,
                        comment=comment.content if comment is not None else None,
                        attributes=tuple(
                            AttributeRecord(attribute.id.name, pattern_text(attribute.value))
                            for attribute in entry.attributes
                        ),
                    )
                )
            case Message(id=Identifier(name=name)):
                logger.debug("Skipping message without value: %s", name)
            case Term(id=Identifier(name=name)):
                terms.append(TermRecord.from_name(name, term_text(entry, brand_terms)))
            case Junk(content=content):
                logger.warning("Skipping unparseable content in source: %r", content[:60])

    # Longest first so "Product Suite" is substituted before "Product"
    terms.sort(key=lambda term: len(term.english_text), reverse=True)

    logger.debug("Extracted %d messages and %d terms", len(messages), len(terms))
    return SourceResource(messages=tuple(messages), terms=tuple(terms), header=header)


def extract_source(source: FTLSource, *, brand_terms: Collection[str] = ()) -> SourceResource:
    """Parse canonical FTL source and extract its records.

    Example:
        >>> result = extract_source("welcome = Welcome, { $name }!")
        >>> result.messages[0].english_text
        'Welcome, { $name }!'
    """
    return extract_resource(parse_ftl(source), brand_terms=brand_terms)
