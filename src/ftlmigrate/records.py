"""Record types shared by the extraction, loading and merge stages.

All records are immutable and derived fresh from file contents on every run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "AttributeRecord",
    "FTLSource",
    "LocaleCode",
    "MessageId",
    "MessageRecord",
    "SourceResource",
    "TermRecord",
    "TermTranslation",
    "TranslationEntry",
]

type MessageId = str
"""Identifier for a Fluent message or term (e.g., 'welcome', '-brand')."""

type LocaleCode = str
"""Locale directory name (e.g., 'fr', 'pt-BR')."""

type FTLSource = str
"""Raw FTL source text as a Python string."""


@dataclass(frozen=True, slots=True)
class AttributeRecord:
    """English text of one message attribute (``.title = ...``)."""

    name: str
    english_text: str


@dataclass(frozen=True, slots=True)
class MessageRecord:
    """English message extracted from the canonical resource.

    Attributes:
        id: Fluent message identifier
        english_text: Display text with references rewritten as placeholders
            (``{ -term }``, ``{ $var }``, ``{ message }``)
        comment: Content of the ``#`` comment attached to the message, if any
        attributes: Attributes of the message, in source order
    """

    id: MessageId
    english_text: str
    comment: str | None = None
    attributes: tuple[AttributeRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class TermRecord:
    """Reusable named snippet (e.g., a brand name) from the canonical resource.

    Attributes:
        id: Term identifier including the leading dash (``-brand``)
        reference: Placeholder form used inside message text (``{ -brand }``)
        english_text: English value of the term
    """

    id: MessageId
    reference: str
    english_text: str

    @classmethod
    def from_name(cls, name: str, english_text: str) -> TermRecord:
        """Build a record from a bare term name (without the dash)."""
        return cls(id=f"-{name}", reference=f"{{ -{name} }}", english_text=english_text)


@dataclass(frozen=True, slots=True)
class TranslationEntry:
    """One translated catalog entry.

    Attributes:
        english_key: msgid text with escapes resolved, lines joined and
            ``%(name)s`` rewritten to ``{ $name }``
        translated_text: msgstr text with ``%(name)s`` rewritten to ``{ $name }``
    """

    english_key: str
    translated_text: str


@dataclass(frozen=True, slots=True)
class TermTranslation:
    """Locale-specific value of a term, mined from an already translated resource."""

    id: MessageId
    translated_text: str


@dataclass(frozen=True, slots=True)
class SourceResource:
    """Everything the merge stage needs from the canonical English resource.

    Attributes:
        messages: Message records in source order
        terms: Term records, longest English text first
        header: Leading standalone comment block (license header), if any
    """

    messages: tuple[MessageRecord, ...]
    terms: tuple[TermRecord, ...]
    header: str | None = None

    def get_message(self, message_id: MessageId) -> MessageRecord | None:
        """Return the message with the given id, or None."""
        for message in self.messages:
            if message.id == message_id:
                return message
        return None
