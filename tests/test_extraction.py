"""Tests for canonical resource extraction.

Covers placeholder canonicalization for every reference kind, term ordering,
brand term variant selection, comment capture and skipped entries.
"""

from __future__ import annotations

import logging

import pytest

from ftlmigrate.extraction import extract_source, pattern_text, serialize_comment, term_text
from ftlmigrate.records import AttributeRecord, TermRecord
from tests.helpers.catalogs import SOURCE_FTL


class TestMessagePlaceholders:
    """Embedded references are rewritten into canonical placeholder form."""

    def test_literal_text_only(self) -> None:
        """Plain text is kept verbatim."""
        result = extract_source("farewell = Goodbye")

        assert result.messages[0].id == "farewell"
        assert result.messages[0].english_text == "Goodbye"

    def test_variable_reference(self) -> None:
        """Variables become { $name }."""
        result = extract_source("welcome = Welcome, { $name }!")

        assert result.messages[0].english_text == "Welcome, { $name }!"

    def test_term_reference(self) -> None:
        """Terms become { -name }."""
        result = extract_source("-brand = Acme\ntagline = Powered by { -brand }")

        assert result.messages[0].english_text == "Powered by { -brand }"

    def test_message_reference(self) -> None:
        """Other message ids become { name }."""
        result = extract_source("app = Acme\nabout = About { app }")

        about = result.get_message("about")
        assert about is not None
        assert about.english_text == "About { app }"

    def test_message_attribute_reference(self) -> None:
        """Message attribute references keep the attribute."""
        result = extract_source("hint = See { menu.label }")

        assert result.messages[0].english_text == "See { menu.label }"

    def test_string_literal_is_inlined(self) -> None:
        """String literal placeables contribute their value."""
        result = extract_source('brace = Open { "{" } brace')

        assert result.messages[0].english_text == "Open { brace"

    def test_function_call_keeps_ftl_form(self) -> None:
        """Function calls are kept as serialized FTL."""
        result = extract_source("total = Total: { NUMBER($amount) }")

        assert result.messages[0].english_text == "Total: { NUMBER($amount) }"

    def test_bare_placeholder_message(self) -> None:
        """A message consisting of one placeable is still extracted."""
        result = extract_source("item-count = { $count }")

        assert result.messages[0].english_text == "{ $count }"

    def test_multiple_placeholders_in_order(self) -> None:
        """Elements are concatenated in source order."""
        result = extract_source("moved = { $count } files moved to { $folder } by { -brand }")

        assert result.messages[0].english_text == (
            "{ $count } files moved to { $folder } by { -brand }"
        )


class TestAttributes:
    """Message attributes are extracted alongside the value."""

    def test_attributes_captured_in_order(self) -> None:
        result = extract_source(
            "login = Log in\n    .title = Sign in to { -brand }\n    .accesskey = L\n"
        )

        assert result.messages[0].attributes == (
            AttributeRecord("title", "Sign in to { -brand }"),
            AttributeRecord("accesskey", "L"),
        )

    def test_message_without_attributes(self) -> None:
        assert extract_source("ok = OK").messages[0].attributes == ()

    def test_term_call_arguments_dropped(self) -> None:
        """Parameterized term references reduce to the bare term reference."""
        result = extract_source('x = By { -brand(case: "gen") }')

        assert result.messages[0].english_text == "By { -brand }"


class TestSkippedEntries:
    """Entries without usable text are not extracted."""

    def test_message_without_value_skipped(self) -> None:
        """Attribute-only messages have no text to translate."""
        result = extract_source("menu =\n    .label = Menu\nok = OK")

        assert [m.id for m in result.messages] == ["ok"]

    def test_junk_skipped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unparseable content is skipped and logged."""
        with caplog.at_level(logging.WARNING, logger="ftlmigrate.extraction"):
            result = extract_source("this is not fluent\nok = OK")

        assert [m.id for m in result.messages] == ["ok"]
        assert "unparseable" in caplog.text

    def test_messages_preserve_file_order(self) -> None:
        """Messages keep the order of the source file."""
        result = extract_source("c = C\na = A\nb = B")

        assert [m.id for m in result.messages] == ["c", "a", "b"]


class TestTerms:
    """Term extraction and ordering."""

    def test_term_record_fields(self) -> None:
        """Term ids keep the dash; references use placeholder form."""
        result = extract_source("-brand = Acme")

        assert result.terms == (TermRecord(id="-brand", reference="{ -brand }", english_text="Acme"),)

    def test_string_literal_term(self) -> None:
        """A term defined as a string literal yields the literal's value."""
        result = extract_source('-brand = { "Acme" }')

        assert result.terms[0].english_text == "Acme"

    def test_terms_sorted_longest_first(self) -> None:
        """Longer English text sorts first regardless of source order."""
        result = extract_source("-product = Product\n-suite = Product Suite\n-x = Big Product Suite")

        assert [t.english_text for t in result.terms] == [
            "Big Product Suite",
            "Product Suite",
            "Product",
        ]

    def test_brand_term_prefers_lowercase_variant(self) -> None:
        """Brand terms written as selectors use the lowercase variant."""
        source = (
            "-brand-name =\n"
            "    { $case ->\n"
            "       *[nominative] Acme\n"
            "        [lowercase] acme\n"
            "    }\n"
        )
        result = extract_source(source, brand_terms={"brand-name"})

        assert result.terms[0].english_text == "acme"

    def test_non_brand_selector_uses_default_variant(self) -> None:
        """Selector terms not listed as brands use the default variant."""
        source = (
            "-product =\n"
            "    { $case ->\n"
            "        [lowercase] widget\n"
            "       *[nominative] Widget\n"
            "    }\n"
        )
        result = extract_source(source, brand_terms={"brand-name"})

        assert result.terms[0].english_text == "Widget"

    def test_term_text_uses_first_element_only(self) -> None:
        """Only the first pattern element contributes to term text."""
        from ftllexengine import parse_ftl  # noqa: PLC0415
        from ftllexengine.syntax.ast import Term  # noqa: PLC0415

        entry = parse_ftl('-brand = { "Acme" } Corp').entries[0]
        assert isinstance(entry, Term)

        assert term_text(entry) == "Acme"


class TestComments:
    """License header and attached comments."""

    def test_leading_comment_becomes_header(self) -> None:
        """A standalone first comment is captured as the header."""
        result = extract_source(SOURCE_FTL)

        assert result.header == (
            "# This Source Code Form is subject to the terms of the Mozilla Public\n"
            "# License, v. 2.0."
        )

    def test_attached_comment_captured(self) -> None:
        """A comment directly above a message is kept on its record."""
        result = extract_source(SOURCE_FTL)

        welcome = result.get_message("welcome")
        assert welcome is not None
        assert welcome.comment == "Shown on the landing page"

    def test_no_header_without_leading_comment(self) -> None:
        """Resources starting with a message have no header."""
        result = extract_source("ok = OK\n\n# trailing note\n")

        assert result.header is None

    def test_serialize_comment_multiline(self) -> None:
        """Comment content is rendered one prefixed line per content line."""
        assert serialize_comment("first\nsecond") == "# first\n# second"


class TestPatternText:
    """Direct pattern rendering."""

    def test_pattern_text_of_message_value(self) -> None:
        """pattern_text concatenates text and placeholders."""
        from ftllexengine import parse_ftl  # noqa: PLC0415
        from ftllexengine.syntax.ast import Message  # noqa: PLC0415

        entry = parse_ftl("hello = Hello, { $user }").entries[0]
        assert isinstance(entry, Message)
        assert entry.value is not None

        assert pattern_text(entry.value) == "Hello, { $user }"
