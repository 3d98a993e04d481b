"""Catalog and resource fixtures shared across test modules."""

from __future__ import annotations

SOURCE_FTL = """\
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0.

-brand = Acme
-brand-suite = Acme Suite

# Shown on the landing page
welcome = Welcome, { $name }!
tagline = Powered by { -brand }
suite-intro = Try { -brand-suite } today
item-count = { $count }
farewell = Goodbye
"""

FR_PO = """\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "Welcome, %(name)s!"
msgstr "Bienvenue, %(name)s !"

msgid "Try Acme Suite today"
msgstr "Essayez Acme Suite aujourd'hui"

msgid "Goodbye"
msgstr ""
"""


def po_catalog(*pairs: tuple[str, str]) -> str:
    """Build minimal .po source from (msgid, msgstr) pairs."""
    blocks = ['msgid ""\nmsgstr ""\n"Content-Type: text/plain; charset=UTF-8\\n"\n']
    for msgid, msgstr in pairs:
        escaped_id = msgid.replace("\\", "\\\\").replace('"', '\\"')
        escaped_str = msgstr.replace("\\", "\\\\").replace('"', '\\"')
        blocks.append(f'msgid "{escaped_id}"\nmsgstr "{escaped_str}"\n')
    return "\n".join(blocks)
