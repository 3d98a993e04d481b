"""Quotation mark normalization.

Fluent sources use typographic quotes (``’ ‘ “ ”``) while gettext msgids
usually carry straight ones. Matching folds curly marks to straight marks;
emitting curls straight marks in translated text back into typographic form.

QuoteMode.FIRST reproduces the legacy behavior of replacing only the first
occurrence of each mark, QuoteMode.GLOBAL replaces every occurrence and
QuoteMode.OFF leaves text untouched.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from ftlmigrate.enums import QuoteMode

__all__ = [
    "curl_quotes",
    "fold_quotes",
    "split_placeables",
]

_FOLD_MAP = {
    "\u2019": "'",  # ’
    "\u2018": "'",  # ‘
    "\u201c": '"',  # “
    "\u201d": '"',  # ”
}
_FOLD_TABLE = str.maketrans(_FOLD_MAP)

_APOSTROPHE = "\u2019"
_OPEN_DOUBLE = "\u201c"
_CLOSE_DOUBLE = "\u201d"


def fold_quotes(text: str, mode: QuoteMode = QuoteMode.GLOBAL) -> str:
    """Replace curly quotation marks with straight ones.

    Example:
        >>> fold_quotes("Don’t say “no”")
        'Don\\'t say "no"'
    """
    match mode:
        case QuoteMode.GLOBAL:
            return text.translate(_FOLD_TABLE)
        case QuoteMode.FIRST:
            for curly, straight in _FOLD_MAP.items():
                text = text.replace(curly, straight, 1)
            return text
    return text


def split_placeables(text: str) -> list[tuple[str, bool]]:
    """Split text into (segment, is_placeable) runs.

    Nested placeables and braces inside string literals (``{ "{" }``) stay
    within their enclosing placeable.
    """
    segments: list[tuple[str, bool]] = []
    depth = 0
    start = 0
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"' and depth > 0:
            in_string = True
        elif char == "{":
            if depth == 0 and index > start:
                segments.append((text[start:index], False))
                start = index
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                segments.append((text[start : index + 1], True))
                start = index + 1
    if start < len(text):
        # An unclosed brace leaves the rest as a placeable
        segments.append((text[start:], depth > 0))
    return segments


def curl_quotes(text: str, mode: QuoteMode = QuoteMode.GLOBAL) -> str:
    """Replace straight quotation marks with typographic ones.

    ``'`` becomes ``’``; ``"`` alternates between ``“`` and ``”``. Text inside
    ``{ }`` placeables is left alone so string literals stay valid FTL.

    Example:
        >>> curl_quotes('It\\'s "{ -brand }" time')
        'It’s “{ -brand }” time'
    """
    if mode is QuoteMode.OFF:
        return text

    single_budget = 1 if mode is QuoteMode.FIRST else -1
    double_budget = 2 if mode is QuoteMode.FIRST else -1
    opening = True
    parts: list[str] = []

    for segment, is_placeable in split_placeables(text):
        if is_placeable:
            parts.append(segment)
            continue
        chars: list[str] = []
        for char in segment:
            if char == "'" and single_budget != 0:
                chars.append(_APOSTROPHE)
                single_budget -= 1
            elif char == '"' and double_budget != 0:
                chars.append(_OPEN_DOUBLE if opening else _CLOSE_DOUBLE)
                opening = not opening
                double_budget -= 1
            else:
                chars.append(char)
        parts.append("".join(chars))

    return "".join(parts)
