"""Markup constants used by the navigator.

Elements are kept in lists to preserve a stable iteration order; the
navigator builds lowercase sets from them at construction time.

Usage:
    from htmlnav.constants import VOID_ELEMENTS, RAW_TEXT_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    - https://html.spec.whatwg.org/multipage/syntax.html#raw-text-elements
"""

# Elements that can never contain children
VOID_ELEMENTS = [
    "area",
    "base",
    "basefont",
    "bgsound",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "keygen",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
]

# Elements whose bodies are never tokenized
RAW_TEXT_ELEMENTS = [
    "script",
    "style",
]

# Non-alphanumeric characters allowed after the first character of a tag name
TAG_NAME_PUNCTUATION = frozenset("-_:")

# Non-alphanumeric characters allowed anywhere in an attribute name
ATTR_NAME_PUNCTUATION = frozenset("-_.")

# Prefix that marks a declaration-like tag (<!DOCTYPE ...>)
DECLARATION_PREFIX = "!"

WHITESPACE = frozenset(" \t\n\f")
