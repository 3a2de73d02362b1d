"""
String utility functions for the export engine.

Provides the identifier transformations used when naming generated
components, classes, props and files.
"""

from __future__ import annotations

import re

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Words that cannot be used as identifiers in the emitted JavaScript/TypeScript
JS_RESERVED_WORDS = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
        "let",
        "static",
        "await",
    }
)

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def split_words(value: str) -> list[str]:
    """
    Split an identifier-ish string into lowercase words.

    Examples:
        >>> split_words("profile-card")
        ['profile', 'card']
        >>> split_words("heroTitle_2")
        ['hero', 'title', '2']
    """
    words: list[str] = []
    for chunk in _WORD_SPLIT.split(value):
        if chunk:
            words.extend(w.lower() for w in _CAMEL_BOUNDARY.split(chunk) if w)
    return words


def to_pascal_case(value: str) -> str:
    """
    Convert to PascalCase.

    Examples:
        >>> to_pascal_case("profile-card")
        'ProfileCard'
    """
    return "".join(w[:1].upper() + w[1:] for w in split_words(value))


def to_camel_case(value: str) -> str:
    """
    Convert to camelCase.

    Examples:
        >>> to_camel_case("hero-title")
        'heroTitle'
    """
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """
    Convert to kebab-case.

    Examples:
        >>> to_kebab_case("ProfileCard")
        'profile-card'
        >>> to_kebab_case("fontSize")
        'font-size'
    """
    return "-".join(split_words(value))


def is_js_identifier(value: str) -> bool:
    """Check that a string is usable as a JavaScript identifier."""
    return bool(_JS_IDENTIFIER.match(value)) and value not in JS_RESERVED_WORDS


def safe_identifier(value: str, prefix: str = "n") -> str:
    """
    camelCase identifier that is always a valid JS name.

    Names starting with a digit get ``prefix`` prepended; reserved words get
    an underscore suffix.
    """
    ident = to_camel_case(value)
    if not ident:
        return prefix
    if ident[0].isdigit():
        ident = prefix + ident[:1].upper() + ident[1:]
    if ident in JS_RESERVED_WORDS:
        ident += "_"
    return ident
