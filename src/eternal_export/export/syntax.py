"""
Escaping helpers for the emitted source languages.

Prop values are arbitrary user text; these helpers make sure quotes,
braces, angle brackets and template delimiters survive the trip into
generated markup and scripts without breaking the surrounding syntax.
"""

from __future__ import annotations

import json

# Characters each markup dialect treats specially inside text content
_HTML_TEXT = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}
_BRACES = {"{": "&#123;", "}": "&#125;"}


def js_string(value: str, quote: str = '"') -> str:
    """JavaScript string literal for ``value`` using the given quote character."""
    encoded = json.dumps(value, ensure_ascii=False)
    if quote == '"':
        return encoded
    inner = encoded[1:-1].replace('\\"', '"').replace("'", "\\'")
    return f"'{inner}'"


def js_literal(value: str | int | float | bool, quote: str = '"') -> str:
    """JavaScript literal for a prop value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return json.dumps(value)
    return js_string(value, quote)


def escape_template_literal(text: str) -> str:
    """Escape text for embedding inside a JavaScript template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def escape_text(text: str, braces: bool = False, at_sign: bool = False) -> str:
    """
    Escape text content for HTML-like templates.

    Args:
        text: Raw text
        braces: Also escape ``{``/``}`` (interpolation delimiters)
        at_sign: Also escape ``@`` (block syntax delimiter)
    """
    out = []
    for ch in text:
        if ch in _HTML_TEXT:
            out.append(_HTML_TEXT[ch])
        elif braces and ch in _BRACES:
            out.append(_BRACES[ch])
        elif at_sign and ch == "@":
            out.append("&#64;")
        else:
            out.append(ch)
    return "".join(out)


def escape_attribute(value: str, braces: bool = False) -> str:
    """Escape a value for a double-quoted HTML-like attribute."""
    return escape_text(value, braces=braces).replace('"', "&quot;")


def needs_jsx_expression(text: str) -> bool:
    """JSX text cannot contain these characters literally."""
    return any(c in text for c in "{}<>&")
