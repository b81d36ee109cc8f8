"""Escaping rules for element content and attribute values.

Only the four characters that are significant inside XML text and quoted
attribute values are touched. An ampersand that already introduces a named
or numeric character reference is left alone, which makes escaping safe to
apply twice.
"""

import re
from typing import Dict

# Characters that trigger escaping at all
SPECIAL_CHARACTERS = frozenset('&<>"')

# Ampersand that does not already start &name; &#123; or &#x1F;
_BARE_AMPERSAND = re.compile(
    r"&(?!(?:[A-Za-z_][\w.\-]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)"
)

# Applied in order after ampersands
_REPLACEMENTS: Dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
}

_COMMENT_DOUBLE_DASH = "--"


def needs_escaping(text: str) -> bool:
    """Check whether text contains any character escape_xml would replace."""
    return any(char in SPECIAL_CHARACTERS for char in text)


def escape_xml(text: str) -> str:
    """Escape ``& < > "`` for use as element content or attribute value.

    Args:
        text: Text to escape

    Returns:
        Escaped text; text without special characters is returned unchanged
    """
    if not needs_escaping(text):
        return text

    escaped = _BARE_AMPERSAND.sub("&amp;", text)
    for char, entity in _REPLACEMENTS.items():
        escaped = escaped.replace(char, entity)
    return escaped


def normalize_comment_text(text: str) -> str:
    """Rewrite every ``--`` as ``- -`` so text is legal inside a comment."""
    # A single pass leaves "---" as "- --"; repeat until stable.
    while _COMMENT_DOUBLE_DASH in text:
        text = text.replace(_COMMENT_DOUBLE_DASH, "- -")
    return text
