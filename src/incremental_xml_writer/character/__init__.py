"""Character handling for incremental XML writing.

This module provides the escaping rules applied to element content and
attribute values, and the normalization applied to comment text.
"""

from .escaping import (
    SPECIAL_CHARACTERS,
    escape_xml,
    needs_escaping,
    normalize_comment_text,
)

__all__ = [
    "SPECIAL_CHARACTERS",
    "escape_xml",
    "needs_escaping",
    "normalize_comment_text",
]
