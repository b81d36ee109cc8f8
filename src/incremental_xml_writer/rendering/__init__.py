"""Renderers turning a document forest into text.

Key Components:
    PrettyRenderer: indented output, one markup fragment per line
    FastRenderer: flat output without whitespace or comments
"""

from .base import TreeRenderer
from .declaration import library_marker, xml_declaration
from .fast import FastRenderer
from .pretty import PrettyRenderer

__all__ = [
    "TreeRenderer",
    "FastRenderer",
    "PrettyRenderer",
    "library_marker",
    "xml_declaration",
]
