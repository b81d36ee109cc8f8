"""Public builder API for incremental XML writing.

Key Components:
    Document: the incremental builder with its cursor, identifiers and renderers
    DoctypeProvider: root element, default attributes and DOCTYPE of a document type
    MarkupReplayer: replays existing markup as builder calls
"""

from .arguments import NormalizedArguments, normalize_arguments
from .doctypes import (
    DOCTYPES,
    DoctypeProvider,
    RSSDoctype,
    WixDoctype,
    XHTMLDoctype,
    get_doctype,
    register_doctype,
)
from .document import Document
from .markup_parser import MarkupReplayer

__all__ = [
    "NormalizedArguments",
    "normalize_arguments",
    "DOCTYPES",
    "DoctypeProvider",
    "RSSDoctype",
    "WixDoctype",
    "XHTMLDoctype",
    "get_doctype",
    "register_doctype",
    "Document",
    "MarkupReplayer",
]
