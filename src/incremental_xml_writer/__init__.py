"""Incremental XML Writer.

Build XML documents through a sequence of open element / add content /
close element calls, keeping an in-memory tree that is rendered on demand
either indented (``Document.render``) or flat (``Document.render_fast``).

Example::

    from incremental_xml_writer import Document

    doc = Document()
    doc.open_element("feed")
    doc.element("title", "Fish & Chips")
    doc.close_element("feed")
    doc.render()
"""

__version__ = "0.1.0"
__author__ = "Incremental XML Writer Team"

from .api import Document, DoctypeProvider, get_doctype, register_doctype
from .character import escape_xml
from .shared.config import WriterConfig
from .shared.exceptions import (
    InvalidContentError,
    NoCurrentElementError,
    SelfEmbeddingError,
    UnknownDoctypeError,
    XMLWriterError,
)
from .tree import NodeRef

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Builder
    "Document",
    "NodeRef",

    # Doctypes
    "DoctypeProvider",
    "get_doctype",
    "register_doctype",

    # Configuration
    "WriterConfig",

    # Escaping
    "escape_xml",

    # Errors
    "XMLWriterError",
    "NoCurrentElementError",
    "SelfEmbeddingError",
    "InvalidContentError",
    "UnknownDoctypeError",
]
