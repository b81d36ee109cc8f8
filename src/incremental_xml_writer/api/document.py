"""Incremental document builder.

A ``Document`` accumulates an XML tree through separate open / add / close
calls and renders it on demand. The builder tracks a *current element*
(the cursor): ``open_element`` creates an element inside the current one and
makes it current, ``close_element`` moves back to its parent, and content
operations append to whatever is current. With no current element new
nodes become top-level roots.

Example::

    doc = Document(doctype="xhtml")
    doc.open_element("html")
    doc.open_element("body")
    doc.element("p", {"class": "intro"}, "Fish & Chips")
    doc.close_element("body")
    doc.close_element("html")
    print(doc.render())

Problems the builder can work around (a mismatched close, an attribute
without a value, an unknown identifier...) are reported: logged as warnings
and recorded in ``Document.diagnostics``. Problems it cannot work around
raise an ``XMLWriterError`` subclass.
"""

import inspect
from pathlib import Path
from typing import Any, Dict, Hashable, List, Mapping, Optional, Set, Union

from incremental_xml_writer.api.arguments import normalize_arguments, normalize_attributes
from incremental_xml_writer.api.doctypes import (
    GENERIC_CONTENT_TYPE,
    DoctypeProvider,
    get_doctype,
)
from incremental_xml_writer.api.markup_parser import Markup, MarkupReplayer
from incremental_xml_writer.character import escape_xml
from incremental_xml_writer.rendering import (
    FastRenderer,
    PrettyRenderer,
    library_marker,
    xml_declaration,
)
from incremental_xml_writer.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    InvalidContentError,
    NoCurrentElementError,
    RenderStatistics,
    SelfEmbeddingError,
    WriterConfig,
    get_logger,
    resolve_encoding,
)
from incremental_xml_writer.tree import (
    CdataNode,
    CommentNode,
    Node,
    NodeRef,
    RawTextNode,
    TagNode,
    TreeStore,
)

LIBRARY_NAME = "incremental_xml_writer"

JAVASCRIPT_BEGIN = "// -------- JavaScript Begin -------- <![CDATA[\n"
JAVASCRIPT_END = "// --------- JavaScript End --------- ]]>"

_PACKAGE_DIR = str(Path(__file__).absolute().parent.parent)


class Document:
    """An XML document built incrementally through a cursor."""

    def __init__(
        self,
        doctype: Union[str, DoctypeProvider, None] = None,
        encoding: Optional[str] = None,
        debug: Optional[bool] = None,
        config: Optional[WriterConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Create an empty document.

        Args:
            doctype: Registered doctype name ("xhtml", "rss", "wix2"), a
                DoctypeProvider instance, or None for a generic document
            encoding: Encoding named in the XML declaration
            debug: Record the source location of every open/close as a comment
            config: Writer configuration (indentation, caching, defaults)
            correlation_id: Identifier attached to log records and diagnostics
        """
        self.config = config or WriterConfig.default()
        self.doctype = get_doctype(doctype)
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, component="builder")

        self._encoding = resolve_encoding(encoding, self.config)
        self._debug = self.config.debug if debug is None else debug

        self._store = TreeStore()
        self._cursor: Optional[NodeRef] = None
        self._ids: Dict[Hashable, Optional[NodeRef]] = {}
        self._languages: Set[str] = set()
        self._pending_lang: Optional[str] = None
        self._root_lang: Optional[str] = None
        self._cache: Optional[str] = None

        self.has_root_element = False
        self.diagnostics: List[DiagnosticEntry] = []
        self.render_statistics = RenderStatistics()

    # ------------------------------------------------------------------
    # Metadata

    @property
    def encoding(self) -> str:
        """Encoding named in the XML declaration."""
        return self._encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        if not value:
            raise ValueError("Encoding cannot be empty")
        self._encoding = value
        self._invalidate()

    @property
    def debug(self) -> bool:
        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self._debug = bool(value)

    @property
    def is_generic(self) -> bool:
        """True for documents without a doctype."""
        return self.doctype is None

    @property
    def tree(self) -> TreeStore:
        """The document's tree store (read it, build through the document)."""
        return self._store

    def node(self, ref: NodeRef) -> Node:
        return self._store.node(ref)

    def content_type(self) -> str:
        """Value suitable for an HTTP Content-Type header."""
        if self.doctype is None:
            return GENERIC_CONTENT_TYPE
        return self.doctype.content_type()

    # ------------------------------------------------------------------
    # Elements

    def open_element(self, name: str, *args: Any, **attributes: Any) -> NodeRef:
        """Create an element inside the current element and make it current.

        Positional arguments may be attribute mappings, ``"-name", value``
        pairs or content; keyword arguments are attributes (a trailing
        underscore is dropped, so ``class_="x"`` sets ``class``).

        Returns:
            Handle of the new element, usable with ``goto``
        """
        return self._create_element(name, args, attributes, make_current=True)

    def element(self, name: str, *args: Any, **attributes: Any) -> NodeRef:
        """Create a complete element inside the current element.

        Same arguments as ``open_element``; the current element is unchanged.
        """
        return self._create_element(name, args, attributes, make_current=False)

    def close_element(self, name: str) -> bool:
        """Make the parent of the current element current.

        The call is reported and ignored when there is no current element or
        when the current element is not called ``name``.

        Returns:
            True if the element was closed
        """
        if self._cursor is None:
            self.report(
                f'attempt to close non-existent element "{name}"',
                details={"element": name},
            )
            return False

        current = self._store.node(self._cursor)
        if not isinstance(current, TagNode) or current.name != name:
            self.report(
                f'attempted to close element "{name}" when current element '
                f'is "{current}"',
                details={"element": name, "current": str(current)},
            )
            return False

        self._cursor = self._store.parent_of(self._cursor)
        self._invalidate()
        self.logger.debug(f"Closed element '{name}'", extra={"element": name})

        if self._debug and self._cursor is not None:
            self._attach(CommentNode(f"DEBUG: '{name}' close at {_caller_location()}"))
        return True

    def _create_element(
        self,
        name: str,
        args: tuple,
        attributes: Mapping[str, Any],
        make_current: bool,
    ) -> NodeRef:
        if not name:
            raise ValueError("Element name cannot be empty")
        if any(isinstance(arg, Document) for arg in args):
            raise InvalidContentError(
                "Documents cannot be element arguments; use add_content to embed them"
            )

        normalized = normalize_arguments(args, attributes)
        for key in normalized.missing:
            self.report(
                f"attribute '{key}' undefined (element '{name}')",
                details={"element": name, "attribute": key},
            )

        element_attributes = normalized.attributes
        if self.doctype is not None and name == self.doctype.root_element_name():
            merged = self.doctype.root_default_attributes()
            merged.update(element_attributes)
            element_attributes = merged
            self.has_root_element = True

        if self._pending_lang is not None:
            element_attributes["xml:lang"] = escape_xml(self._pending_lang)
            self._pending_lang = None

        ref = self._attach(TagNode(name, element_attributes, normalized.inline_content))
        if make_current:
            self._cursor = ref
        self.logger.debug(
            f"Created element '{name}'",
            extra={"element": name, "opened": make_current},
        )

        if self._debug:
            state = "(open) " if make_current else ""
            self._attach(CommentNode(f"DEBUG: '{name}' {state}at {_caller_location()}"))
        return ref

    # ------------------------------------------------------------------
    # Content

    def add_content(self, *values: Any) -> None:
        """Add content to the current element.

        Other documents are embedded: their trees are moved under the
        current element, or to the top level when there is none, and their
        languages are merged. Any other value is escaped and appended as text,
        which requires a current element.
        """
        for value in values:
            if isinstance(value, Document):
                self._embed(value)
                continue
            if self._cursor is None:
                raise NoCurrentElementError("add_content")
            text = "" if value is None else escape_xml(str(value))
            self._attach(RawTextNode(text))

    def add_raw(self, *values: Any) -> None:
        """Append values to the current element without escaping them."""
        if any(isinstance(value, Document) for value in values):
            raise InvalidContentError("Cannot add documents as raw content")
        if self._cursor is None:
            raise NoCurrentElementError("add_raw")
        for value in values:
            self._attach(RawTextNode("" if value is None else str(value)))

    def add_comment(self, *text: Any) -> NodeRef:
        """Add a comment at the current position; ``--`` becomes ``- -``."""
        return self._attach(CommentNode(_join_text(text)))

    def add_cdata(self, *text: Any) -> NodeRef:
        """Add a CDATA section at the current position."""
        return self._attach(CdataNode(_join_text(text)))

    def add_javascript(self, *script: Any) -> NodeRef:
        """Add a ``script`` element holding script wrapped in CDATA markers."""
        ref = self.open_element("script", type="text/javascript")
        self.add_raw(JAVASCRIPT_BEGIN)
        self.add_raw(*script)
        self.add_raw(JAVASCRIPT_END)
        self.close_element("script")
        return ref

    def parse(self, *markup: Markup) -> None:
        """Add markup to the current element, replayed as builder calls.

        The current element is the same after the call as before it, even
        if the markup is malformed or leaves elements open.
        """
        MarkupReplayer(self).replay(markup)

    def _embed(self, donor: "Document") -> None:
        if donor is self:
            raise SelfEmbeddingError("Cannot add a document to itself")
        if donor._store.is_empty:
            self.report("failed to add document with no elements")
            return

        adopted = self._store.adopt(donor._store, self._cursor)
        self._languages.update(donor._languages)
        self._invalidate()
        self.logger.debug(
            "Embedded document",
            extra={"roots": len(adopted), "donor": donor.correlation_id},
        )

    def _attach(self, node: Node) -> NodeRef:
        ref = self._store.append_child(self._cursor, node)
        self._invalidate()
        return ref

    # ------------------------------------------------------------------
    # Attributes and languages

    def set_attributes(self, attributes: Mapping[str, Any]) -> Dict[str, str]:
        """Replace the attributes of the current element."""
        if not isinstance(attributes, Mapping):
            raise TypeError("usage: set_attributes(mapping)")
        current = self._current_tag("set_attributes")

        missing: List[str] = []
        current.attributes = normalize_attributes(attributes, missing)
        for key in missing:
            self.report(
                f"attribute '{key}' undefined (element '{current.name}')",
                details={"element": current.name, "attribute": key},
            )
        self._invalidate()
        return dict(current.attributes)

    def get_attributes(self) -> Dict[str, str]:
        """Return a copy of the current element's attributes."""
        return dict(self._current_tag("get_attributes").attributes)

    def set_language(self, lang: str) -> None:
        """Declare a language with ``xml:lang``.

        For documents with a doctype the first language goes to the root
        element when the document is rendered. Later languages, and every
        language of a generic document, go to the next element created.
        """
        if not lang:
            raise ValueError("usage: set_language(lang)")

        if self.doctype is None or self._root_lang is not None:
            self._pending_lang = lang
        else:
            self._root_lang = lang
        self._languages.add(lang)
        self._invalidate()

    def languages(self) -> List[str]:
        """All languages declared with set_language, embedded documents included."""
        return sorted(self._languages)

    def _current_tag(self, operation: str) -> TagNode:
        if self._cursor is None:
            raise NoCurrentElementError(operation)
        return self._store.node(self._cursor)

    # ------------------------------------------------------------------
    # Navigation

    def current_ref(self) -> Optional[NodeRef]:
        """Handle of the current element (None at the top level)."""
        return self._cursor

    def goto(self, ref: Optional[NodeRef]) -> Optional[NodeRef]:
        """Make the element behind ref current (None moves to the top level)."""
        if ref is not None:
            if not self._store.owns(ref):
                raise ValueError("Node reference does not belong to this document")
            if not isinstance(self._store.node(ref), TagNode):
                raise ValueError("Only elements can become the current element")
        self._cursor = ref
        return self._cursor

    def set_id(self, key: Hashable) -> None:
        """Remember the current element under key for a later goto_id."""
        if key is None or key == "":
            self.report("set_id called without a valid id")
            return
        if key in self._ids:
            self.report(f"id {key} already defined - overwriting", details={"id": key})
        self._ids[key] = self._cursor

    def goto_id(self, key: Any) -> Optional[NodeRef]:
        """Make the element remembered under key current.

        ``None`` moves to the top level; an unknown key is reported and also
        leaves the document at the top level. A NodeRef behaves like goto.
        """
        if key is None:
            self._cursor = None
        elif isinstance(key, NodeRef):
            self.goto(key)
        elif key in self._ids:
            self._cursor = self._ids[key]
        else:
            known = ",".join(str(known_key) for known_key in self._ids)
            self.report(
                f"Nonexistent ID given to goto_id: '{key}'. (Known IDs: {known})",
                details={"id": key},
            )
            self._cursor = None
        return self._cursor

    # ------------------------------------------------------------------
    # Output

    def render(self) -> str:
        """Render the document with indentation and newlines.

        The result is cached until the document is modified.
        """
        if self._store.is_empty:
            return ""
        if self._cache is not None:
            self.render_statistics.cache_hits += 1
            return self._cache

        self.render_statistics.cache_misses += 1
        self.render_statistics.pretty_renders += 1

        parts = []
        if self._has_header():
            parts.append(xml_declaration(self._encoding) + "\n")
            declaration = self._doctype_declaration()
            if declaration:
                parts.append(declaration + "\n")
            self._apply_root_language()

        parts.append(PrettyRenderer(self._store, self.config.indent).render())

        if self.has_root_element:
            from incremental_xml_writer import __version__
            parts.append(library_marker(LIBRARY_NAME, __version__) + "\n")

        text = "".join(parts)
        if self.config.enable_render_cache:
            self._cache = text
        self.logger.debug("Rendered document", extra={"length": len(text)})
        return text

    def render_fast(self) -> str:
        """Render the document without whitespace or comments. Never cached."""
        if self._store.is_empty:
            return ""
        self.render_statistics.fast_renders += 1

        parts = []
        if self._has_header():
            parts.append(xml_declaration(self._encoding))
            parts.append(self._doctype_declaration())
            self._apply_root_language()

        parts.append(FastRenderer(self._store).render())
        return "".join(parts)

    def _has_header(self) -> bool:
        return self.doctype is None or self.has_root_element

    def _doctype_declaration(self) -> str:
        if self.doctype is None:
            return ""
        return self.doctype.doctype_declaration()

    def _apply_root_language(self) -> None:
        if self._root_lang is None:
            return
        first = self._store.node(self._store.roots[0])
        if isinstance(first, TagNode):
            first.attributes["xml:lang"] = escape_xml(self._root_lang)

    def _invalidate(self) -> None:
        if self._cache is not None:
            self._cache = None
            self.render_statistics.invalidations += 1

    # ------------------------------------------------------------------
    # Diagnostics

    def report(
        self,
        message: str,
        component: str = "builder",
        details: Optional[Dict[str, Any]] = None,
        severity: DiagnosticSeverity = DiagnosticSeverity.WARNING,
    ) -> None:
        """Record a recoverable problem and log it."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )
        self.logger.warning(message, extra={"reported_by": component})

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_warnings(self) -> bool:
        """Check whether anything has been reported."""
        return any(
            diag.severity in (DiagnosticSeverity.WARNING, DiagnosticSeverity.ERROR)
            for diag in self.diagnostics
        )


def _caller_location() -> str:
    """File and line of the nearest caller outside this package."""
    frame = inspect.currentframe()
    while frame is not None and frame.f_code.co_filename.startswith(_PACKAGE_DIR):
        frame = frame.f_back
    if frame is None:
        return "unknown"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


def _join_text(parts: tuple) -> str:
    return "".join("" if part is None else str(part) for part in parts)
