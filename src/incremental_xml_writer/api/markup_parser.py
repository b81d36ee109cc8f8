"""Replay existing markup as builder calls.

Markup text is parsed with lxml's parser-target interface; every start tag,
run of character data and end tag is turned into ``open_element``,
``add_content`` and ``close_element`` on the receiving document, so parsed
content is escaped and normalized exactly like content added by hand.

lxml reports names as ``{uri}local``. The target keeps the prefixes in scope
for every open element and turns those names back into ``prefix:local``;
namespace declarations are replayed as ``xmlns`` / ``xmlns:prefix``
attributes, so the markup keeps its meaning inside the document.

Each markup argument is parsed on its own. A syntax error is reported on
the document and stops processing of that argument; whatever was replayed
before the error stays in the tree. Recoverable problems the parser notices
(an undeclared prefix, for one) are reported too. The document's cursor is
restored to its position before the call whatever happens.
"""

from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Union

from lxml import etree

from incremental_xml_writer.shared import get_logger

if TYPE_CHECKING:
    from incremental_xml_writer.api.document import Document

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

Markup = Union[str, bytes]

# namespace uri -> prefix (None for the default namespace)
PrefixScope = Dict[str, Optional[str]]


def qualified_name(name: str, prefixes: Mapping[str, Optional[str]]) -> str:
    """Turn lxml's ``{uri}local`` back into ``prefix:local``.

    The XML namespace is always spelled ``xml:``. Names in the default
    namespace, or in a namespace without a known prefix, keep only their
    local part.
    """
    if not name.startswith("{"):
        return name
    uri, _, local = name[1:].partition("}")
    if uri == XML_NAMESPACE:
        return f"xml:{local}"
    prefix = prefixes.get(uri)
    if prefix is None:
        return local
    return f"{prefix}:{local}"


def declaration_name(prefix: Optional[str]) -> str:
    """Attribute name declaring a namespace prefix."""
    return "xmlns" if prefix is None else f"xmlns:{prefix}"


class ReplayTarget:
    """lxml parser target forwarding parse events to a document."""

    def __init__(self, document: "Document") -> None:
        self.document = document
        self.events = 0
        self.scopes: List[PrefixScope] = [{}]

    def start(
        self,
        tag: str,
        attrib: Dict[str, str],
        nsmap: Dict[Optional[str], str],
    ) -> None:
        # nsmap holds only the declarations made on this element
        scope = dict(self.scopes[-1])
        attributes: Dict[str, str] = {}
        for prefix, uri in nsmap.items():
            scope[uri] = prefix
            attributes[declaration_name(prefix)] = uri
        self.scopes.append(scope)

        for key, value in attrib.items():
            attributes[qualified_name(key, scope)] = value
        self.document.open_element(qualified_name(tag, scope), attributes)
        self.events += 1

    def data(self, data: str) -> None:
        self.document.add_content(data)
        self.events += 1

    def end(self, tag: str) -> None:
        scope = self.scopes.pop()
        self.document.close_element(qualified_name(tag, scope))
        self.events += 1

    def close(self) -> int:
        return self.events


class MarkupReplayer:
    """Feeds markup through lxml and replays the events onto a document."""

    def __init__(self, document: "Document") -> None:
        self.document = document
        self.logger = get_logger(
            __name__, document.correlation_id, component="markup_parser"
        )

    def replay(self, markup: Iterable[Markup]) -> None:
        """Replay each markup item in turn, then restore the cursor."""
        cursor = self.document.current_ref()
        try:
            for item in markup:
                if item is None:
                    continue
                self._replay_one(item)
        finally:
            self.document.goto(cursor)

    def _replay_one(self, item: Markup) -> None:
        encoding = self.document.encoding
        if isinstance(item, str):
            data = item.encode(encoding, errors="xmlcharrefreplace")
        else:
            data = item

        target = ReplayTarget(self.document)
        parser = etree.XMLParser(
            target=target,
            encoding=encoding,
            resolve_entities=False,
            no_network=True,
        )
        try:
            parser.feed(data)
            parser.close()
        except etree.XMLSyntaxError as exc:
            self.document.report(
                f"failed to parse markup: {exc}",
                component="markup_parser",
                details={"events_replayed": target.events},
            )
            return

        for entry in parser.error_log.filter_from_errors():
            self.document.report(
                f"problem in parsed markup: {entry.message.strip()}",
                component="markup_parser",
                details={"line": entry.line, "column": entry.column},
            )

        self.logger.debug(
            "Replayed markup", extra={"events_replayed": target.events}
        )
