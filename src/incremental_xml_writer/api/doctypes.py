"""Doctype providers for incremental XML documents.

A doctype tells a document which element is its root, which attributes the
root element carries by default, which DOCTYPE declaration precedes it and
which content type the rendered text should be served as. A document built
without a doctype is a generic XML document.
"""

from typing import Dict, Optional, Type, Union

from incremental_xml_writer.shared import UnknownDoctypeError

GENERIC_CONTENT_TYPE = "application/xml"


class DoctypeProvider:
    """Base doctype. Subclasses override the class attributes."""

    name: str = ""
    root_element: str = ""
    root_attributes: Dict[str, str] = {}
    declaration: str = ""
    media_type: str = GENERIC_CONTENT_TYPE

    def root_element_name(self) -> str:
        """Name of the document's root element."""
        return self.root_element

    def root_default_attributes(self) -> Dict[str, str]:
        """Default attributes of the root element (a fresh copy)."""
        return dict(self.root_attributes)

    def doctype_declaration(self) -> str:
        """DOCTYPE declaration text, empty if the doctype has none."""
        return self.declaration

    def content_type(self) -> str:
        """Value suitable for an HTTP Content-Type header."""
        return self.media_type

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root_element={self.root_element!r})"


class XHTMLDoctype(DoctypeProvider):
    """XHTML 1.0 Strict."""

    name = "xhtml"
    root_element = "html"
    root_attributes = {"xmlns": "http://www.w3.org/1999/xhtml"}
    declaration = (
        '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
        '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">'
    )
    media_type = "application/xhtml+xml"


class RSSDoctype(DoctypeProvider):
    """RSS 2.0 feeds."""

    name = "rss"
    root_element = "rss"
    root_attributes = {"version": "2.0"}
    media_type = "application/rss+xml"


class WixDoctype(DoctypeProvider):
    """Windows Installer XML (WiX) version 2 sources."""

    name = "wix2"
    root_element = "Wix"
    root_attributes = {"xmlns": "http://schemas.microsoft.com/wix/2003/01/wi"}
    media_type = "text/xml"


DOCTYPES: Dict[str, Type[DoctypeProvider]] = {
    XHTMLDoctype.name: XHTMLDoctype,
    RSSDoctype.name: RSSDoctype,
    WixDoctype.name: WixDoctype,
}


def register_doctype(provider: Type[DoctypeProvider]) -> Type[DoctypeProvider]:
    """Register a doctype class under its name. Usable as a class decorator."""
    if not provider.name:
        raise ValueError("Doctype name cannot be empty")
    DOCTYPES[provider.name.lower()] = provider
    return provider


def get_doctype(
    doctype: Union[str, DoctypeProvider, None]
) -> Optional[DoctypeProvider]:
    """Resolve a doctype name (case-insensitive) or instance; None means generic."""
    if doctype is None or isinstance(doctype, DoctypeProvider):
        return doctype
    try:
        return DOCTYPES[doctype.lower()]()
    except KeyError:
        raise UnknownDoctypeError(doctype, list(DOCTYPES)) from None
