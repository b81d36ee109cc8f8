"""Tests for doctype providers and the doctype registry."""

import pytest

from incremental_xml_writer import Document, UnknownDoctypeError
from incremental_xml_writer.api.doctypes import (
    DOCTYPES,
    DoctypeProvider,
    RSSDoctype,
    WixDoctype,
    XHTMLDoctype,
    get_doctype,
    register_doctype,
)


class TestBuiltinDoctypes:
    """Test the doctypes shipped with the library."""

    def test_xhtml(self) -> None:
        """Test the XHTML doctype contract."""
        doctype = XHTMLDoctype()

        assert doctype.root_element_name() == "html"
        assert doctype.root_default_attributes() == {
            "xmlns": "http://www.w3.org/1999/xhtml"
        }
        assert doctype.doctype_declaration().startswith('<!DOCTYPE html PUBLIC')
        assert doctype.content_type() == "application/xhtml+xml"

    def test_rss(self) -> None:
        """Test the RSS doctype has no DOCTYPE declaration."""
        doctype = RSSDoctype()

        assert doctype.root_element_name() == "rss"
        assert doctype.root_default_attributes() == {"version": "2.0"}
        assert doctype.doctype_declaration() == ""
        assert doctype.content_type() == "application/rss+xml"

    def test_wix(self) -> None:
        """Test the WiX doctype root element."""
        assert WixDoctype().root_element_name() == "Wix"

    def test_default_attributes_are_copies(self) -> None:
        """Test callers cannot modify the shared defaults."""
        doctype = XHTMLDoctype()
        doctype.root_default_attributes()["xmlns"] = "changed"

        assert doctype.root_default_attributes()["xmlns"] == (
            "http://www.w3.org/1999/xhtml"
        )


class TestDoctypeRegistry:
    """Test resolving doctypes by name."""

    def test_names_are_case_insensitive(self) -> None:
        """Test lookup ignores case."""
        assert isinstance(get_doctype("XHTML"), XHTMLDoctype)
        assert isinstance(get_doctype("rss"), RSSDoctype)

    def test_none_means_generic(self) -> None:
        """Test None resolves to no doctype."""
        assert get_doctype(None) is None

    def test_instances_pass_through(self) -> None:
        """Test provider instances are used as given."""
        doctype = RSSDoctype()

        assert get_doctype(doctype) is doctype

    def test_unknown_name_raises_error(self) -> None:
        """Test an unknown name raises UnknownDoctypeError."""
        with pytest.raises(UnknownDoctypeError, match="Unknown doctype 'svg'"):
            get_doctype("svg")

    def test_unknown_name_is_a_value_error(self) -> None:
        """Test UnknownDoctypeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Document(doctype="nope")

    def test_register_custom_doctype(self) -> None:
        """Test a registered doctype drives root detection and headers."""

        @register_doctype
        class NoteDoctype(DoctypeProvider):
            name = "note"
            root_element = "note"
            root_attributes = {"version": "1"}
            declaration = '<!DOCTYPE note SYSTEM "note.dtd">'

        try:
            doc = Document(doctype="note")
            doc.element("note", "hello")

            assert doc.has_root_element
            assert doc.content_type() == "application/xml"
            assert doc.render().splitlines()[:3] == [
                '<?xml version="1.0" encoding="UTF-8" ?>',
                '<!DOCTYPE note SYSTEM "note.dtd">',
                '<note version="1">hello</note>',
            ]
        finally:
            DOCTYPES.pop("note", None)

    def test_register_requires_name(self) -> None:
        """Test a doctype without a name cannot be registered."""
        with pytest.raises(ValueError, match="Doctype name cannot be empty"):
            register_doctype(DoctypeProvider)
