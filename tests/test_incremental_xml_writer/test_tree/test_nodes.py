"""Tests for the node model and its rendering fragments."""

import logging

import pytest

from incremental_xml_writer.tree import CdataNode, CommentNode, RawTextNode, TagNode


class TestTagNode:
    """Test TagNode validation and fragments."""

    def test_empty_name_raises_error(self) -> None:
        """Test that an empty element name raises ValueError."""
        with pytest.raises(ValueError, match="Element name cannot be empty"):
            TagNode(name="")

    def test_none_attributes_raise_error(self) -> None:
        """Test that attributes are required."""
        with pytest.raises(ValueError, match="Element attributes cannot be None"):
            TagNode(name="p", attributes=None)  # type: ignore

    def test_leaf_without_content_self_closes(self) -> None:
        """Test a leaf element without content renders as <x />."""
        assert TagNode("br").open_fragment(leaf=True) == "<br />"
        assert TagNode("br").close_fragment(leaf=True) == ""

    def test_leaf_with_content_renders_paired_tags(self) -> None:
        """Test a leaf element with content renders open, content and close."""
        node = TagNode("p", {"class": "x"}, "A &amp; B")

        assert node.open_fragment(leaf=True) == '<p class="x">A &amp; B</p>'

    def test_leaf_with_empty_content_is_not_self_closing(self) -> None:
        """Test empty (but present) content still produces a paired tag."""
        assert TagNode("p", content="").open_fragment(leaf=True) == "<p></p>"

    def test_parent_fragments(self) -> None:
        """Test an element with children opens and closes separately."""
        node = TagNode("div", {"id": "c"}, "intro")

        assert node.open_fragment(leaf=False) == '<div id="c">intro'
        assert node.close_fragment(leaf=False) == "</div>"

    def test_attributes_are_sorted(self) -> None:
        """Test attributes render in sorted key order."""
        node = TagNode("a", {"z": "1", "href": "/", "b": "2"})

        assert node.attributes_as_string() == ' b="2" href="/" z="1"'

    def test_undefined_attribute_renders_placeholder(self, caplog) -> None:
        """Test a None attribute value found at render time is flagged."""
        node = TagNode("p", {"class": None})

        with caplog.at_level(logging.WARNING):
            fragment = node.open_fragment(leaf=True)

        assert fragment == '<p class="*undef*" />'
        assert "Attribute 'class' (element 'p') is undefined" in caplog.text

    def test_str_is_element_name(self) -> None:
        """Test the string form names the element."""
        assert str(TagNode("title")) == "title"


class TestCommentNode:
    """Test CommentNode normalization and fragments."""

    def test_double_dashes_are_rewritten(self) -> None:
        """Test -- is rewritten at construction."""
        node = CommentNode("a--b")

        assert node.text == "a- -b"
        assert node.open_fragment(leaf=True) == "<!-- a- -b -->"
        assert node.close_fragment(leaf=True) == ""

    def test_none_text_raises_error(self) -> None:
        """Test a comment needs text."""
        with pytest.raises(ValueError, match="Comment text cannot be None"):
            CommentNode(None)  # type: ignore

    def test_comment_is_markup(self) -> None:
        """Test comments count as markup for layout."""
        assert CommentNode("x").is_markup


class TestCdataAndRawText:
    """Test CdataNode and RawTextNode."""

    def test_cdata_is_not_escaped(self) -> None:
        """Test CDATA text is emitted verbatim between markers."""
        assert CdataNode("x < y && z").open_fragment(leaf=True) == (
            "<![CDATA[x < y && z]]>"
        )

    def test_cdata_requires_text(self) -> None:
        """Test a CDATA section needs text."""
        with pytest.raises(ValueError, match="CDATA text cannot be None"):
            CdataNode(None)  # type: ignore

    def test_raw_text_is_inline(self) -> None:
        """Test raw text is emitted as stored and is not markup."""
        node = RawTextNode("<b>bold</b>")

        assert node.open_fragment(leaf=True) == "<b>bold</b>"
        assert node.close_fragment(leaf=True) == ""
        assert not node.is_markup

    def test_nodes_compare_by_identity(self) -> None:
        """Test two equal-looking nodes are distinct."""
        assert RawTextNode("x") != RawTextNode("x")
