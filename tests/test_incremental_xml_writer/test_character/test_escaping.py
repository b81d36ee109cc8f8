"""Tests for the escaping rules applied to content and attribute values."""

from incremental_xml_writer.character import (
    escape_xml,
    needs_escaping,
    normalize_comment_text,
)


class TestEscapeXML:
    """Test escape_xml substitutions and idempotence."""

    def test_plain_text_is_unchanged(self) -> None:
        """Test text without special characters is returned as is."""
        assert escape_xml("plain text") == "plain text"
        assert not needs_escaping("plain text")

    def test_four_characters_are_replaced(self) -> None:
        """Test &, <, > and double quotes become entities."""
        assert escape_xml('<a href="x">A & B</a>') == (
            "&lt;a href=&quot;x&quot;&gt;A &amp; B&lt;/a&gt;"
        )

    def test_single_quotes_are_left_alone(self) -> None:
        """Test only the four documented characters are touched."""
        assert escape_xml("it's <ok>") == "it's &lt;ok&gt;"

    def test_existing_named_entities_are_preserved(self) -> None:
        """Test an ampersand starting a named entity is not escaped again."""
        assert escape_xml("& some other &stuff;") == "&amp; some other &stuff;"

    def test_existing_numeric_entities_are_preserved(self) -> None:
        """Test decimal and hexadecimal character references survive."""
        assert escape_xml("&#169; &#xA9; & more") == "&#169; &#xA9; &amp; more"

    def test_escaping_twice_is_a_no_op(self) -> None:
        """Test escape_xml is idempotent on its own output."""
        text = 'Some <<odd>> "input" & &amp; more'
        once = escape_xml(text)

        assert escape_xml(once) == once

    def test_ampersand_without_semicolon_is_escaped(self) -> None:
        """Test a bare ampersand followed by a word is still escaped."""
        assert escape_xml("AT&T rocks") == "AT&amp;T rocks"


class TestNormalizeCommentText:
    """Test comment text normalization."""

    def test_double_dashes_are_split(self) -> None:
        """Test every -- becomes - -."""
        assert normalize_comment_text("My --First-- document") == (
            "My - -First- - document"
        )

    def test_runs_of_dashes_leave_no_double_dash(self) -> None:
        """Test longer dash runs are fully normalized."""
        normalized = normalize_comment_text("a---b----c")

        assert "--" not in normalized
        assert normalized.replace(" ", "") == "a---b----c"

    def test_text_without_dashes_is_unchanged(self) -> None:
        """Test ordinary comment text is kept."""
        assert normalize_comment_text("nothing to see") == "nothing to see"
