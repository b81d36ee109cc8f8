"""Tests for writer configuration and encoding resolution."""

import pytest

from incremental_xml_writer.shared import config
from incremental_xml_writer.shared.config import (
    DEFAULT_ENCODING,
    ConfigError,
    ConfigValidationError,
    WriterConfig,
    resolve_encoding,
)


class TestWriterConfig:
    """Test suite for WriterConfig."""

    def test_default_configuration(self) -> None:
        """Test default writer configuration values."""
        writer_config = WriterConfig()

        assert writer_config.encoding is None
        assert writer_config.indent == "  "
        assert writer_config.debug is False
        assert writer_config.enable_render_cache is True
        assert writer_config.correlation_id is None

    def test_presets(self) -> None:
        """Test configuration presets."""
        assert WriterConfig.default() == WriterConfig()
        debugging = WriterConfig.debugging()
        assert debugging.debug is True
        assert debugging.enable_render_cache is False

    def test_tab_indent_is_accepted(self) -> None:
        """Test tabs are valid indentation."""
        assert WriterConfig(indent="\t").indent == "\t"

    def test_invalid_indent_raises_error(self) -> None:
        """Test indentation must be whitespace."""
        with pytest.raises(ConfigValidationError, match="indent may only contain") as info:
            WriterConfig(indent="--")

        assert info.value.field_name == "indent"
        assert info.value.suggestions

    def test_blank_encoding_raises_error(self) -> None:
        """Test an empty encoding is rejected."""
        with pytest.raises(ConfigError, match="encoding must be a non-empty string"):
            WriterConfig(encoding=" ")


class TestResolveEncoding:
    """Test encoding precedence."""

    def test_default(self) -> None:
        """Test UTF-8 is the fallback."""
        assert resolve_encoding() == DEFAULT_ENCODING == "UTF-8"

    def test_precedence(self, monkeypatch) -> None:
        """Test explicit > config > module override > default."""
        monkeypatch.setattr(config, "ENCODING", "UTF-16")
        writer_config = WriterConfig(encoding="ISO-8859-1")

        assert resolve_encoding() == "UTF-16"
        assert resolve_encoding(config=writer_config) == "ISO-8859-1"
        assert resolve_encoding("ASCII", writer_config) == "ASCII"
