"""Configuration for incremental XML writing.

This module provides the writer configuration object and the rules used to
decide which encoding a document declares in its XML declaration.
"""

from dataclasses import dataclass
from typing import List, Optional

DEFAULT_ENCODING = "UTF-8"
DEFAULT_INDENT = "  "

# Process-wide encoding override, consulted before DEFAULT_ENCODING.
# Set it before creating documents; existing documents keep their encoding.
ENCODING: Optional[str] = None


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class WriterConfig:
    """Configuration for a document builder and its renderers."""

    encoding: Optional[str] = None
    indent: str = DEFAULT_INDENT
    debug: bool = False
    enable_render_cache: bool = True
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if self.encoding is not None and not self.encoding.strip():
            raise ConfigValidationError(
                "encoding must be a non-empty string or None",
                field_name="encoding",
                suggestions=[DEFAULT_ENCODING, "ISO-8859-1"],
            )
        if self.indent.strip(" \t"):
            raise ConfigValidationError(
                "indent may only contain spaces and tabs",
                field_name="indent",
                suggestions=[DEFAULT_INDENT, "\t"],
            )

    @classmethod
    def default(cls) -> "WriterConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def debugging(cls) -> "WriterConfig":
        """Create configuration that records open/close locations as comments."""
        return cls(debug=True, enable_render_cache=False)


def resolve_encoding(
    explicit: Optional[str] = None,
    config: Optional[WriterConfig] = None
) -> str:
    """Resolve the encoding a new document declares.

    Order of precedence: the explicit argument, the configuration, the
    module-level ENCODING override, and finally DEFAULT_ENCODING.
    """
    if explicit:
        return explicit
    if config is not None and config.encoding:
        return config.encoding
    return ENCODING or DEFAULT_ENCODING
