"""Shared utilities for incremental XML writing.

This module provides configuration objects, diagnostic types, exceptions and
logging helpers used by every layer of the writer.
"""

from .config import (
    DEFAULT_ENCODING,
    DEFAULT_INDENT,
    ConfigError,
    ConfigValidationError,
    WriterConfig,
    resolve_encoding,
)
from .diagnostics import (
    DiagnosticEntry,
    DiagnosticSeverity,
    RenderStatistics,
)
from .exceptions import (
    InvalidContentError,
    NoCurrentElementError,
    SelfEmbeddingError,
    UnknownDoctypeError,
    XMLWriterError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_INDENT",
    "ConfigError",
    "ConfigValidationError",
    "WriterConfig",
    "resolve_encoding",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "RenderStatistics",
    "InvalidContentError",
    "NoCurrentElementError",
    "SelfEmbeddingError",
    "UnknownDoctypeError",
    "XMLWriterError",
    "CorrelationLogger",
    "get_logger",
]
