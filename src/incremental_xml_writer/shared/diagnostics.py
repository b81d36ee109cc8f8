"""Diagnostic types and render statistics for incremental XML writing.

Recoverable problems (a missing attribute value, a mismatched close, an
unknown identifier...) never abort the builder. They are recorded as
diagnostic entries on the document instead, next to simple statistics about
how often the render cache was used.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Reported condition, operation degraded gracefully
    ERROR = auto()      # Input that could not be used at all


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class RenderStatistics:
    """Counters describing how a document has been rendered."""

    pretty_renders: int = 0
    fast_renders: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    invalidations: int = 0

    @property
    def cache_hit_rate(self) -> float:
        """Calculate pretty-render cache hit rate."""
        total_accesses = self.cache_hits + self.cache_misses
        if total_accesses == 0:
            return 0.0
        return self.cache_hits / total_accesses

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary representation."""
        return {
            "pretty_renders": self.pretty_renders,
            "fast_renders": self.fast_renders,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "invalidations": self.invalidations,
            "cache_hit_rate": self.cache_hit_rate,
        }
