"""Structured logging utilities for incremental XML writing.

Every builder operation logs through a correlation-aware logger so that the
warnings raised while a document is being assembled can be traced back to the
document (and request) that produced them. Structural operations log at
DEBUG, reported conditions at WARNING; handlers are left to the application.
"""

import logging
from typing import Any, Dict, Optional


class CorrelationLogger:
    """Logger that tags every record with a document's correlation ID and component."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID identifying the document
            component: Component name, defaults to the last segment of name
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split('.')[-1]

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }

        if extra:
            combined_extra.update(extra)

        return combined_extra

    def debug(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log a structural operation (open, close, embed, render)."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def warning(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log a reported condition."""
        self.logger.warning(message, extra=self._get_extra(extra))


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger for one document or component."""
    return CorrelationLogger(name, correlation_id, component)
