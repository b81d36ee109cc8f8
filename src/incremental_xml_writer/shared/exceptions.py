"""Exceptions raised for conditions the builder cannot recover from."""


class XMLWriterError(Exception):
    """Base exception for fatal document building errors."""


class NoCurrentElementError(XMLWriterError):
    """Raised when an operation needs a current element but the cursor is empty."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot use {operation} with no current element")
        self.operation = operation


class SelfEmbeddingError(XMLWriterError):
    """Raised when a document is added to itself."""


class InvalidContentError(XMLWriterError):
    """Raised when a value cannot be used as content for the requested operation."""


class UnknownDoctypeError(XMLWriterError, ValueError):
    """Raised when a doctype name is not registered."""

    def __init__(self, name: str, known: list) -> None:
        super().__init__(
            f"Unknown doctype '{name}' (known doctypes: {', '.join(sorted(known))})"
        )
        self.name = name
        self.known = sorted(known)
