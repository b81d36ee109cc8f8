"""Node model for incremental XML documents.

A document tree is made of four kinds of node. Tag, comment and CDATA nodes
are markup: they decide where the pretty renderer places line breaks. Raw
text nodes are inline runs that are emitted exactly as stored.

Nodes know nothing about their position in the tree; parent and children
are tracked by the tree store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional

from incremental_xml_writer.character import normalize_comment_text
from incremental_xml_writer.shared import get_logger

# Substituted for attribute values that are still None at render time
UNDEFINED_ATTRIBUTE_VALUE = "*undef*"

logger = get_logger(__name__, component="nodes")


class Node(ABC):
    """Base class of every node kind."""

    is_markup: ClassVar[bool] = True

    @abstractmethod
    def open_fragment(self, leaf: bool) -> str:
        """Text emitted when the node is entered.

        Args:
            leaf: True when the node has no children in its tree store
        """

    def close_fragment(self, leaf: bool) -> str:
        """Text emitted when the node is left. Empty unless overridden."""
        return ""


@dataclass(eq=False)
class TagNode(Node):
    """An element with a name, attributes and optional inline content.

    ``content`` holds text supplied together with the element (already
    escaped); it is rendered immediately after the opening tag. Attributes
    are always rendered in sorted key order.
    """

    name: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    content: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        if self.attributes is None:
            raise ValueError("Element attributes cannot be None")

    def attributes_as_string(self) -> str:
        """Render attributes as ``' key="value" ...'`` in sorted key order."""
        if not self.attributes:
            return ""

        parts = []
        for key in sorted(self.attributes):
            value = self.attributes[key]
            if value is None:
                logger.warning(
                    f"Attribute '{key}' (element '{self.name}') is undefined",
                    extra={"element": self.name, "attribute": key},
                )
                value = UNDEFINED_ATTRIBUTE_VALUE
            parts.append(f'{key}="{value}"')
        return " " + " ".join(parts)

    def open_fragment(self, leaf: bool) -> str:
        start = f"<{self.name}{self.attributes_as_string()}"
        if not leaf:
            return f"{start}>{self.content or ''}"
        if self.content is None:
            return f"{start} />"
        return f"{start}>{self.content}</{self.name}>"

    def close_fragment(self, leaf: bool) -> str:
        if leaf:
            return ""
        return f"</{self.name}>"

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class CommentNode(Node):
    """An XML comment. Every ``--`` in the text becomes ``- -``."""

    text: str

    def __post_init__(self) -> None:
        if self.text is None:
            raise ValueError("Comment text cannot be None")
        self.text = normalize_comment_text(self.text)

    def open_fragment(self, leaf: bool) -> str:
        return f"<!-- {self.text} -->"

    def __str__(self) -> str:
        return f"*comment* {self.text}"


@dataclass(eq=False)
class CdataNode(Node):
    """A CDATA section, emitted verbatim between the CDATA markers."""

    text: str

    def __post_init__(self) -> None:
        if self.text is None:
            raise ValueError("CDATA text cannot be None")

    def open_fragment(self, leaf: bool) -> str:
        return f"<![CDATA[{self.text}]]>"

    def __str__(self) -> str:
        return f"*cdata* {self.text}"


@dataclass(eq=False)
class RawTextNode(Node):
    """Inline text emitted exactly as stored."""

    is_markup: ClassVar[bool] = False

    text: str

    def __post_init__(self) -> None:
        if self.text is None:
            raise ValueError("Text cannot be None")

    def open_fragment(self, leaf: bool) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text
