"""Document tree for incremental XML writing.

Key Components:
    TagNode, CommentNode, CdataNode, RawTextNode: the node kinds
    TreeStore: arena holding the forest, addressed by NodeRef handles
"""

from .nodes import (
    CdataNode,
    CommentNode,
    Node,
    RawTextNode,
    TagNode,
)
from .store import (
    NodeRef,
    TreeStore,
    WalkEvent,
)

__all__ = [
    "CdataNode",
    "CommentNode",
    "Node",
    "RawTextNode",
    "TagNode",
    "NodeRef",
    "TreeStore",
    "WalkEvent",
]
