"""Arena-backed tree store for incremental XML documents.

Nodes are kept in flat lists and addressed by ``NodeRef`` handles. Parent,
children, depth and sibling position are stored per handle when a node is
appended and never change afterwards: a node has exactly one parent for its
lifetime and the store offers no way to move or remove it. Cycles are
therefore impossible.
"""

import itertools
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

from incremental_xml_writer.tree.nodes import Node

_store_ids = itertools.count(1)


@dataclass(frozen=True)
class NodeRef:
    """Opaque handle to a node inside one particular tree store."""

    store_id: int
    index: int


class WalkEvent(Enum):
    """Events produced by a depth-first walk of the forest."""

    ENTER = auto()
    EXIT = auto()


class TreeStore:
    """Ordered forest of nodes with parent/children relationships."""

    def __init__(self) -> None:
        self._store_id = next(_store_ids)
        self._nodes: List[Node] = []
        self._parents: List[Optional[int]] = []
        self._children: List[List[int]] = []
        self._depths: List[int] = []
        self._positions: List[int] = []
        self._roots: List[int] = []

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def is_empty(self) -> bool:
        """True while the forest has no root nodes."""
        return not self._roots

    @property
    def roots(self) -> List[NodeRef]:
        """Root nodes in insertion order."""
        return [self._ref(index) for index in self._roots]

    def owns(self, ref: NodeRef) -> bool:
        """Check whether a handle was issued by this store."""
        return (
            isinstance(ref, NodeRef)
            and ref.store_id == self._store_id
            and 0 <= ref.index < len(self._nodes)
        )

    def append_child(self, parent: Optional[NodeRef], node: Node) -> NodeRef:
        """Attach node as the last child of parent, or as a new root if parent is None."""
        if not isinstance(node, Node):
            raise TypeError("Child must be a Node instance")
        parent_index = None if parent is None else self._check(parent)
        return self._ref(self._append(parent_index, node))

    def node(self, ref: NodeRef) -> Node:
        return self._nodes[self._check(ref)]

    def parent_of(self, ref: NodeRef) -> Optional[NodeRef]:
        parent_index = self._parents[self._check(ref)]
        return None if parent_index is None else self._ref(parent_index)

    def children(self, ref: NodeRef) -> List[NodeRef]:
        return [self._ref(index) for index in self._children[self._check(ref)]]

    def child_count(self, ref: NodeRef) -> int:
        return len(self._children[self._check(ref)])

    def child_at(self, ref: NodeRef, position: int) -> NodeRef:
        """Return the child at position (IndexError when out of range)."""
        return self._ref(self._children[self._check(ref)][position])

    def sibling_at(self, ref: NodeRef, position: int) -> NodeRef:
        """Return the node at position among ref's siblings (ref included)."""
        return self._ref(self._siblings(self._check(ref))[position])

    def next_sibling(self, ref: NodeRef) -> Optional[NodeRef]:
        index = self._check(ref)
        siblings = self._siblings(index)
        position = self._positions[index] + 1
        if position < len(siblings):
            return self._ref(siblings[position])
        return None

    def index_of(self, ref: NodeRef) -> int:
        """Position of ref among its siblings."""
        return self._positions[self._check(ref)]

    def is_leaf(self, ref: NodeRef) -> bool:
        return not self._children[self._check(ref)]

    def is_root(self, ref: NodeRef) -> bool:
        return self._parents[self._check(ref)] is None

    def depth(self, ref: NodeRef) -> int:
        """Depth of ref in the forest (roots have depth 0)."""
        return self._depths[self._check(ref)]

    def walk(self) -> Iterator[Tuple[WalkEvent, NodeRef]]:
        """Walk the forest depth-first, yielding ENTER and EXIT events."""
        stack: List[Tuple[int, bool]] = [(index, False) for index in reversed(self._roots)]
        while stack:
            index, entered = stack.pop()
            ref = self._ref(index)
            if entered:
                yield WalkEvent.EXIT, ref
                continue
            yield WalkEvent.ENTER, ref
            stack.append((index, True))
            stack.extend((child, False) for child in reversed(self._children[index]))

    def adopt(self, donor: "TreeStore", parent: Optional[NodeRef] = None) -> List[NodeRef]:
        """Append every tree of donor under parent (or as new roots).

        The donor's node objects are shared with this store afterwards, so the
        donor should not be used for further building.

        Returns:
            Handles of the adopted donor roots in this store
        """
        if donor is self:
            raise ValueError("A tree store cannot adopt itself")
        parent_index = None if parent is None else self._check(parent)

        adopted = []
        for donor_root in donor._roots:
            pending = [(donor_root, parent_index)]
            top_index = None
            while pending:
                donor_index, new_parent = pending.pop()
                new_index = self._append(new_parent, donor._nodes[donor_index])
                if top_index is None:
                    top_index = new_index
                pending.extend(
                    (child, new_index) for child in reversed(donor._children[donor_index])
                )
            adopted.append(self._ref(top_index))
        return adopted

    def _append(self, parent_index: Optional[int], node: Node) -> int:
        index = len(self._nodes)
        siblings = self._roots if parent_index is None else self._children[parent_index]
        self._nodes.append(node)
        self._parents.append(parent_index)
        self._children.append([])
        self._depths.append(0 if parent_index is None else self._depths[parent_index] + 1)
        self._positions.append(len(siblings))
        siblings.append(index)
        return index

    def _siblings(self, index: int) -> List[int]:
        parent_index = self._parents[index]
        return self._roots if parent_index is None else self._children[parent_index]

    def _check(self, ref: NodeRef) -> int:
        if not self.owns(ref):
            raise ValueError("Node reference does not belong to this tree store")
        return ref.index

    def _ref(self, index: int) -> NodeRef:
        return NodeRef(self._store_id, index)
