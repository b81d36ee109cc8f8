"""Indented, newline-aware rendering of a document forest.

Line breaks are decided purely from tree adjacency: markup fragments (tags,
comments, CDATA sections) are separated by newlines, while raw text runs
stay inline with the tags around them. The rules are:

* after a node's opening fragment, break if its first child is markup; a
  node without children breaks if it is a root, if it is the last of its
  siblings, or if its next sibling is markup;
* after a closing tag, break if the node is a root, the last of its
  siblings, or followed by a markup sibling.

Markup fragments are indented by ``indent * depth``; raw text is not.
"""

from typing import List

from incremental_xml_writer.shared import DEFAULT_INDENT
from incremental_xml_writer.tree import NodeRef, TreeStore, WalkEvent

from .base import TreeRenderer


class PrettyRenderer(TreeRenderer):
    """Render a forest with one markup fragment per line."""

    def __init__(self, store: TreeStore, indent: str = DEFAULT_INDENT) -> None:
        super().__init__(store)
        self.indent = indent

    def render(self) -> str:
        parts: List[str] = []
        for event, ref in self.store.walk():
            if event is WalkEvent.ENTER:
                self._enter(ref, parts)
            else:
                self._exit(ref, parts)
        return "".join(parts)

    def _enter(self, ref: NodeRef, parts: List[str]) -> None:
        node = self.store.node(ref)
        leaf = self.store.is_leaf(ref)

        if node.is_markup:
            parts.append(self.indent * self.store.depth(ref))
        parts.append(node.open_fragment(leaf))

        if leaf:
            breaks = self._followed_by_markup(ref)
        else:
            breaks = self.store.node(self.store.child_at(ref, 0)).is_markup
        if breaks:
            parts.append("\n")

    def _exit(self, ref: NodeRef, parts: List[str]) -> None:
        if self.store.is_leaf(ref):
            return  # the opening fragment was complete

        node = self.store.node(ref)
        parts.append(self.indent * self.store.depth(ref))
        parts.append(node.close_fragment(False))
        if self._followed_by_markup(ref):
            parts.append("\n")

    def _followed_by_markup(self, ref: NodeRef) -> bool:
        if self.store.is_root(ref):
            return True
        sibling = self.store.next_sibling(ref)
        if sibling is None:
            # the parent's closing tag comes next
            return True
        return self.store.node(sibling).is_markup
