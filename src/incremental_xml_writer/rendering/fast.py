"""Flat rendering of a document forest: no indentation, no newlines, no comments."""

from typing import List

from incremental_xml_writer.tree import CommentNode, WalkEvent

from .base import TreeRenderer


class FastRenderer(TreeRenderer):
    """Render a forest as one line, dropping comment nodes."""

    def render(self) -> str:
        parts: List[str] = []
        for event, ref in self.store.walk():
            node = self.store.node(ref)
            if isinstance(node, CommentNode):
                continue
            leaf = self.store.is_leaf(ref)
            if event is WalkEvent.ENTER:
                parts.append(node.open_fragment(leaf))
            else:
                parts.append(node.close_fragment(leaf))
        return "".join(parts)
