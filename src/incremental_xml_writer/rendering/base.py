"""Common base for tree renderers."""

from abc import ABC, abstractmethod

from incremental_xml_writer.tree import TreeStore


class TreeRenderer(ABC):
    """Turns the forest of a tree store into text.

    Renderers hold no buffer between calls: every ``render`` builds and
    returns its own string, so a renderer may be reused freely.
    """

    def __init__(self, store: TreeStore) -> None:
        self.store = store

    @abstractmethod
    def render(self) -> str:
        """Render the whole forest."""
