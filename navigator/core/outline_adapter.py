"""
Outline Adaptation Component.

Converts a document-supplied outline into navigable menu nodes.
"""

import logging
from typing import Iterable, List

from core.exceptions import DestinationResolutionFailure
from core.models import MenuNode, OutlineNode

logger = logging.getLogger(__name__)


class OutlineAdapter:
    """
    Builds a menu tree isomorphic to the native outline.

    Each node's destination is resolved on its own; a node that cannot be
    resolved keeps its place in the tree without a target.
    """

    def __init__(self, document):
        self.document = document

    def build(self, nodes: Iterable[OutlineNode]) -> List[MenuNode]:
        """
        Convert outline nodes depth-first.

        Args:
            nodes: Top-level outline nodes

        Returns:
            Menu nodes with physical page targets
        """
        return [self._convert(node) for node in nodes]

    def _convert(self, node: OutlineNode) -> MenuNode:
        page = None
        if node.destination is not None:
            try:
                page = self.document.resolve_destination(node.destination)
            except DestinationResolutionFailure as e:
                logger.warning("Outline entry %r has no target: %s", node.title, e)

        return MenuNode(
            title=node.title,
            page=page,
            page_kind="physical",
            children=[self._convert(child) for child in node.children]
        )

    @staticmethod
    def count_unresolved(menu: Iterable[MenuNode]) -> int:
        """Count nodes without a target anywhere in the tree."""
        total = 0
        for node in menu:
            if not node.navigable:
                total += 1
            total += OutlineAdapter.count_unresolved(node.children)
        return total
