from typing import List, Optional, Set

from .edge import Edge
from .node import Node


class RenderView:
    """
    Everything a renderer needs to draw the map.

    The renderer gets copies of the node and edge lists, the ids of roads on
    the current shortest path and the current selection. Nothing else is
    exposed for drawing.
    """

    def __init__(
        self,
        nodes: List[Node],
        edges: List[Edge],
        path_edges: Set[int],
        selected_node: Optional[int] = None,
        pending_source: Optional[int] = None,
        mode: str = "add",
        stats: str = "",
    ):
        self.nodes = nodes
        self.edges = edges
        self.path_edges = path_edges
        self.selected_node = selected_node
        self.pending_source = pending_source
        self.mode = mode
        self.stats = stats

    def node_by_id(self, node_id: int) -> Optional[Node]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "path_edges": sorted(self.path_edges),
            "selected_node": self.selected_node,
            "pending_source": self.pending_source,
            "stats": self.stats,
        }
