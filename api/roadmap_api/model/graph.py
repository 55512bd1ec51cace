import math
from typing import Any, List, Optional, Tuple

from .edge import Edge
from .errors import (
    DuplicateEdgeError,
    InvalidWeightError,
    SelfLoopError,
    StateFormatError,
    UnknownEntityError,
)
from .node import Node
from .path import PathResult
from .weights import is_finite_number, is_valid_weight


class GraphStore:
    """
    Owns the cities and roads of one map.

    Nodes and edges draw their ids from the same counter, so an id names at
    most one entity. Every mutation either succeeds completely or raises a
    GraphError and leaves the store untouched.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.next_id = 1
        self.path_result: Optional[PathResult] = None

    def _allocate_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    # -----------------
    # NODE OPERATIONS
    # -----------------

    def add_node(self, name: str, x: float = 0.0, y: float = 0.0) -> int:
        node = Node(self._allocate_id(), name, x, y)
        self.nodes.append(node)
        return node.node_id

    def get_node(self, node_id: int) -> Optional[Node]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def remove_node(self, node_id: int) -> None:
        if self.get_node(node_id) is None:
            return

        self.edges = [e for e in self.edges if not e.touches(node_id)]
        self.nodes = [n for n in self.nodes if n.node_id != node_id]
        self.path_result = None

    def update_node_position(self, node_id: int, x: float, y: float) -> None:
        node = self.get_node(node_id)
        if node is not None:
            node.move_to(x, y)

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, a: int, b: int, weight: float) -> int:
        if a == b:
            raise SelfLoopError(a)

        for endpoint in (a, b):
            if self.get_node(endpoint) is None:
                raise UnknownEntityError(endpoint)

        if self.edge_between(a, b) is not None:
            raise DuplicateEdgeError(a, b)

        if not is_valid_weight(weight):
            raise InvalidWeightError(weight)

        edge = Edge(self._allocate_id(), a, b, weight)
        self.edges.append(edge)
        return edge.edge_id

    def get_edge(self, edge_id: int) -> Optional[Edge]:
        for edge in self.edges:
            if edge.edge_id == edge_id:
                return edge
        return None

    def remove_edge(self, edge_id: int) -> None:
        if self.get_edge(edge_id) is None:
            return

        self.edges = [e for e in self.edges if e.edge_id != edge_id]
        # Whole result goes, not just the one road
        self.path_result = None

    def set_edge_weight(self, edge_id: int, weight: float) -> None:
        if not is_valid_weight(weight):
            raise InvalidWeightError(weight)

        edge = self.get_edge(edge_id)
        if edge is not None:
            edge.weight = weight

    # -----------------
    # QUERIES
    # -----------------

    def edge_between(self, a: int, b: int) -> Optional[Edge]:
        for edge in self.edges:
            if edge.connects(a, b):
                return edge
        return None

    def incident_edges(self, node_id: int) -> List[Edge]:
        return [edge for edge in self.edges if edge.touches(node_id)]

    def neighbors(self, node_id: int) -> List[Tuple[int, int, float]]:
        """Return (neighbor_id, edge_id, weight) for every road at node_id."""
        return [
            (edge.other(node_id), edge.edge_id, edge.weight)
            for edge in self.incident_edges(node_id)
        ]

    def stats_text(self) -> str:
        return f"{len(self.nodes)} cities, {len(self.edges)} roads"

    # -----------------
    # WHOLE-MAP OPERATIONS
    # -----------------

    def clear(self) -> None:
        self.nodes = []
        self.edges = []
        self.next_id = 1
        self.path_result = None

    def replace(self, other: "GraphStore") -> None:
        self.nodes = other.nodes
        self.edges = other.edges
        self.next_id = other.next_id
        self.path_result = None

    def to_record(self) -> dict:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "nextId": self.next_id,
        }

    @classmethod
    def from_record(cls, record: Any) -> "GraphStore":
        """
        Build a store from a persisted {nodes, edges, nextId} record.

        Raises StateFormatError when the record is not a mapping, when nodes
        or edges are not lists, or when any entry breaks the map invariants.
        A missing, zero or non-numeric nextId is recomputed from the ids.
        """
        if not isinstance(record, dict):
            raise StateFormatError("Record must be an object.")

        nodes_data = record.get("nodes")
        edges_data = record.get("edges")
        if not isinstance(nodes_data, list) or not isinstance(edges_data, list):
            raise StateFormatError("Record 'nodes' and 'edges' must be lists.")

        store = cls()
        seen_ids = set()

        for node_dict in nodes_data:
            if not isinstance(node_dict, dict):
                raise StateFormatError(f"Invalid city entry: {node_dict!r}")

            node_id = _require_int(node_dict.get("id"), "city id")
            name = node_dict.get("name")
            if not isinstance(name, str) or not name:
                raise StateFormatError(f"City '{node_id}' has no name.")

            x = _require_number(node_dict.get("x", 0), "city x")
            y = _require_number(node_dict.get("y", 0), "city y")

            if node_id in seen_ids:
                raise StateFormatError(f"Duplicate id '{node_id}'.")
            seen_ids.add(node_id)
            store.nodes.append(Node(node_id, name, x, y))

        for edge_dict in edges_data:
            if not isinstance(edge_dict, dict):
                raise StateFormatError(f"Invalid road entry: {edge_dict!r}")

            edge_id = _require_int(edge_dict.get("id"), "road id")
            a = _require_int(edge_dict.get("a"), "road endpoint")
            b = _require_int(edge_dict.get("b"), "road endpoint")
            weight = edge_dict.get("w")

            if edge_id in seen_ids:
                raise StateFormatError(f"Duplicate id '{edge_id}'.")
            if a == b:
                raise StateFormatError(f"Road '{edge_id}' is a self-loop.")
            if store.get_node(a) is None or store.get_node(b) is None:
                raise StateFormatError(f"Road '{edge_id}' references a missing city.")
            if store.edge_between(a, b) is not None:
                raise StateFormatError(f"Road '{edge_id}' duplicates an existing road.")
            if not is_valid_weight(weight):
                raise StateFormatError(f"Road '{edge_id}' has invalid weight {weight!r}.")

            seen_ids.add(edge_id)
            store.edges.append(Edge(edge_id, a, b, weight))

        lowest_free = max(seen_ids, default=0) + 1
        stored_next = _coerce_next_id(record.get("nextId"))
        # A stale counter would hand out ids that are already taken
        store.next_id = max(stored_next or lowest_free, lowest_free)
        return store


def _require_int(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise StateFormatError(f"Invalid {what}: {value!r}")
    return value


def _require_number(value: Any, what: str) -> float:
    if not is_finite_number(value):
        raise StateFormatError(f"Invalid {what}: {value!r}")
    return value


def _coerce_next_id(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None

    if not math.isfinite(number) or number < 1:
        return None
    return int(number)
