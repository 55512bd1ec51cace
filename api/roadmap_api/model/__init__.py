"""
Road map domain model (Node, Edge, GraphStore, PathResult).
"""

from .node import Node
from .edge import Edge
from .graph import GraphStore
from .path import PathResult
from .render_view import RenderView
from .errors import (
    GraphError,
    SelfLoopError,
    DuplicateEdgeError,
    InvalidWeightError,
    UnknownEntityError,
    StateFormatError,
)
from .weights import is_finite_number, is_valid_weight, parse_weight

__all__ = [
    "Node",
    "Edge",
    "GraphStore",
    "PathResult",
    "RenderView",
    "GraphError",
    "SelfLoopError",
    "DuplicateEdgeError",
    "InvalidWeightError",
    "UnknownEntityError",
    "StateFormatError",
    "is_finite_number",
    "is_valid_weight",
    "parse_weight",
]
