import math
from typing import List, Optional


class PathResult:
    """Distance and ordered road ids of one shortest-path computation."""

    def __init__(self, distance: float = math.inf, edges: Optional[List[int]] = None):
        self.distance = distance
        self.edges = list(edges or [])

    @property
    def found(self) -> bool:
        return math.isfinite(self.distance)

    @property
    def edge_ids(self) -> set:
        return set(self.edges)

    def to_dict(self) -> dict:
        # JSON has no infinity, an unreachable target is reported as null
        return {
            "found": self.found,
            "distance": self.distance if self.found else None,
            "edges": list(self.edges),
        }

    def __repr__(self) -> str:
        return f"PathResult(distance={self.distance!r}, edges={self.edges!r})"
