import math
from typing import Dict

from api.roadmap_api.model import GraphStore, PathResult


def build_adjacency(graph: GraphStore) -> Dict[int, list]:
    """Map every city id to a list of (neighbor_id, weight, edge_id)."""
    adjacency = {node.node_id: [] for node in graph.nodes}
    for edge in graph.edges:
        adjacency[edge.a].append((edge.b, edge.weight, edge.edge_id))
        adjacency[edge.b].append((edge.a, edge.weight, edge.edge_id))
    return adjacency


def shortest_path(graph: GraphStore, start_id: int, end_id: int) -> PathResult:
    """
    Dijkstra over the undirected road graph.

    Extract-min is a linear scan over the unsettled cities in the order they
    appear in the graph, the first strictly smallest distance wins. That is
    O(V^2), fine for maps drawn by hand. start_id and end_id must be existing,
    distinct cities; checking that is up to the caller.
    """
    adjacency = build_adjacency(graph)
    distance = {node.node_id: math.inf for node in graph.nodes}
    previous = {}
    previous_edge = {}
    distance[start_id] = 0

    # dict keeps insertion order, which fixes how ties are broken
    unsettled = dict.fromkeys(node.node_id for node in graph.nodes)

    while unsettled:
        current = None
        best = math.inf
        for node_id in unsettled:
            if distance[node_id] < best:
                best = distance[node_id]
                current = node_id

        # Everything left is unreachable
        if current is None:
            break

        del unsettled[current]
        if current == end_id:
            break

        for neighbor, weight, edge_id in adjacency[current]:
            if neighbor not in unsettled:
                continue
            candidate = distance[current] + weight
            if candidate < distance[neighbor]:
                distance[neighbor] = candidate
                previous[neighbor] = current
                previous_edge[neighbor] = edge_id

    if math.isinf(distance.get(end_id, math.inf)):
        return PathResult(math.inf, [])

    used_edges = []
    cursor = end_id
    while cursor != start_id:
        used_edges.append(previous_edge[cursor])
        cursor = previous[cursor]
    used_edges.reverse()

    return PathResult(distance[end_id], used_edges)
