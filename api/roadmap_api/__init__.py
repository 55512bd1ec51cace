"""Public API exports for roadmap_api plugin contracts."""

from .model import GraphStore, Node, Edge, PathResult, RenderView
from .services import StoragePlugin, RendererPlugin, InputPlugin

__all__ = [
    "GraphStore",
    "Node",
    "Edge",
    "PathResult",
    "RenderView",
    "StoragePlugin",
    "RendererPlugin",
    "InputPlugin",
]
