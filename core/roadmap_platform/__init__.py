"""Editing, shortest-path and orchestration for the road map platform."""

from .actions import Mode, action_from_dict
from .editor import EditorStateMachine
from .engine import MapEngine
from .pathfinder import shortest_path

__all__ = ["Mode", "action_from_dict", "EditorStateMachine", "MapEngine", "shortest_path"]
