"""
User gestures as plain values.

The editor consumes these instead of UI callbacks, so the same state machine
runs behind a web view, a test or a script.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type


class Mode(str, Enum):
    ADD = "add"
    CONNECT = "connect"
    SELECT = "select"


@dataclass(frozen=True)
class SetMode:
    mode: Mode


@dataclass(frozen=True)
class CanvasClick:
    x: float
    y: float


@dataclass(frozen=True)
class NodeClick:
    node_id: int


@dataclass(frozen=True)
class EdgeClick:
    edge_id: int


@dataclass(frozen=True)
class DragStart:
    node_id: int
    x: float
    y: float


@dataclass(frozen=True)
class DragMove:
    x: float
    y: float


@dataclass(frozen=True)
class DragEnd:
    pass


@dataclass(frozen=True)
class DeleteSelected:
    pass


@dataclass(frozen=True)
class DeleteKey:
    pass


@dataclass(frozen=True)
class RunShortestPath:
    start_id: Optional[int]
    end_id: Optional[int]


@dataclass(frozen=True)
class ClearPath:
    pass


@dataclass(frozen=True)
class ResetView:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class LoadSeed:
    pass


ACTION_TYPES: Dict[str, Type] = {
    "set_mode": SetMode,
    "canvas_click": CanvasClick,
    "node_click": NodeClick,
    "edge_click": EdgeClick,
    "drag_start": DragStart,
    "drag_move": DragMove,
    "drag_end": DragEnd,
    "delete_selected": DeleteSelected,
    "delete_key": DeleteKey,
    "run_shortest_path": RunShortestPath,
    "clear_path": ClearPath,
    "reset_view": ResetView,
    "clear_all": ClearAll,
    "load_seed": LoadSeed,
}


def action_from_dict(payload: Dict[str, Any]):
    """
    Build an action from a JSON payload such as {"type": "node_click", "node_id": 3}.

    Raises ValueError for unknown types or missing/invalid fields.
    """
    if not isinstance(payload, dict):
        raise ValueError("Action must be an object.")

    action_type = payload.get("type")
    action_cls = ACTION_TYPES.get(action_type)
    if action_cls is None:
        raise ValueError(f"Unsupported action type: {action_type!r}")

    if action_cls is SetMode:
        try:
            return SetMode(Mode(payload.get("mode")))
        except ValueError:
            raise ValueError(f"Unsupported mode: {payload.get('mode')!r}") from None

    if action_cls is RunShortestPath:
        return RunShortestPath(
            _optional_int(payload.get("start_id")),
            _optional_int(payload.get("end_id")),
        )

    fields = {}
    for name in action_cls.__dataclass_fields__:
        if name not in payload:
            raise ValueError(f"Action '{action_type}' requires '{name}'.")
        value = payload[name]
        if name.endswith("_id"):
            fields[name] = _required_int(value, name)
        else:
            fields[name] = _required_float(value, name)
    return action_cls(**fields)


def _required_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be an integer.")
    # 3.7 must not quietly become city 3
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"'{name}' must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"'{name}' must be an integer.") from None


def _required_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a number.")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"'{name}' must be a number.") from None
    # Saved maps reject NaN and infinite positions, so never store one
    if not math.isfinite(number):
        raise ValueError(f"'{name}' must be a finite number.")
    return number


def _optional_int(value: Any) -> Optional[int]:
    # Empty dropdown selection arrives as "" or null
    if value in (None, ""):
        return None
    return _required_int(value, "id")
