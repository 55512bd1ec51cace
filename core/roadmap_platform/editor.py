import logging
from typing import Optional, Tuple

from api.roadmap_api.model import GraphError, GraphStore, RenderView, parse_weight
from api.roadmap_api.services import InputPlugin, RendererPlugin, SilentInput, StoragePlugin

from .actions import (
    CanvasClick,
    ClearAll,
    ClearPath,
    DeleteKey,
    DeleteSelected,
    DragEnd,
    DragMove,
    DragStart,
    EdgeClick,
    LoadSeed,
    Mode,
    NodeClick,
    ResetView,
    RunShortestPath,
    SetMode,
)
from .pathfinder import shortest_path
from .seed import SEED_RECORD

LOGGER = logging.getLogger(__name__)

DEFAULT_WEIGHT_TEXT = "10"
DELETE_KEYWORD = "delete"


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class EditorStateMachine:
    """
    Turns user actions into GraphStore mutations.

    Responsibilities:
    - Track the interaction mode (add / connect / select)
    - Track the selected city, the pending connect source and an active drag
    - Ask the input plugin for names, weights and confirmations
    - Save through the storage plugin and redraw through the renderer after
      every change
    """

    def __init__(
        self,
        graph: GraphStore,
        input_plugin: Optional[InputPlugin] = None,
        storage: Optional[StoragePlugin] = None,
        renderer: Optional[RendererPlugin] = None,
    ):
        self.graph = graph
        self.input = input_plugin or SilentInput()
        self.storage = storage
        self.renderer = renderer

        self.mode = Mode.ADD
        self.selected_node: Optional[int] = None
        self.pending_source: Optional[int] = None
        self.last_frame: Optional[str] = None

        # (node_id, offset_x, offset_y) while a drag is in progress
        self._drag: Optional[Tuple[int, float, float]] = None

        self._handlers = {
            SetMode: self._on_set_mode,
            CanvasClick: self._on_canvas_click,
            NodeClick: self._on_node_click,
            EdgeClick: self._on_edge_click,
            DragStart: self._on_drag_start,
            DragMove: self._on_drag_move,
            DragEnd: self._on_drag_end,
            DeleteSelected: self._on_delete_selected,
            DeleteKey: self._on_delete_key,
            RunShortestPath: self._on_run_shortest_path,
            ClearPath: self._on_clear_path,
            ResetView: self._on_reset_view,
            ClearAll: self._on_clear_all,
            LoadSeed: self._on_load_seed,
        }

    # ==========================================================
    # DISPATCH
    # ==========================================================

    def dispatch(self, action) -> None:
        handler = self._handlers.get(type(action))
        if handler is None:
            raise ValueError(f"Unsupported action: {action!r}")

        LOGGER.debug("Dispatching %r in %s mode", action, self.mode.value)
        handler(action)

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    def snapshot(self) -> RenderView:
        path = self.graph.path_result
        return RenderView(
            nodes=list(self.graph.nodes),
            edges=list(self.graph.edges),
            path_edges=path.edge_ids if path is not None else set(),
            selected_node=self.selected_node,
            pending_source=self.pending_source,
            mode=self.mode.value,
            stats=self.graph.stats_text(),
        )

    # ==========================================================
    # SAVE / RENDER
    # ==========================================================

    def save(self) -> None:
        if self.storage is not None:
            self.storage.save(self.graph.to_record())

    def render(self) -> None:
        if self.renderer is not None:
            self.last_frame = self.renderer.render(self.snapshot())

    def _touch_save_render(self) -> None:
        self.save()
        self.render()

    def _clear_selection(self) -> None:
        self.selected_node = None
        self.pending_source = None

    # ==========================================================
    # MODE
    # ==========================================================

    def _on_set_mode(self, action: SetMode) -> None:
        self.mode = Mode(action.mode)
        self._clear_selection()
        self._drag = None
        self.render()

    def _on_reset_view(self, action: ResetView) -> None:
        self._clear_selection()
        self.render()

    # ==========================================================
    # CLICKS
    # ==========================================================

    def _on_canvas_click(self, action: CanvasClick) -> None:
        if self.mode is not Mode.ADD:
            return

        name = self.input.prompt(
            "City name (e.g., A, B, Yangon)...",
            f"City {self.graph.next_id}",
        )
        if name is None or not name.strip():
            return

        self.graph.add_node(name.strip(), action.x, action.y)
        self._touch_save_render()

    def _on_node_click(self, action: NodeClick) -> None:
        node_id = action.node_id
        if self.graph.get_node(node_id) is None:
            return

        if self.mode is Mode.CONNECT:
            self._connect_click(node_id)
            return

        self.selected_node = node_id
        self.render()

    def _connect_click(self, node_id: int) -> None:
        source = self.pending_source

        if source is None:
            self.pending_source = node_id
            self.selected_node = node_id
            self.render()
            return

        # Source stays selected, the user has to pick a different city
        if source == node_id:
            return

        if self.graph.edge_between(source, node_id) is not None:
            self.input.alert("Road already exists between these cities.")
            self._clear_selection()
            self.render()
            return

        weight = parse_weight(self.input.prompt("Road weight (distance/cost):", DEFAULT_WEIGHT_TEXT))
        if weight is not None:
            try:
                self.graph.add_edge(source, node_id, weight)
            except GraphError as exc:
                LOGGER.warning("Road rejected: %s", exc)
                self.input.alert(str(exc))

        # An invalid weight aborts the whole connect gesture
        self._clear_selection()
        self._touch_save_render()

    def _on_edge_click(self, action: EdgeClick) -> None:
        edge = self.graph.get_edge(action.edge_id)
        if edge is None:
            return

        a = self._node_name(edge.a, "A")
        b = self._node_name(edge.b, "B")
        choice = self.input.prompt(
            f"Edit road {a} - {b}\nEnter new weight, or type \"{DELETE_KEYWORD}\" to remove:",
            format_number(edge.weight),
        )
        if choice is None:
            return

        if choice.strip().lower() == DELETE_KEYWORD:
            self.graph.remove_edge(edge.edge_id)
        else:
            weight = parse_weight(choice)
            if weight is not None:
                self.graph.set_edge_weight(edge.edge_id, weight)

        self._touch_save_render()

    # ==========================================================
    # DRAG
    # ==========================================================

    def _on_drag_start(self, action: DragStart) -> None:
        if self.mode is not Mode.SELECT:
            return

        node = self.graph.get_node(action.node_id)
        if node is None:
            return

        self._drag = (node.node_id, node.x - action.x, node.y - action.y)

    def _on_drag_move(self, action: DragMove) -> None:
        if self._drag is None:
            return

        node_id, offset_x, offset_y = self._drag
        self.graph.update_node_position(node_id, action.x + offset_x, action.y + offset_y)
        self.render()

    def _on_drag_end(self, action: DragEnd) -> None:
        if self._drag is None:
            return

        self._drag = None
        self.save()

    # ==========================================================
    # DELETION
    # ==========================================================

    def _on_delete_selected(self, action: DeleteSelected) -> None:
        if self.selected_node is None:
            self.input.alert("Select a city first (Edit/Move mode), then delete.")
            return

        node_id = self.selected_node
        name = self._node_name(node_id, str(node_id))
        road_count = len(self.graph.incident_edges(node_id))
        if self.input.confirm(f"Delete city \"{name}\" and its {road_count} road(s)?"):
            self._remove_node(node_id)

    def _on_delete_key(self, action: DeleteKey) -> None:
        if self.mode is not Mode.SELECT or self.selected_node is None:
            return

        node = self.graph.get_node(self.selected_node)
        if node is None:
            return

        if self.input.confirm(f"Delete city \"{node.name}\" and its connected roads?"):
            self._remove_node(node.node_id)

    def _remove_node(self, node_id: int) -> None:
        self.graph.remove_node(node_id)
        if self.selected_node == node_id:
            self.selected_node = None
        if self.pending_source == node_id:
            self.pending_source = None
        if self._drag is not None and self._drag[0] == node_id:
            self._drag = None
        self._touch_save_render()

    # ==========================================================
    # SHORTEST PATH
    # ==========================================================

    def _on_run_shortest_path(self, action: RunShortestPath) -> None:
        start, end = action.start_id, action.end_id
        if (
            start is None
            or end is None
            or start == end
            or self.graph.get_node(start) is None
            or self.graph.get_node(end) is None
        ):
            self.input.alert("Choose distinct Start and End cities.")
            return

        result = shortest_path(self.graph, start, end)
        self.graph.path_result = result
        self.render()

        if result.found:
            self.input.alert(f"Shortest distance: {format_number(result.distance)}")
        else:
            self.input.alert("No path exists between selected cities.")

    def _on_clear_path(self, action: ClearPath) -> None:
        self.graph.path_result = None
        self.render()

    # ==========================================================
    # WHOLE MAP
    # ==========================================================

    def _on_clear_all(self, action: ClearAll) -> None:
        if not self.input.confirm("Clear all cities and roads?"):
            return

        self.graph.clear()
        self._clear_selection()
        self._drag = None
        self._touch_save_render()

    def _on_load_seed(self, action: LoadSeed) -> None:
        self.graph.replace(GraphStore.from_record(SEED_RECORD))
        self._clear_selection()
        self._drag = None
        self._touch_save_render()

    def _node_name(self, node_id: int, fallback: str) -> str:
        node = self.graph.get_node(node_id)
        return node.name if node is not None else fallback
