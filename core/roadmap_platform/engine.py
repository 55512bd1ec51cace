import json
import logging
from typing import Any, Optional

from api.roadmap_api.model import GraphStore, StateFormatError
from api.roadmap_api.services import InputPlugin, RendererPlugin, StoragePlugin

from .editor import EditorStateMachine

LOGGER = logging.getLogger(__name__)

EXPORT_FILENAME = "city-road-map.json"


class MapEngine:
    """
    High-level orchestration layer.

    Responsibilities:
    - Own the GraphStore and the editor driving it
    - Restore state from the storage plugin on boot
    - Run actions with a per-call input plugin
    - Produce the export document and state payloads
    """

    def __init__(
        self,
        storage: Optional[StoragePlugin] = None,
        renderer: Optional[RendererPlugin] = None,
        input_plugin: Optional[InputPlugin] = None,
    ):
        self.graph = GraphStore()
        self.editor = EditorStateMachine(
            self.graph,
            input_plugin=input_plugin,
            storage=storage,
            renderer=renderer,
        )

    # ==========================================================
    # LIFECYCLE
    # ==========================================================

    def boot(self) -> bool:
        """Load the stored map if there is a usable one, then draw. Returns True on restore."""
        restored = False
        storage = self.editor.storage

        if storage is not None:
            record = storage.load()
            if record is not None:
                try:
                    self.graph.replace(GraphStore.from_record(record))
                    restored = True
                except StateFormatError as exc:
                    LOGGER.warning("Stored map ignored: %s", exc)

        self.editor.render()
        return restored

    def import_record(self, record: Any) -> None:
        """Replace the map with a record. Raises StateFormatError and keeps the old map on failure."""
        self.graph.replace(GraphStore.from_record(record))
        self.editor.selected_node = None
        self.editor.pending_source = None
        self.editor.save()
        self.editor.render()

    # ==========================================================
    # ACTIONS
    # ==========================================================

    def dispatch(self, action, input_plugin: Optional[InputPlugin] = None) -> None:
        if input_plugin is None:
            self.editor.dispatch(action)
            return

        previous = self.editor.input
        self.editor.input = input_plugin
        try:
            self.editor.dispatch(action)
        finally:
            self.editor.input = previous

    # ==========================================================
    # OUTPUT
    # ==========================================================

    def export_json(self) -> str:
        return json.dumps(self.graph.to_record(), indent=2)

    def state(self) -> dict:
        path = self.graph.path_result
        return {
            "graph": self.graph.to_record(),
            "mode": self.editor.mode.value,
            "selected_node": self.editor.selected_node,
            "pending_source": self.editor.pending_source,
            "path": path.to_dict() if path is not None else None,
            "stats": self.graph.stats_text(),
        }
