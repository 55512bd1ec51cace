import json
import logging
import os
from tempfile import NamedTemporaryFile
from typing import Any, Optional

from api.roadmap_api.services.storage_plugin import StoragePlugin

LOGGER = logging.getLogger(__name__)


class JsonStoragePlugin(StoragePlugin):
    # Keeps the {nodes, edges, nextId} record in one JSON file
    # Reading never raises: a missing or broken file means there is no saved map
    # Checking that the record is a valid map is left to GraphStore.from_record

    def __init__(self, file_path: str):
        self.file_path = self._resolve_path(file_path)

    @property
    def plugin_id(self) -> str:
        return "json"

    @property
    def display_name(self) -> str:
        return "JSON file"

    @staticmethod
    def _resolve_path(source: Any) -> str:
        if isinstance(source, os.PathLike):
            source = os.fspath(source)
        if isinstance(source, str) and source.strip():
            return source
        raise ValueError("Missing file path for JSON storage.")

    def save(self, record: dict) -> None:
        directory = os.path.dirname(os.path.abspath(self.file_path))
        temp_path: Optional[str] = None
        try:
            os.makedirs(directory, exist_ok=True)
            # Write next to the target and swap, so a crash never leaves half a file
            with NamedTemporaryFile("w", encoding="utf-8", dir=directory,
                                    suffix=".tmp", delete=False) as temp_file:
                temp_path = temp_file.name
                json.dump(record, temp_file, indent=2)
            os.replace(temp_path, self.file_path)
            temp_path = None
        except (OSError, TypeError, ValueError) as exc:
            LOGGER.warning("Save failed for %s: %s", self.file_path, exc)
        finally:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass

    def load(self) -> Optional[dict]:
        if not os.path.exists(self.file_path):
            return None

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                raw_json = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            LOGGER.warning("Load failed for %s: %s", self.file_path, exc)
            return None

        if not isinstance(raw_json, dict):
            LOGGER.warning("Load failed for %s: top level is not an object", self.file_path)
            return None

        return raw_json
