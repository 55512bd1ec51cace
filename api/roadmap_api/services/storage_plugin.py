"""Storage plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StoragePlugin(ABC):
    """Contract for plugins that keep a map record between sessions."""

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return a unique, stable plugin identifier."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable plugin name for UI and logs."""

    @abstractmethod
    def save(self, record: dict[str, Any]) -> None:
        """Persist a {nodes, edges, nextId} record. Failures are logged, not raised."""

    @abstractmethod
    def load(self) -> dict[str, Any] | None:
        """Return the stored record, or None when no usable state exists."""
