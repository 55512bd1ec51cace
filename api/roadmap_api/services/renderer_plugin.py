"""Renderer plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from ..model import RenderView


class RendererPlugin(ABC):
    """Contract for plugins that draw a map snapshot."""

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return a unique, stable plugin identifier."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable plugin name for UI and logs."""

    @abstractmethod
    def render(self, view: "RenderView", **options: Any) -> str:
        """Render the provided snapshot and return the output document."""
