"""Service-level plugin contracts for roadmap_api."""

from .storage_plugin import StoragePlugin
from .renderer_plugin import RendererPlugin
from .input_plugin import InputPlugin, SilentInput

__all__ = ["StoragePlugin", "RendererPlugin", "InputPlugin", "SilentInput"]
