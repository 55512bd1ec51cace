from .plugin import JsonStoragePlugin

__all__ = ["JsonStoragePlugin"]
