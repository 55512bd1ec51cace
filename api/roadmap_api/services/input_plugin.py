"""Input plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod


class InputPlugin(ABC):
    """Contract for the prompts, confirmations and alerts the editor needs."""

    @abstractmethod
    def prompt(self, message: str, default: str = "") -> str | None:
        """Ask for text. Return None when the user cancels."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a message to the user."""


class SilentInput(InputPlugin):
    """Cancels every prompt and declines every confirmation."""

    def prompt(self, message: str, default: str = "") -> str | None:
        return None

    def confirm(self, message: str) -> bool:
        return False

    def alert(self, message: str) -> None:
        pass
