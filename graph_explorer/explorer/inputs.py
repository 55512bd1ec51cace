from typing import List, Optional

from api.roadmap_api.services import InputPlugin


class RequestInput(InputPlugin):
    """
    Answers editor prompts from values sent along with the action.

    Prompts consume "answers" in order; once they run out, a prompt counts as
    cancelled. Alerts are collected so the view can return them.
    """

    def __init__(self, answers: Optional[List[object]] = None, confirmed: bool = False):
        self._answers = list(answers or [])
        self.confirmed = confirmed
        self.alerts: List[str] = []

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        if not self._answers:
            return None
        answer = self._answers.pop(0)
        return None if answer is None else str(answer)

    def confirm(self, message: str) -> bool:
        return self.confirmed

    def alert(self, message: str) -> None:
        self.alerts.append(message)
